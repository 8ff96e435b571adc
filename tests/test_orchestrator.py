"""
Test cases for per-frame routing with synthetic landmark sequences.
"""
import unittest
import sys
from pathlib import Path

import numpy as np

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from handcanvas.orchestrator import FrameOrchestrator
from handcanvas.controls import ControlPanel, NoAction, Select, Activate
from handcanvas.surface_mock import MockSurface
from handcanvas.types import Gesture, Modes
from handcanvas.config import load_config
from tests.synthetic import point, palm, two_fingers, pinch, fist


class TestFrameOrchestrator(unittest.TestCase):
    """Test the gesture-to-action pipeline end to end."""

    def setUp(self):
        """Set up test configuration, panel and a recording surface."""
        self.cfg = load_config()
        self.surface = MockSurface()
        self.panel = ControlPanel(self.cfg, on_clear=self.surface.clear)
        self.orchestrator = FrameOrchestrator(self.cfg, self.panel, self.surface,
                                              rng=np.random.default_rng(0))
        self.width = self.cfg.display.canvas_width
        self.height = self.cfg.display.canvas_height
        self.panel_y = 0.05  # normalized y inside the control band

    def frame(self, landmarks, t, modes=None):
        return self.orchestrator.process_frame(landmarks, modes or self.panel.modes(), t)

    def test_no_hand(self):
        """Test the no-hand status and that nothing is routed."""
        result = self.frame(None, 0.0)
        self.assertIsNone(result.gesture)
        self.assertIsNone(result.region)
        self.assertEqual(result.status, "No hand detected")
        self.assertEqual(self.surface.calls, [])

    def test_point_draws_on_canvas(self):
        """Test that pointing on the canvas strokes segments."""
        self.frame(point((0.2, 0.5)), 0.0)
        result = self.frame(point((0.25, 0.5)), 0.033)

        self.assertEqual(result.gesture, Gesture.POINT)
        self.assertEqual(result.region, "canvas")
        self.assertEqual(self.surface.names(), ["stroke_segment"])
        _, start, end, color, width, _, _ = self.surface.calls[0]
        self.assertAlmostEqual(start[0], 0.2 * self.width)
        self.assertAlmostEqual(end[0], 0.25 * self.width)
        self.assertEqual(color, "#000000")
        self.assertEqual(width, 5)
        self.assertEqual(result.status, "Drawing mode: ON (Free draw)")

    def test_hand_loss_starts_new_stroke(self):
        """Test that losing the hand never joins pre- and post-loss points."""
        self.frame(point((0.2, 0.5)), 0.0)
        self.frame(point((0.25, 0.5)), 0.033)
        self.frame(None, 0.066)
        self.frame(point((0.7, 0.7)), 0.1)
        self.assertEqual(len(self.surface.calls), 1)

        self.frame(point((0.72, 0.7)), 0.133)
        self.assertEqual(len(self.surface.calls), 2)
        _, start, _, _, _, _, _ = self.surface.calls[1]
        self.assertAlmostEqual(start[0], 0.7 * self.width)

    def test_incomplete_frame(self):
        """Test that a frame with too few landmarks reports Unknown without raising."""
        self.frame(point((0.2, 0.5)), 0.0)
        result = self.frame([(0.5, 0.5, 0.0)] * 5, 0.033)
        self.assertEqual(result.gesture, Gesture.UNKNOWN)
        self.assertIsNone(result.region)
        self.assertIsNone(result.point)
        self.assertEqual(result.status, "Gesture: unknown")
        self.assertFalse(self.orchestrator.drawing.active)

        self.frame(point((0.3, 0.5)), 0.066)
        self.assertEqual(self.surface.calls, [])

    def test_other_gesture_breaks_stroke(self):
        """Test that a non-point gesture on the canvas ends the stroke and reports it."""
        self.frame(point((0.2, 0.5)), 0.0)
        result = self.frame(fist((0.2, 0.5)), 0.033)
        self.assertEqual(result.status, "Gesture: fist")
        self.assertEqual(result.region, "canvas")
        self.assertIsInstance(result.action, NoAction)
        self.frame(point((0.3, 0.5)), 0.066)
        self.assertEqual(self.surface.calls, [])

    def test_panel_band_never_draws(self):
        """Test that pointing inside the control band does not draw and ends the stroke."""
        self.frame(point((0.2, 0.5)), 0.0)
        result = self.frame(point((0.2, self.panel_y)), 0.033)
        self.assertEqual(result.region, "panel")
        self.assertEqual(result.commands, [])
        self.frame(point((0.3, 0.5)), 0.066)
        self.assertEqual(self.surface.calls, [])

    def test_palm_selects_in_panel(self):
        """Test selection through the full pipeline."""
        result = self.frame(palm((0.1, self.panel_y)), 0.0)
        self.assertEqual(result.action, Select(self.panel.start))
        self.assertEqual(result.status, "Selected: Start Camera")

    def test_palm_on_canvas_does_not_select(self):
        """Test that gestures below the band never reach the controls."""
        result = self.frame(palm((0.1, 0.6)), 0.0)
        self.assertEqual(result.region, "canvas")
        self.assertIsNone(self.orchestrator.router.selected)
        self.assertEqual(result.status, "Gesture: palm")

    def test_select_adjust_activate(self):
        """Test the two-step select then adjust/activate interaction."""
        self.frame(palm((0.4, self.panel_y)), 0.0)
        result = self.frame(pinch((0.2, self.panel_y)), 0.6)
        self.assertEqual(result.action, Activate(self.panel.clear))
        self.assertEqual(self.surface.names(), ["clear"])

        self.frame(palm((0.9, self.panel_y)), 1.2)
        result = self.frame(two_fingers((0.3, self.panel_y)), 1.8)
        self.assertEqual(result.status, "Adjusting: Shape = line")
        self.assertEqual(self.panel.modes().shape_mode, "line")

    def test_selection_cleared_on_hand_loss(self):
        """Test that losing the hand drops the selected control."""
        self.frame(palm((0.6, self.panel_y)), 0.0)
        self.frame(fist((0.5, 0.5)), 0.6)
        self.assertIs(self.orchestrator.router.selected, self.panel.color)
        self.frame(None, 0.7)
        self.assertIsNone(self.orchestrator.router.selected)

    def test_circle_preview(self):
        """Test that shape mode clears the surface and redraws the shape."""
        modes = Modes(drawing_mode="pen", shape_mode="circle", color="#ff0000", size=4)
        self.frame(point((0.3, 0.5)), 0.0, modes)
        result = self.frame(point((0.35, 0.5)), 0.033, modes)
        self.assertEqual(self.surface.names(), ["clear", "stroke_circle"])
        self.assertAlmostEqual(result.commands[1].radius, 0.05 * self.width)
        self.assertEqual(result.status, "Drawing mode: ON (circle)")

    def test_calibration_through_frames(self):
        """Test that holding a point near center corrects later positions."""
        tip = (0.49, 0.49)
        statuses = [self.frame(point(tip), t).status for t in (0.0, 1.05, 2.1)]
        self.assertEqual(statuses[0], "Calibrating... Hold position")
        self.assertEqual(statuses[-1], "Calibration complete - Drawing mode: ON")

        result = self.frame(point(tip), 2.2)
        self.assertAlmostEqual(result.point[0], self.width / 2)
        self.assertAlmostEqual(result.point[1], self.height / 2)
        self.assertAlmostEqual(result.offset[0], self.width / 2 - 0.49 * self.width)

    def test_reset(self):
        """Test that reset drops all session state."""
        for t in (0.0, 1.05, 2.1):
            self.frame(point((0.49, 0.49)), t)
        self.assertNotEqual(self.orchestrator.calibration.offset, (0.0, 0.0))

        self.frame(palm((0.6, self.panel_y)), 3.0)
        self.frame(point((0.5, 0.5)), 3.6)
        self.orchestrator.reset()
        self.assertIsNone(self.orchestrator.router.selected)
        self.assertFalse(self.orchestrator.drawing.active)
        self.assertIsNone(self.orchestrator.calibration.started)
        self.assertEqual(self.orchestrator.calibration.offset, (0.0, 0.0))
        self.assertIsNone(self.orchestrator.router.last_action_time)


if __name__ == '__main__':
    unittest.main()
