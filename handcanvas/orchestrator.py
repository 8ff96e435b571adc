"""
Per-frame routing of hand landmarks to drawing or to the control panel.
"""
import logging
from typing import Optional, Tuple

import numpy as np

from .types import Gesture, LandmarkFrame, Modes, RenderInstructions, SurfaceProto
from .config import Cfg
from .gestures import classify, INDEX_TIP, NUM_LANDMARKS
from .calibration import CalibrationTracker
from .drawing import DrawingStateMachine
from .controls import ControlPanel, ControlRouter, NoAction

logger = logging.getLogger(__name__)


class FrameOrchestrator:
    """
    Main frame processor that owns all per-session state.

    Each frame is sent either to the control router or to the drawing state
    machine, never both, depending on whether the pointer is inside the
    control panel band.
    """

    def __init__(self, cfg: Cfg, panel: ControlPanel, surface: SurfaceProto,
                 rng: Optional[np.random.Generator] = None):
        """Initialize the orchestrator with configuration and its collaborators."""
        self.cfg = cfg
        self.panel = panel
        self.surface = surface
        self.canvas_wh: Tuple[int, int] = (cfg.display.canvas_width, cfg.display.canvas_height)

        self.calibration = CalibrationTracker(cfg.calibration, self.canvas_wh)
        self.drawing = DrawingStateMachine(cfg.drawing.background, rng)
        self.router = ControlRouter(cfg, panel)
        self.last_status: Optional[str] = None

    def process_frame(self, landmarks: Optional[LandmarkFrame], modes: Modes,
                      t_now: float) -> RenderInstructions:
        """
        Process one frame and apply its side effects.

        Args:
            landmarks: Hand landmarks (None if no hand detected)
            modes: Drawing settings for this frame
            t_now: Current timestamp in seconds

        Returns:
            RenderInstructions describing what happened
        """
        result = self._process(landmarks, modes, t_now)
        if result.status != self.last_status:
            logger.debug(f"Status: {result.status}")
            self.last_status = result.status
        return result

    def _process(self, landmarks: Optional[LandmarkFrame], modes: Modes,
                 t_now: float) -> RenderInstructions:
        if landmarks is None:
            self.drawing.on_non_point_frame()
            self.calibration.reset()
            self.router.clear_selection()
            return RenderInstructions(gesture=None, status="No hand detected",
                                      offset=self.calibration.offset)

        if len(landmarks) < NUM_LANDMARKS:
            # incomplete hand: no pointer to place
            self.drawing.on_non_point_frame()
            self.calibration.reset()
            return RenderInstructions(gesture=Gesture.UNKNOWN,
                                      status=f"Gesture: {Gesture.UNKNOWN.value}",
                                      offset=self.calibration.offset)

        gesture = classify(landmarks, self.cfg.classifier)

        width, height = self.canvas_wh
        tip = landmarks[INDEX_TIP]
        raw_point = (tip[0] * width, tip[1] * height)
        offset = self.calibration.update(raw_point, gesture, t_now)
        point = (raw_point[0] + offset[0], raw_point[1] + offset[1])

        result = RenderInstructions(gesture=gesture, status="", raw_point=raw_point,
                                    point=point, offset=offset)

        if self.router.in_panel(point):
            result.region = "panel"
            self.drawing.on_non_point_frame()
            action = self.router.route(point, gesture, t_now)
            action.apply()
            result.action = action
            result.status = self._control_status(action, gesture)
            return result

        result.region = "canvas"
        result.action = NoAction()

        if gesture == Gesture.POINT:
            commands = self.drawing.on_point_frame(point, modes, t_now)
            for command in commands:
                command.draw(self.surface)
            result.commands = commands
            result.status = self._drawing_status(modes)
        else:
            self.drawing.on_non_point_frame()
            result.status = f"Gesture: {gesture.value}"

        return result

    def reset(self):
        """Drop all session state, as when the camera stops."""
        self.drawing.on_non_point_frame()
        self.calibration.reset_offset()
        self.router.reset()

    def _drawing_status(self, modes: Modes) -> str:
        if self.calibration.event == "calibrating":
            return "Calibrating... Hold position"
        if self.calibration.event == "calibrated":
            return "Calibration complete - Drawing mode: ON"
        if modes.shape_mode == "free":
            return "Drawing mode: ON (Free draw)"
        return f"Drawing mode: ON ({modes.shape_mode})"

    def _control_status(self, action, gesture: Gesture) -> str:
        text = action.describe()
        if text is not None:
            return text
        selected = self.router.selected
        if selected is not None:
            return f"Gesture: {gesture.value} (selected: {selected.label})"
        return f"Gesture: {gesture.value}"
