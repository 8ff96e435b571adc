"""
Main application for the gesture drawing canvas.
"""
import asyncio
import logging
import sys
import time
from typing import Optional, List

import cv2
import numpy as np

from .config import load_config
from .types import Point3D, RenderInstructions
from .canvas import CanvasSurface
from .controls import ControlPanel
from .orchestrator import FrameOrchestrator
from .landmarks import HandsTracker, draw_landmarks

logger = logging.getLogger(__name__)

IDLE_STATUS = "Press 's' to start the camera"
PANEL_BG = (60, 60, 60)
PANEL_TEXT = (255, 255, 255)
HIGHLIGHT = (0, 255, 255)


class HandCanvasApp:
    """Main application class for the gesture drawing canvas."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize the application with configuration."""
        self.config = load_config(config_path)
        display = self.config.display

        self.surface = CanvasSurface(display.canvas_width, display.canvas_height,
                                     self.config.drawing.background)
        self.panel = ControlPanel(
            self.config,
            on_start=self.try_start_camera,
            on_stop=self.stop_camera,
            on_clear=self.surface.clear,
        )
        self.orchestrator = FrameOrchestrator(self.config, self.panel, self.surface)

        self.cap: Optional[cv2.VideoCapture] = None
        self.tracker: Optional[HandsTracker] = None
        self.status = IDLE_STATUS
        self.running = True

    def start_camera(self):
        """Open the camera and the hand tracker. Raises RuntimeError if the camera is unavailable."""
        if self.cap is not None:
            return

        camera = self.config.camera
        cap = cv2.VideoCapture(camera.index)
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, camera.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, camera.height)
        cap.set(cv2.CAP_PROP_FPS, camera.fps)

        if not cap.isOpened():
            cap.release()
            raise RuntimeError(f"Failed to open camera {camera.index}")

        if self.tracker is None:
            mp_cfg = self.config.mediapipe
            self.tracker = HandsTracker(
                max_num_hands=mp_cfg.max_num_hands,
                model_complexity=mp_cfg.model_complexity,
                min_detection_conf=mp_cfg.min_detection_confidence,
                min_tracking_conf=mp_cfg.min_tracking_confidence
            )

        self.cap = cap
        self.orchestrator.reset()
        self.status = "Camera active - Point at center of screen to calibrate"
        logger.info(f"Camera {camera.index} started")

    def try_start_camera(self):
        """Start the camera, reporting failure on the status line instead of raising."""
        try:
            self.start_camera()
        except RuntimeError as e:
            logger.error(f"Camera error: {e}")
            self.status = f"Camera error: {e}"

    def stop_camera(self):
        """Release the camera and drop all session state."""
        if self.cap is not None:
            self.cap.release()
            self.cap = None
            logger.info("Camera stopped")
        self.orchestrator.reset()
        self.status = "Camera off"

    def step(self) -> np.ndarray:
        """Process at most one camera frame and return the image to display."""
        frame = None
        landmarks = None
        instructions = None

        if self.cap is not None:
            ret, frame = self.cap.read()
            if not ret:
                logger.warning("Failed to read frame from camera")
                frame = None
            else:
                if self.config.camera.mirror:
                    frame = cv2.flip(frame, 1)
                landmarks = self.tracker.process(frame)
                instructions = self.orchestrator.process_frame(
                    landmarks, self.panel.modes(), time.time()
                )
                # a gesture may have stopped the camera during this frame
                if self.cap is not None:
                    self.status = instructions.status

        return self.render(frame, landmarks, instructions)

    def render(self, frame: Optional[np.ndarray], landmarks: Optional[List[Point3D]],
               instructions: Optional[RenderInstructions]) -> np.ndarray:
        """Compose the canvas, control panel, hand overlay and status line."""
        display = self.surface.image.copy()
        height, width = display.shape[:2]

        if frame is not None and self.config.display.show_camera:
            pip_w, pip_h = width // 4, height // 4
            thumb = cv2.resize(frame, (pip_w, pip_h))
            display[height - pip_h:height, width - pip_w:width] = thumb

        self._draw_panel(display)

        if landmarks is not None and instructions is not None and self.config.display.show_landmarks:
            draw_landmarks(display, landmarks, instructions.gesture, instructions.point)

        cv2.putText(display, self.status, (10, height - 15), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (0, 0, 0), 3)
        cv2.putText(display, self.status, (10, height - 15), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 1)
        return display

    def _draw_panel(self, display: np.ndarray):
        panel_h = self.config.controls.panel_height_px
        width = display.shape[1]
        slots = self.panel.slots
        section_w = width / len(slots)
        selected = self.orchestrator.router.selected

        cv2.rectangle(display, (0, 0), (width, panel_h), PANEL_BG, -1)
        for i, control in enumerate(slots):
            x0 = int(i * section_w)
            x1 = int((i + 1) * section_w) - 1
            value = control.get_value()
            cv2.putText(display, control.label, (x0 + 10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.6, PANEL_TEXT, 1)
            if value is not None:
                cv2.putText(display, str(value), (x0 + 10, 60), cv2.FONT_HERSHEY_SIMPLEX, 0.5, PANEL_TEXT, 1)
            border = HIGHLIGHT if control is selected else PANEL_TEXT
            cv2.rectangle(display, (x0 + 2, 2), (x1 - 2, panel_h - 2), border, 3 if control is selected else 1)

        size = self.panel.size
        cv2.putText(display, f"Size: {size.get_value()} (+/-)", (10, panel_h + 25),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 0, 0), 1)

    def handle_key(self, key: int):
        """Keyboard shortcuts standing in for mouse clicks on the controls."""
        if key == ord('q'):
            self.running = False
        elif key == ord('s'):
            self.panel.start.activate()
        elif key == ord('x'):
            self.panel.stop.activate()
        elif key == ord('c'):
            self.panel.clear.activate()
        elif key in (ord('+'), ord('=')):
            self.panel.size.set_value(self.panel.size.get_value() + 1)
        elif key == ord('-'):
            self.panel.size.set_value(self.panel.size.get_value() - 1)

    async def run(self):
        """Run the main application loop, one frame at a time."""
        window = self.config.display.window_name
        logger.info(f"Starting {window}")
        logger.info("Gestures: point = draw, palm = select, two fingers = adjust, pinch = activate")
        logger.info("Keys: s = start camera, x = stop camera, c = clear, +/- = size, q = quit")

        cv2.namedWindow(window, cv2.WINDOW_NORMAL)
        try:
            while self.running:
                display = self.step()
                cv2.imshow(window, display)
                delay = 1 if self.cap is not None else 30
                self.handle_key(cv2.waitKey(delay) & 0xFF)
                # frames never overlap; yield between them
                await asyncio.sleep(0)
        finally:
            self.stop_camera()
            if self.tracker is not None:
                self.tracker.close()
            cv2.destroyAllWindows()


async def main():
    """Entry point for the application."""
    config_path = sys.argv[1] if len(sys.argv) > 1 else None

    try:
        app = HandCanvasApp(config_path)
    except (FileNotFoundError, KeyError) as e:
        logging.basicConfig(level=logging.INFO)
        logger.error(f"Invalid configuration: {e}")
        return 1

    logging.basicConfig(level=getattr(logging, app.config.logging.level.upper(), logging.INFO))

    await app.run()
    return 0


def entrypoint():
    try:
        code = asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
        code = 0
    sys.exit(code)


if __name__ == "__main__":
    entrypoint()
