"""
Hand Canvas

Reads webcam frames, detects hand landmarks using MediaPipe, and turns
gestures into freehand/shape drawing and gesture-driven control of the
drawing settings.
"""

__version__ = "0.1.0"

from .types import Gesture, Modes, RenderInstructions, SurfaceProto
from .config import load_config, Cfg
from .gestures import classify, finger_states
from .calibration import CalibrationTracker
from .drawing import DrawingStateMachine
from .controls import ControlPanel, ControlRouter
from .orchestrator import FrameOrchestrator
from .canvas import CanvasSurface
from .surface_mock import MockSurface

__all__ = [
    "Gesture",
    "Modes",
    "RenderInstructions",
    "SurfaceProto",
    "load_config",
    "Cfg",
    "classify",
    "finger_states",
    "CalibrationTracker",
    "DrawingStateMachine",
    "ControlPanel",
    "ControlRouter",
    "FrameOrchestrator",
    "CanvasSurface",
    "MockSurface",
]
