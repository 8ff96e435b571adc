"""
Configuration management for the gesture drawing canvas.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any, List
from dataclasses import dataclass


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int
    width: int
    height: int
    fps: int
    mirror: bool


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int
    model_complexity: int
    min_detection_confidence: float
    min_tracking_confidence: float


@dataclass
class ClassifierConfig:
    """Finger extension thresholds, in normalized image units."""
    extended_threshold: float
    pinch_threshold: float


@dataclass
class CalibrationConfig:
    """Point-at-center calibration settings."""
    zone_px: float
    dwell_ms: int


@dataclass
class ControlsConfig:
    """Gesture control panel configuration."""
    panel_height_px: int
    cooldown_ms: int
    palette: List[str]


@dataclass
class DrawingConfig:
    """Initial drawing settings and size limits."""
    color: str
    size: int
    size_min: int
    size_max: int
    background: str
    drawing_mode: str
    shape_mode: str


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    canvas_width: int
    canvas_height: int
    show_landmarks: bool
    show_camera: bool
    window_name: str


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig
    mediapipe: MediaPipeConfig
    classifier: ClassifierConfig
    calibration: CalibrationConfig
    controls: ControlsConfig
    drawing: DrawingConfig
    display: DisplayConfig
    logging: LoggingConfig


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses the bundled config.default.yaml

    Returns:
        Configuration object with all settings
    """
    if path is None:
        path = Path(__file__).parent / "config.default.yaml"

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)

    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    camera_data = data['camera']
    camera = CameraConfig(
        index=camera_data['index'],
        width=camera_data['width'],
        height=camera_data['height'],
        fps=camera_data['fps'],
        mirror=camera_data['mirror']
    )

    mp_data = data['mediapipe']
    mediapipe = MediaPipeConfig(
        max_num_hands=mp_data['max_num_hands'],
        model_complexity=mp_data['model_complexity'],
        min_detection_confidence=mp_data['min_detection_confidence'],
        min_tracking_confidence=mp_data['min_tracking_confidence']
    )

    classifier = ClassifierConfig(
        extended_threshold=data['classifier']['extended_threshold'],
        pinch_threshold=data['classifier']['pinch_threshold']
    )

    calibration = CalibrationConfig(
        zone_px=data['calibration']['zone_px'],
        dwell_ms=data['calibration']['dwell_ms']
    )

    controls_data = data['controls']
    controls = ControlsConfig(
        panel_height_px=controls_data['panel_height_px'],
        cooldown_ms=controls_data['cooldown_ms'],
        palette=list(controls_data['palette'])
    )

    drawing_data = data['drawing']
    drawing = DrawingConfig(
        color=drawing_data['color'],
        size=drawing_data['size'],
        size_min=drawing_data['size_min'],
        size_max=drawing_data['size_max'],
        background=drawing_data['background'],
        drawing_mode=drawing_data['drawing_mode'],
        shape_mode=drawing_data['shape_mode']
    )

    display_data = data['display']
    display = DisplayConfig(
        canvas_width=display_data['canvas_width'],
        canvas_height=display_data['canvas_height'],
        show_landmarks=display_data['show_landmarks'],
        show_camera=display_data['show_camera'],
        window_name=display_data['window_name']
    )

    log_level = LoggingConfig(level=data['logging']['level'])

    return Cfg(
        camera=camera,
        mediapipe=mediapipe,
        classifier=classifier,
        calibration=calibration,
        controls=controls,
        drawing=drawing,
        display=display,
        logging=log_level
    )
