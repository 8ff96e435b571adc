"""
Point-at-center calibration of the pointer offset.
"""
import logging
from typing import Optional, Tuple

from .types import Gesture, Point2D
from .config import CalibrationConfig

logger = logging.getLogger(__name__)


class CalibrationTracker:
    """
    Derives a screen-space offset from a held pointing gesture.

    Pointing at the center of the canvas for `dwell_ms` commits
    offset = center - raw pointer position. The dwell must be contiguous:
    leaving the zone or changing gesture restarts it from zero.
    """

    def __init__(self, cfg: CalibrationConfig, canvas_wh: Tuple[int, int]):
        """Initialize calibration for a canvas of the given size."""
        self.cfg = cfg
        self.canvas_wh = canvas_wh
        self.started: Optional[float] = None
        self.offset: Point2D = (0.0, 0.0)
        self.event: Optional[str] = None  # "calibrating", "calibrated" or None

    @property
    def center(self) -> Point2D:
        width, height = self.canvas_wh
        return (width / 2, height / 2)

    def update(self, raw_point: Point2D, gesture: Gesture, t_now: float) -> Point2D:
        """
        Advance the dwell timer for one frame.

        Args:
            raw_point: Uncorrected pointer position in canvas pixels
            gesture: Gesture classified for this frame
            t_now: Current timestamp in seconds

        Returns:
            The committed (offset_x, offset_y)
        """
        self.event = None

        if gesture != Gesture.POINT:
            self.started = None
            return self.offset

        center_x, center_y = self.center
        x = raw_point[0] + self.offset[0]
        y = raw_point[1] + self.offset[1]
        zone = self.cfg.zone_px

        if abs(x - center_x) < zone and abs(y - center_y) < zone:
            if self.started is None:
                self.started = t_now
                self.event = "calibrating"
            elif (t_now - self.started) * 1000 >= self.cfg.dwell_ms:
                self.offset = (center_x - raw_point[0], center_y - raw_point[1])
                self.started = None
                self.event = "calibrated"
                logger.info(f"Calibration committed: offset=({self.offset[0]:.1f}, {self.offset[1]:.1f})")
        else:
            self.started = None

        return self.offset

    def reset(self):
        """Drop any running dwell; the committed offset is kept."""
        self.started = None
        self.event = None

    def reset_offset(self):
        """Forget the committed offset as well."""
        self.reset()
        self.offset = (0.0, 0.0)
