"""
Mock drawing surface that records calls instead of painting.
"""
import logging
from typing import List, Tuple

from .types import Point2D

logger = logging.getLogger(__name__)


class MockSurface:
    """Mock surface that logs draw calls instead of executing them."""

    def __init__(self):
        """Initialize the mock surface."""
        self.calls: List[Tuple] = []

    def stroke_segment(self, start: Point2D, end: Point2D, color: str, width: float,
                       cap: str = "round", join: str = "round") -> None:
        self._record("stroke_segment", start, end, color, width, cap, join)

    def fill_circle(self, center: Point2D, radius: float, color: str) -> None:
        self._record("fill_circle", center, radius, color)

    def stroke_circle(self, center: Point2D, radius: float, color: str, width: float) -> None:
        self._record("stroke_circle", center, radius, color, width)

    def stroke_rect(self, corner_a: Point2D, corner_b: Point2D, color: str, width: float) -> None:
        self._record("stroke_rect", corner_a, corner_b, color, width)

    def clear(self) -> None:
        self._record("clear")

    def names(self) -> List[str]:
        """Names of the recorded calls, in order."""
        return [call[0] for call in self.calls]

    def reset_calls(self) -> None:
        """Reset recorded calls for testing."""
        self.calls = []

    def _record(self, name: str, *args) -> None:
        self.calls.append((name,) + args)
        logger.debug(f"[MockSurface] {name}{args} (call #{len(self.calls)})")
