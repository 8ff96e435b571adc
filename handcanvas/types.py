"""
Type definitions for the gesture drawing pipeline.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Protocol, Sequence, Tuple, runtime_checkable

Point2D = Tuple[float, float]
Point3D = Tuple[float, float, float]

# 21 normalized (x, y, z) points for one hand
LandmarkFrame = Sequence[Point3D]

DRAWING_MODES = ("pen", "spray", "eraser", "rainbow")
SHAPE_MODES = ("free", "line", "circle", "rectangle")


class Gesture(str, Enum):
    """Discrete hand gesture derived from a single landmark frame."""
    POINT = "point"
    PALM = "palm"
    TWO_FINGERS = "two_fingers"
    PINCH = "pinch"
    FIST = "fist"
    UNKNOWN = "unknown"


@dataclass
class Modes:
    """Drawing settings read from the control panel at the start of a frame."""
    drawing_mode: str = "pen"
    shape_mode: str = "free"
    color: str = "#000000"
    size: int = 5


@runtime_checkable
class SurfaceProto(Protocol):
    """Abstract protocol for drawing backends that execute draw commands."""

    def stroke_segment(self, start: Point2D, end: Point2D, color: str, width: float,
                       cap: str = "round", join: str = "round") -> None:
        """Stroke a straight segment."""
        ...

    def fill_circle(self, center: Point2D, radius: float, color: str) -> None:
        """Fill a circle."""
        ...

    def stroke_circle(self, center: Point2D, radius: float, color: str, width: float) -> None:
        """Stroke the outline of a circle."""
        ...

    def stroke_rect(self, corner_a: Point2D, corner_b: Point2D, color: str, width: float) -> None:
        """Stroke an axis-aligned rectangle spanning two corners."""
        ...

    def clear(self) -> None:
        """Erase the whole surface back to its background."""
        ...


@dataclass
class StrokeSegment:
    """Command to stroke a segment between two points."""
    start: Point2D
    end: Point2D
    color: str
    width: float
    cap: str = "round"
    join: str = "round"

    def draw(self, surface: SurfaceProto) -> None:
        surface.stroke_segment(self.start, self.end, self.color, self.width, self.cap, self.join)


@dataclass
class FillCircle:
    """Command to fill a circle (spray dots, eraser)."""
    center: Point2D
    radius: float
    color: str

    def draw(self, surface: SurfaceProto) -> None:
        surface.fill_circle(self.center, self.radius, self.color)


@dataclass
class StrokeCircle:
    """Command to stroke a circle outline."""
    center: Point2D
    radius: float
    color: str
    width: float

    def draw(self, surface: SurfaceProto) -> None:
        surface.stroke_circle(self.center, self.radius, self.color, self.width)


@dataclass
class StrokeRect:
    """Command to stroke a rectangle outline."""
    corner_a: Point2D
    corner_b: Point2D
    color: str
    width: float

    def draw(self, surface: SurfaceProto) -> None:
        surface.stroke_rect(self.corner_a, self.corner_b, self.color, self.width)


@dataclass
class ClearSurface:
    """Command to wipe the surface."""

    def draw(self, surface: SurfaceProto) -> None:
        surface.clear()


@dataclass
class RenderInstructions:
    """Everything the orchestrator decided for one frame."""
    gesture: Optional[Gesture]
    status: str
    region: Optional[str] = None  # "panel", "canvas" or None without a hand
    raw_point: Optional[Point2D] = None
    point: Optional[Point2D] = None
    offset: Point2D = (0.0, 0.0)
    commands: List[object] = field(default_factory=list)
    action: Optional[object] = None
