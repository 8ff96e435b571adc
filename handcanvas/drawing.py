"""
Stroke and shape continuity for the pointing gesture.
"""
import math
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .types import (
    Modes, Point2D, StrokeSegment, FillCircle, StrokeCircle, StrokeRect, ClearSurface,
)

RAINBOW_RATES = (1.0, 1.1, 1.2)


def rainbow_color(t_now: float) -> str:
    """Colour cycling with wall-clock time, as a #rrggbb string."""
    r, g, b = (int(math.floor(math.sin(t_now * k) * 127 + 128)) for k in RAINBOW_RATES)
    return f"#{r:02x}{g:02x}{b:02x}"


@dataclass
class DrawingSession:
    """Pen state for freehand strokes and shapes."""
    is_drawing: bool = False
    last_point: Point2D = (0.0, 0.0)
    is_shape_drawing: bool = False
    shape_start: Point2D = (0.0, 0.0)


class DrawingStateMachine:
    """
    Turns consecutive pointing frames into draw commands.

    Idle until the first pointing frame, which only records the anchor point.
    Every following pointing frame draws from the anchor; any other frame
    returns to idle so the next stroke starts fresh.

    Shapes have no retained history: each preview frame clears the whole
    surface before drawing the shape.
    """

    def __init__(self, background: str = "#ffffff", rng: Optional[np.random.Generator] = None):
        self.background = background
        self.rng = rng if rng is not None else np.random.default_rng()
        self.session = DrawingSession()

    @property
    def active(self) -> bool:
        return self.session.is_drawing or self.session.is_shape_drawing

    def on_point_frame(self, point: Point2D, modes: Modes, t_now: float) -> List[object]:
        """
        Advance the session with one pointing frame.

        Args:
            point: Corrected pointer position in canvas pixels
            modes: Drawing settings for this frame
            t_now: Current timestamp in seconds since the epoch

        Returns:
            Draw commands to execute, possibly empty
        """
        color = rainbow_color(t_now) if modes.drawing_mode == "rainbow" else modes.color

        if modes.shape_mode == "free":
            return self._free_draw(point, modes, color)
        if modes.shape_mode in self._SHAPES:
            return self._shape_draw(point, modes, color)
        return []

    def on_non_point_frame(self):
        """End any stroke or shape in progress."""
        self.session.is_drawing = False
        self.session.is_shape_drawing = False

    def _free_draw(self, point: Point2D, modes: Modes, color: str) -> List[object]:
        session = self.session
        session.is_shape_drawing = False
        if not session.is_drawing:
            session.is_drawing = True
            session.last_point = point
            return []

        brush = self._BRUSHES.get(modes.drawing_mode)
        commands = brush(self, session.last_point, point, color, modes.size) if brush else []
        session.last_point = point
        return commands

    def _shape_draw(self, point: Point2D, modes: Modes, color: str) -> List[object]:
        session = self.session
        session.is_drawing = False
        if not session.is_shape_drawing:
            session.is_shape_drawing = True
            session.shape_start = point
            return []

        shape = self._SHAPES[modes.shape_mode]
        return [ClearSurface(), shape(session.shape_start, point, color, modes.size)]

    def _pen(self, start: Point2D, end: Point2D, color: str, size: float) -> List[object]:
        return [StrokeSegment(start, end, color, size)]

    def _spray(self, start: Point2D, end: Point2D, color: str, size: float) -> List[object]:
        density = int(size * 2)
        radius = size * 2
        angles = self.rng.random(density) * 2 * math.pi
        distances = self.rng.random(density) * radius
        xs = end[0] + np.cos(angles) * distances
        ys = end[1] + np.sin(angles) * distances
        return [FillCircle((float(x), float(y)), size / 4, color) for x, y in zip(xs, ys)]

    def _eraser(self, start: Point2D, end: Point2D, color: str, size: float) -> List[object]:
        return [FillCircle(end, size, self.background)]

    _BRUSHES = {
        "pen": _pen,
        "spray": _spray,
        "eraser": _eraser,
        "rainbow": _pen,
    }

    _SHAPES = {
        "line": lambda a, b, color, size: StrokeSegment(a, b, color, size, "round", "miter"),
        "circle": lambda a, b, color, size: StrokeCircle(a, math.hypot(b[0] - a[0], b[1] - a[1]), color, size),
        "rectangle": lambda a, b, color, size: StrokeRect(a, b, color, size),
    }
