"""
Raster drawing surface backed by a numpy image and OpenCV primitives.
"""
import cv2
import numpy as np
from typing import Tuple

from .types import Point2D


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """
    Parse a #rrggbb colour string.

    Args:
        color: Colour such as "#ff8800"

    Returns:
        (r, g, b) tuple of ints in 0..255
    """
    value = color.lstrip('#')
    if len(value) != 6:
        raise ValueError(f"Invalid colour: {color!r}")
    try:
        return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)
    except ValueError:
        raise ValueError(f"Invalid colour: {color!r}") from None


def hex_to_bgr(color: str) -> Tuple[int, int, int]:
    """Same as hex_to_rgb but in OpenCV channel order."""
    r, g, b = hex_to_rgb(color)
    return b, g, r


def _px(point: Point2D) -> Tuple[int, int]:
    return int(round(point[0])), int(round(point[1]))


class CanvasSurface:
    """Persistent BGR canvas that executes draw commands."""

    def __init__(self, width: int, height: int, background: str = "#ffffff"):
        """
        Initialize a blank canvas.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            background: Background colour, also used by clear()
        """
        self.width = width
        self.height = height
        self.background = background
        self.image = np.empty((height, width, 3), dtype=np.uint8)
        self.clear()

    def stroke_segment(self, start: Point2D, end: Point2D, color: str, width: float,
                       cap: str = "round", join: str = "round") -> None:
        thickness = max(1, int(round(width)))
        cv2.line(self.image, _px(start), _px(end), hex_to_bgr(color), thickness, cv2.LINE_AA)
        if cap == "round" and thickness > 2:
            # cv2 lines have flat ends
            radius = thickness // 2
            cv2.circle(self.image, _px(start), radius, hex_to_bgr(color), -1, cv2.LINE_AA)
            cv2.circle(self.image, _px(end), radius, hex_to_bgr(color), -1, cv2.LINE_AA)

    def fill_circle(self, center: Point2D, radius: float, color: str) -> None:
        cv2.circle(self.image, _px(center), max(1, int(round(radius))), hex_to_bgr(color), -1, cv2.LINE_AA)

    def stroke_circle(self, center: Point2D, radius: float, color: str, width: float) -> None:
        thickness = max(1, int(round(width)))
        cv2.circle(self.image, _px(center), int(round(radius)), hex_to_bgr(color), thickness, cv2.LINE_AA)

    def stroke_rect(self, corner_a: Point2D, corner_b: Point2D, color: str, width: float) -> None:
        thickness = max(1, int(round(width)))
        cv2.rectangle(self.image, _px(corner_a), _px(corner_b), hex_to_bgr(color), thickness, cv2.LINE_AA)

    def clear(self) -> None:
        self.image[:] = hex_to_bgr(self.background)
