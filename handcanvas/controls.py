"""
Gesture-driven selection, adjustment and activation of on-screen controls.
"""
import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .types import DRAWING_MODES, SHAPE_MODES, Gesture, Modes, Point2D
from .config import Cfg

logger = logging.getLogger(__name__)


def _clamp(value, low, high):
    return max(low, min(high, value))


def _pick(options: Sequence, fraction: float):
    index = int(math.floor(fraction * len(options)))
    return options[_clamp(index, 0, len(options) - 1)]


class Control:
    """A control slot. Subclasses decide how a horizontal position maps to a value."""

    def __init__(self, name: str, label: str):
        self.name = name
        self.label = label

    def get_value(self):
        return None

    def set_value(self, value):
        pass

    def options(self) -> List:
        return []

    def value_at(self, fraction: float):
        """Value for a hand at `fraction` of the screen width, or None if not adjustable."""
        return None

    @property
    def is_trigger(self) -> bool:
        return False

    def activate(self):
        pass

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"


class TriggerControl(Control):
    """Button-like control; activation runs its callback."""

    def __init__(self, name: str, label: str, action: Optional[Callable[[], None]] = None):
        super().__init__(name, label)
        self.action = action
        self.activations = 0

    @property
    def is_trigger(self) -> bool:
        return True

    def activate(self):
        self.activations += 1
        logger.info(f"Activated control: {self.name}")
        if self.action is not None:
            self.action()


class RangeControl(Control):
    """Continuous slider with integer values in [minimum, maximum]."""

    def __init__(self, name: str, label: str, minimum: int, maximum: int, value: int):
        super().__init__(name, label)
        self.minimum = minimum
        self.maximum = maximum
        self.value = _clamp(value, minimum, maximum)

    def get_value(self):
        return self.value

    def set_value(self, value):
        self.value = _clamp(int(value), self.minimum, self.maximum)

    def value_at(self, fraction: float):
        # half-up rounding
        raw = math.floor(fraction * (self.maximum - self.minimum) + self.minimum + 0.5)
        return _clamp(raw, self.minimum, self.maximum)


class ColorControl(Control):
    """Colour picker restricted to a fixed palette when driven by gestures."""

    def __init__(self, name: str, label: str, palette: Sequence[str], value: str):
        super().__init__(name, label)
        self.palette = list(palette)
        self.value = value

    def get_value(self):
        return self.value

    def set_value(self, value):
        self.value = value

    def options(self) -> List:
        return list(self.palette)

    def value_at(self, fraction: float):
        return _pick(self.palette, fraction)


class ChoiceControl(Control):
    """Option list, like a select box."""

    def __init__(self, name: str, label: str, choices: Sequence[str], value: str):
        super().__init__(name, label)
        self.choices = list(choices)
        self.value = value if value in self.choices else self.choices[0]

    def get_value(self):
        return self.value

    def set_value(self, value):
        if value in self.choices:
            self.value = value

    def options(self) -> List:
        return list(self.choices)

    def value_at(self, fraction: float):
        return _pick(self.choices, fraction)


@dataclass
class NoAction:
    """Nothing happened this frame."""

    def apply(self):
        pass

    def describe(self) -> Optional[str]:
        return None


@dataclass
class Select:
    """A control slot was selected."""
    control: Control

    def apply(self):
        pass

    def describe(self) -> Optional[str]:
        return f"Selected: {self.control.label}"


@dataclass
class Adjust:
    """A control's value was set from the hand position."""
    control: Control
    value: object

    def apply(self):
        self.control.set_value(self.value)

    def describe(self) -> Optional[str]:
        return f"Adjusting: {self.control.label} = {self.value}"


@dataclass
class Activate:
    """A trigger control was fired."""
    control: Control

    def apply(self):
        self.control.activate()

    def describe(self) -> Optional[str]:
        return f"Activated: {self.control.label}"


class ControlPanel:
    """
    The fixed, ordered registry of gesture-selectable controls.

    Slot order: camera-start, camera-stop, clear, color, drawing-mode,
    shape-mode. The stroke size slider lives outside the slots.
    """

    def __init__(self, cfg: Cfg,
                 on_start: Optional[Callable[[], None]] = None,
                 on_stop: Optional[Callable[[], None]] = None,
                 on_clear: Optional[Callable[[], None]] = None):
        drawing = cfg.drawing
        self.start = TriggerControl("start_camera", "Start Camera", on_start)
        self.stop = TriggerControl("stop_camera", "Stop Camera", on_stop)
        self.clear = TriggerControl("clear_canvas", "Clear", on_clear)
        self.color = ColorControl("pen_color", "Color", cfg.controls.palette, drawing.color)
        self.drawing_mode = ChoiceControl("drawing_mode", "Mode", DRAWING_MODES, drawing.drawing_mode)
        self.shape_mode = ChoiceControl("shape_mode", "Shape", SHAPE_MODES, drawing.shape_mode)
        self.size = RangeControl("pen_size", "Size", drawing.size_min, drawing.size_max, drawing.size)

        self.slots: List[Control] = [
            self.start, self.stop, self.clear,
            self.color, self.drawing_mode, self.shape_mode,
        ]

    def modes(self) -> Modes:
        """Snapshot of the drawing settings."""
        return Modes(
            drawing_mode=self.drawing_mode.get_value(),
            shape_mode=self.shape_mode.get_value(),
            color=self.color.get_value(),
            size=self.size.get_value(),
        )


class ControlRouter:
    """
    Interprets gestures made inside the control panel band.

    Palm selects the slot under the hand, two fingers set the selected
    control's value from the horizontal position, pinch fires a selected
    trigger. Any emitted action starts a cooldown during which nothing else
    is emitted.
    """

    def __init__(self, cfg: Cfg, panel: ControlPanel):
        self.cfg = cfg
        self.panel = panel
        self.width = cfg.display.canvas_width
        self.panel_height = cfg.controls.panel_height_px
        self.selected: Optional[Control] = None
        self.last_action_time: Optional[float] = None

    def in_panel(self, point: Point2D) -> bool:
        return point[1] <= self.panel_height

    def route(self, point: Point2D, gesture: Gesture, t_now: float):
        """
        Map a gesture at a position to a control action.

        Args:
            point: Corrected pointer position in canvas pixels
            gesture: Gesture classified for this frame
            t_now: Current timestamp in seconds

        Returns:
            NoAction, Select, Adjust or Activate
        """
        if not self.in_panel(point):
            return NoAction()

        if (self.last_action_time is not None and
                (t_now - self.last_action_time) * 1000 < self.cfg.controls.cooldown_ms):
            return NoAction()

        x = point[0]
        action = NoAction()

        if gesture == Gesture.PALM:
            slots = self.panel.slots
            section = int(math.floor(x / (self.width / len(slots))))
            if 0 <= section < len(slots):
                self.selected = slots[section]
                action = Select(self.selected)
        elif gesture == Gesture.TWO_FINGERS and self.selected is not None:
            value = self.selected.value_at(x / self.width)
            if value is not None:
                action = Adjust(self.selected, value)
            self.last_action_time = t_now
        elif gesture == Gesture.PINCH and self.selected is not None:
            if self.selected.is_trigger:
                action = Activate(self.selected)
            self.last_action_time = t_now

        if action.describe() is not None:
            self.last_action_time = t_now
            logger.debug(f"Control action: {action}")
        return action

    def clear_selection(self):
        """Forget the selected control (hand lost)."""
        self.selected = None

    def reset(self):
        self.selected = None
        self.last_action_time = None
