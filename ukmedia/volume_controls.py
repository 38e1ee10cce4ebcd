"""Value arithmetic behind the volume slider, on-screen display and mini window."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, IntEnum

# Base size of the on-screen display at 640x480 and below.
OSD_BASE_SIZE = 130
_OSD_REFERENCE_WIDTH = 640.0
_OSD_REFERENCE_HEIGHT = 480.0
# Ranges at least this wide get the click-position compensation while dragging.
_COMPENSATED_RANGE = 50


class DisplayMode(Enum):
    """Which window of the applet is shown."""

    MINI = "mini"
    ADVANCED = "advanced"


class SwitchButtonState(Enum):
    """Visual state of the mode switch button."""

    NORMAL = "normal"
    HOVER = "hover"
    PRESS = "press"


class Key(IntEnum):
    """Keys the mini window reacts to, with their toolkit key codes."""

    ESCAPE = 0x01000000
    MINUS = 0x2D
    PLUS = 0x2B
    LEFT = 0x01000012
    UP = 0x01000013
    RIGHT = 0x01000014
    DOWN = 0x01000015


_KEY_GAINS = {
    Key.MINUS: -1,
    Key.PLUS: 1,
    Key.UP: 1,
    Key.DOWN: -1,
    Key.LEFT: -1,
    Key.RIGHT: 1,
}


@dataclass(frozen=True)
class OsdGeometry:
    """Size and placement of the on-screen volume display."""

    size: int
    margin: int
    icon_size: int
    x: int
    y: int
    corner_radius: int


def _round(value: float) -> int:
    """Round half up, as the slider does for pixel positions."""
    return math.floor(value + 0.5)


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _check_slider(width: int, minimum: int, maximum: int) -> None:
    if width <= 0:
        raise ValueError(f"slider width must be positive, got {width}")
    if maximum < minimum:
        raise ValueError(f"slider maximum {maximum} is below minimum {minimum}")


def _clamp(value: int, minimum: int, maximum: int) -> int:
    return max(minimum, min(maximum, value))


def slider_drag_value(x: int, width: int, minimum: int = 0, maximum: int = 100) -> int:
    """Value a slider takes when the mouse is dragged to pixel x.

    On wide ranges the lower and upper parts of the track are stretched by
    one step so that the ends are easier to reach with the mouse.
    """
    _check_slider(width, minimum, maximum)
    span = maximum - minimum
    per = x / width
    value = _round(per * span) + minimum
    if span >= _COMPENSATED_RANGE:
        low = _cdiv(maximum, 2) - _cdiv(maximum, 10) + _cdiv(minimum, 10)
        high = _cdiv(maximum, 2) + _cdiv(maximum, 10) + _cdiv(minimum, 10)
        if value <= low:
            value = _round(per * (span - 1)) + minimum
        elif value > high:
            value = _round(per * (span + 1)) + minimum
    return _clamp(value, minimum, maximum)


def slider_click_value(x: int, width: int, minimum: int = 0, maximum: int = 100) -> int:
    """Value a slider jumps to when pressed at pixel x."""
    _check_slider(width, minimum, maximum)
    value = int(x / width * (maximum - minimum) + minimum)
    return _clamp(value, minimum, maximum)


def tip_text(value: int) -> str:
    """Text of the tip shown above the slider handle."""
    return f"{value}%"


def osd_geometry(screen_width: int, screen_height: int) -> OsdGeometry:
    """Place the on-screen display centred horizontally in the lower half of the screen."""
    if screen_width <= 0 or screen_height <= 0:
        raise ValueError(f"screen size must be positive, got {screen_width}x{screen_height}")
    scale = min(screen_width / _OSD_REFERENCE_WIDTH, screen_height / _OSD_REFERENCE_HEIGHT)
    exact = max(scale, 1.0) * OSD_BASE_SIZE
    size = int(exact)
    margin = int(0.35 * exact / 2)
    icon_size = int(exact * 0.65)
    x = _cdiv(screen_width - size, 2)
    half = _cdiv(screen_height, 2)
    y = half + _cdiv(half - size, 2)
    return OsdGeometry(size=size, margin=margin, icon_size=icon_size, x=x, y=y, corner_radius=size // 10)


def key_volume_gain(key: int) -> int | None:
    """Volume change for a key press in the mini window.

    Returns None for keys that do not change the volume, Escape included,
    which closes the window instead.
    """
    try:
        return _KEY_GAINS.get(Key(key))
    except ValueError:
        return None


def wheel_step(delta: int) -> bool | None:
    """True to raise the volume, False to lower it, None for no movement."""
    if delta > 0:
        return True
    if delta < 0:
        return False
    return None