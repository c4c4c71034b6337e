"""Input collaborators: held directions, key bindings and the touch pad."""

from .directions import Direction, HeldDirections, KEY_BINDINGS, direction_for_key
from .touch_pad import TouchPad, PadButton

__all__ = [
    "Direction",
    "HeldDirections",
    "KEY_BINDINGS",
    "direction_for_key",
    "TouchPad",
    "PadButton",
]
