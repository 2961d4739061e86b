"""Normalized input events consumed by the canvas engine."""
from dataclasses import dataclass, field
from enum import Enum

from .geometry import Point


class PointerKind(Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    DOUBLE = "double"  # double-click or double-tap


class KeyKind(Enum):
    DOWN = "down"
    UP = "up"


@dataclass(frozen=True)
class Modifiers:
    """Modifier keys held during an input event."""
    shift: bool = False
    ctrl: bool = False
    meta: bool = False
    alt: bool = False

    @property
    def union(self) -> bool:
        """True when a selection-union modifier (shift/ctrl/cmd) is held."""
        return self.shift or self.ctrl or self.meta


NO_MODIFIERS = Modifiers()


@dataclass(frozen=True)
class PointerEvent:
    """Pointer event in viewport screen pixels."""
    kind: PointerKind
    x: float
    y: float
    button: int = 0
    modifiers: Modifiers = field(default=NO_MODIFIERS)

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class WheelEvent:
    """Wheel or trackpad scroll; negative delta_y zooms in."""
    x: float
    y: float
    delta_y: float
    modifiers: Modifiers = field(default=NO_MODIFIERS)

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class KeyEvent:
    """Keyboard event; key names follow the DOM KeyboardEvent.key values."""
    kind: KeyKind
    key: str
    modifiers: Modifiers = field(default=NO_MODIFIERS)
    text_input_focused: bool = False
