"""Input events delivered to the application: keys, mouse, resize, focus and paste."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

_U16_MAX = 0xFFFF


def _check_range(name: str, value: int, upper: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if not 0 <= value <= upper:
        raise ValueError(f"{name} must be in 0..={upper}, got {value}")


class EventResult(enum.Enum):
    """Outcome of offering an event to a handler."""

    HANDLED = "handled"
    IGNORED = "ignored"
    CONSUMED = "consumed"


class KeyCode(enum.Enum):
    """Named keys that carry no extra data."""

    BACKSPACE = "backspace"
    ENTER = "enter"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    TAB = "tab"
    BACK_TAB = "back_tab"
    DELETE = "delete"
    INSERT = "insert"
    ESC = "esc"
    NULL = "null"


@dataclass(frozen=True)
class Char:
    """A key that produces a single character."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or len(self.value) != 1:
            raise ValueError(f"Char needs exactly one character, got {self.value!r}")


@dataclass(frozen=True)
class FunctionKey:
    """A function key F<number>."""

    number: int

    def __post_init__(self) -> None:
        _check_range("function key number", self.number, 0xFF)


class KeyModifiers(enum.IntFlag):
    """Modifier keys held while a key or mouse event happened."""

    NONE = 0
    SHIFT = 0b0000_0001
    CONTROL = 0b0000_0010
    ALT = 0b0000_0100
    SUPER = 0b0000_1000
    HYPER = 0b0001_0000
    META = 0b0010_0000


_ALL_MODIFIERS = 0b0011_1111


def _as_modifiers(value: int) -> KeyModifiers:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"modifiers must be KeyModifiers, got {type(value).__name__}")
    if value & ~_ALL_MODIFIERS:
        raise ValueError(f"unknown modifier bits in {value:#x}")
    return KeyModifiers(value)


Key = Union[KeyCode, Char, FunctionKey]


@dataclass(frozen=True)
class KeyEvent:
    """A key press with the modifiers held at the time."""

    code: Key
    modifiers: KeyModifiers = KeyModifiers.NONE

    def __post_init__(self) -> None:
        if not isinstance(self.code, (KeyCode, Char, FunctionKey)):
            raise TypeError(f"invalid key code {self.code!r}")
        object.__setattr__(self, "modifiers", _as_modifiers(self.modifiers))


class MouseButton(enum.Enum):
    """Physical mouse buttons."""

    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"


class MouseAction(enum.Enum):
    """What the mouse did."""

    DOWN = "down"
    UP = "up"
    DRAG = "drag"
    MOVED = "moved"
    SCROLL_DOWN = "scroll_down"
    SCROLL_UP = "scroll_up"

    @property
    def uses_button(self) -> bool:
        return self in (MouseAction.DOWN, MouseAction.UP, MouseAction.DRAG)


@dataclass(frozen=True)
class MouseEvent:
    """A mouse action at a cell position; press, release and drag carry a button."""

    action: MouseAction
    x: int
    y: int
    button: MouseButton | None = None
    modifiers: KeyModifiers = KeyModifiers.NONE

    def __post_init__(self) -> None:
        if not isinstance(self.action, MouseAction):
            raise TypeError(f"invalid mouse action {self.action!r}")
        _check_range("x", self.x, _U16_MAX)
        _check_range("y", self.y, _U16_MAX)
        if self.action.uses_button:
            if not isinstance(self.button, MouseButton):
                raise ValueError(f"{self.action.name} needs a mouse button")
        elif self.button is not None:
            raise ValueError(f"{self.action.name} takes no mouse button")
        object.__setattr__(self, "modifiers", _as_modifiers(self.modifiers))


@dataclass(frozen=True)
class ResizeEvent:
    """The terminal changed size."""

    width: int
    height: int

    def __post_init__(self) -> None:
        _check_range("width", self.width, _U16_MAX)
        _check_range("height", self.height, _U16_MAX)


@dataclass(frozen=True)
class FocusGained:
    """The terminal window gained focus."""


@dataclass(frozen=True)
class FocusLost:
    """The terminal window lost focus."""


@dataclass(frozen=True)
class PasteEvent:
    """Text pasted into the terminal in one piece."""

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError("pasted text must be a str")


Event = Union[KeyEvent, MouseEvent, ResizeEvent, FocusGained, FocusLost, PasteEvent]