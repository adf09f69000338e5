"""Colours, styles, cells and the in-memory grid a frame is drawn into."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import ClassVar, Iterator

_U16_MAX = 0xFFFF


@dataclass(frozen=True)
class Color:
    """A 24-bit RGB colour."""

    r: int
    g: int
    b: int

    BLACK: ClassVar[Color]
    WHITE: ClassVar[Color]
    RED: ClassVar[Color]
    GREEN: ClassVar[Color]
    BLUE: ClassVar[Color]
    YELLOW: ClassVar[Color]
    CYAN: ClassVar[Color]
    MAGENTA: ClassVar[Color]

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an int")
            if not 0 <= value <= 0xFF:
                raise ValueError(f"{name} must be in 0..=255, got {value}")


Color.BLACK = Color(0, 0, 0)
Color.WHITE = Color(255, 255, 255)
Color.RED = Color(255, 0, 0)
Color.GREEN = Color(0, 255, 0)
Color.BLUE = Color(0, 0, 255)
Color.YELLOW = Color(255, 255, 0)
Color.CYAN = Color(0, 255, 255)
Color.MAGENTA = Color(255, 0, 255)


class Modifier(enum.IntFlag):
    """Text attributes."""

    NONE = 0
    BOLD = 1 << 0
    DIM = 1 << 1
    ITALIC = 1 << 2
    UNDERLINE = 1 << 3
    BLINK = 1 << 4
    REVERSE = 1 << 5
    HIDDEN = 1 << 6
    STRIKETHROUGH = 1 << 7


@dataclass(frozen=True)
class Style:
    """Foreground, background and text attributes of a cell."""

    fg: Color | None = None
    bg: Color | None = None
    modifiers: Modifier = Modifier.NONE

    def __post_init__(self) -> None:
        for name in ("fg", "bg"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, Color):
                raise TypeError(f"{name} must be a Color or None")
        mods = self.modifiers
        if isinstance(mods, bool) or not isinstance(mods, int) or mods & ~0xFF:
            raise ValueError(f"invalid modifiers {mods!r}")
        object.__setattr__(self, "modifiers", Modifier(mods))


@dataclass(frozen=True)
class Cell:
    """One terminal cell: a character and its style. A blank cell holds NUL."""

    ch: str = "\0"
    style: Style = field(default_factory=Style)

    def __post_init__(self) -> None:
        if not isinstance(self.ch, str) or len(self.ch) != 1:
            raise ValueError(f"cell needs exactly one character, got {self.ch!r}")
        if not isinstance(self.style, Style):
            raise TypeError("style must be a Style")


_BLANK = Cell()


def _check_dimension(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int")
    if not 0 <= value <= _U16_MAX:
        raise ValueError(f"{name} must be in 0..={_U16_MAX}, got {value}")


class Buffer:
    """A width x height grid of cells; out-of-range access is harmless."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, width: int, height: int) -> None:
        _check_dimension("width", width)
        _check_dimension("height", height)
        self._width = width
        self._height = height
        self._cells: list[Cell] = [_BLANK] * (width * height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def get(self, x: int, y: int) -> Cell | None:
        """The cell at (x, y), or None outside the grid."""
        if not self._in_bounds(x, y):
            return None
        return self._cells[y * self._width + x]

    def set(self, x: int, y: int, cell: Cell) -> None:
        """Store a cell; positions outside the grid are ignored."""
        if not isinstance(cell, Cell):
            raise TypeError("only Cell values can be stored")
        if self._in_bounds(x, y):
            self._cells[y * self._width + x] = cell

    def line(self, y: int) -> tuple[Cell, ...]:
        """All cells of row y, or an empty tuple outside the grid."""
        if not 0 <= y < self._height:
            return ()
        start = y * self._width
        return tuple(self._cells[start : start + self._width])

    def lines(self) -> Iterator[tuple[Cell, ...]]:
        for y in range(self._height):
            yield self.line(y)

    def clear(self) -> None:
        """Reset every cell to blank."""
        self._cells = [_BLANK] * len(self._cells)

    def resize(self, width: int, height: int) -> None:
        """Change size; the content is cleared."""
        _check_dimension("width", width)
        _check_dimension("height", height)
        self._width = width
        self._height = height
        self._cells = [_BLANK] * (width * height)

    def copy(self) -> Buffer:
        duplicate = Buffer(self._width, self._height)
        duplicate._cells = list(self._cells)
        return duplicate

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Buffer):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and self._cells == other._cells
        )

    def __repr__(self) -> str:
        return f"Buffer(width={self._width}, height={self._height})"