"""Rectangles, length specifications and alignment modes for layout."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

_U16_MAX = 0xFFFF


def _check_u16(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if not 0 <= value <= _U16_MAX:
        raise ValueError(f"{name} must be in 0..={_U16_MAX}, got {value}")


def _sat_add(a: int, b: int) -> int:
    return min(a + b, _U16_MAX)


def _sat_sub(a: int, b: int) -> int:
    return max(a - b, 0)


@dataclass(frozen=True)
class Rect:
    """A rectangular cell area: top-left corner plus size."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        for name in ("x", "y", "width", "height"):
            _check_u16(name, getattr(self, name))

    @classmethod
    def from_size(cls, width: int, height: int) -> Rect:
        """A rect at the origin with the given size."""
        return cls(0, 0, width, height)

    def area(self) -> int:
        return self.width * self.height

    def contains(self, x: int, y: int) -> bool:
        return (
            self.x <= x < self.x + self.width and self.y <= y < self.y + self.height
        )

    def inner(self, margin: int) -> Rect:
        """Shrink by the same margin on all sides."""
        twice = _sat_add(margin, margin)
        return Rect(
            _sat_add(self.x, margin),
            _sat_add(self.y, margin),
            _sat_sub(self.width, twice),
            _sat_sub(self.height, twice),
        )

    def inner_margins(self, top: int, right: int, bottom: int, left: int) -> Rect:
        """Shrink by individual margins."""
        return Rect(
            _sat_add(self.x, left),
            _sat_add(self.y, top),
            _sat_sub(self.width, _sat_add(left, right)),
            _sat_sub(self.height, _sat_add(top, bottom)),
        )

    def split_h(self, at: int) -> tuple[Rect, Rect]:
        """Split into left and right parts at a column offset."""
        left = Rect(self.x, self.y, min(at, self.width), self.height)
        right = Rect(
            _sat_add(self.x, at), self.y, _sat_sub(self.width, at), self.height
        )
        return left, right

    def split_v(self, at: int) -> tuple[Rect, Rect]:
        """Split into top and bottom parts at a row offset."""
        top = Rect(self.x, self.y, self.width, min(at, self.height))
        bottom = Rect(
            self.x, _sat_add(self.y, at), self.width, _sat_sub(self.height, at)
        )
        return top, bottom

    def intersect(self, other: Rect) -> Rect | None:
        """The overlapping area, or None if the rects do not overlap."""
        x1 = max(self.x, other.x)
        y1 = max(self.y, other.y)
        x2 = min(self.x + self.width, other.x + other.width)
        y2 = min(self.y + self.height, other.y + other.height)
        if x1 < x2 and y1 < y2:
            return Rect(x1, y1, x2 - x1, y2 - y1)
        return None

    def union(self, other: Rect) -> Rect:
        """The smallest rect containing both."""
        x1 = min(self.x, other.x)
        y1 = min(self.y, other.y)
        x2 = max(self.x + self.width, other.x + other.width)
        y2 = max(self.y + self.height, other.y + other.height)
        return Rect(x1, y1, x2 - x1, y2 - y1)


class LengthKind(enum.Enum):
    """How a Length is to be interpreted."""

    FIXED = "fixed"
    PERCENT = "percent"
    FILL = "fill"
    MIN = "min"
    MAX = "max"


@dataclass(frozen=True)
class Length:
    """A size specification: fixed, percentage, fill weight, or bounded."""

    kind: LengthKind
    value: float

    def __post_init__(self) -> None:
        if not isinstance(self.kind, LengthKind):
            raise TypeError(f"invalid length kind {self.kind!r}")
        if self.kind is LengthKind.PERCENT:
            if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
                raise TypeError("percent must be a number")
            object.__setattr__(self, "value", float(self.value))
        else:
            _check_u16(self.kind.value, self.value)

    @classmethod
    def fixed(cls, value: int) -> Length:
        return cls(LengthKind.FIXED, value)

    @classmethod
    def percent(cls, value: float) -> Length:
        """A fraction of the available space, 0.0 to 1.0."""
        return cls(LengthKind.PERCENT, value)

    @classmethod
    def fill(cls, weight: int) -> Length:
        """Take a share of the remaining space proportional to weight."""
        return cls(LengthKind.FILL, weight)

    @classmethod
    def at_least(cls, value: int) -> Length:
        return cls(LengthKind.MIN, value)

    @classmethod
    def at_most(cls, value: int) -> Length:
        return cls(LengthKind.MAX, value)

    def resolve(self, available: int) -> int:
        """Concrete size given the available space; FILL yields all of it."""
        if self.kind is LengthKind.FIXED:
            return int(self.value)
        if self.kind is LengthKind.PERCENT:
            scaled = available * self.value
            if not scaled > 0:
                return 0
            if scaled >= _U16_MAX:
                return _U16_MAX
            return min(math.floor(scaled + 0.5), _U16_MAX)
        if self.kind is LengthKind.FILL:
            return available
        return min(int(self.value), available)


class Align(enum.Enum):
    """Alignment along the cross axis."""

    START = "start"
    CENTER = "center"
    END = "end"
    STRETCH = "stretch"


class Justify(enum.Enum):
    """Justification along the main axis."""

    START = "start"
    CENTER = "center"
    END = "end"
    SPACE_BETWEEN = "space_between"
    SPACE_AROUND = "space_around"
    SPACE_EVENLY = "space_evenly"


class FlexDirection(enum.Enum):
    """Main axis of a flex layout."""

    ROW = "row"
    COLUMN = "column"