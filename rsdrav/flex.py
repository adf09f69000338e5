"""Flexbox-style layout with grow, shrink, basis and size limits."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Iterable

from rsdrav.geometry import FlexDirection, Length, LengthKind, Rect

_U16_MAX = 0xFFFF


def _sat_add(a: int, b: int) -> int:
    return min(a + b, _U16_MAX)


def _sat_sub(a: int, b: int) -> int:
    return max(a - b, 0)


def _f32(value: float) -> float:
    """Round a number to single precision."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return float("inf") if value > 0 else float("-inf")


def _to_u16(value: float) -> int:
    """Saturating float-to-u16 conversion, truncating toward zero."""
    if value != value or value <= 0:
        return 0
    if value >= _U16_MAX:
        return _U16_MAX
    return int(value)


def _f32_sum(values: Iterable[float]) -> float:
    total = 0.0
    for value in values:
        total = _f32(total + _f32(value))
    return total


def _check_bound(name: str, value: int | None) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int or None")
    if not 0 <= value <= _U16_MAX:
        raise ValueError(f"{name} must be in 0..={_U16_MAX}, got {value}")


@dataclass(frozen=True)
class FlexItem:
    """Sizing rules for one child of a Flex container."""

    grow: float = 0.0
    shrink: float = 1.0
    basis: Length = field(default_factory=lambda: Length.fill(0))
    min: int | None = None
    max: int | None = None

    def __post_init__(self) -> None:
        for name in ("grow", "shrink"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise TypeError(f"{name} must be a number")
            object.__setattr__(self, name, float(value))
        if not isinstance(self.basis, Length):
            raise TypeError("basis must be a Length")
        _check_bound("min", self.min)
        _check_bound("max", self.max)

    def _base_size(self, main_size: int) -> int:
        kind = self.basis.kind
        if kind is LengthKind.PERCENT:
            size = _to_u16(_f32(_f32(main_size) * _f32(self.basis.value)))
        elif kind is LengthKind.FILL:
            size = 0
        elif kind is LengthKind.MAX:
            size = min(int(self.basis.value), main_size)
        else:
            size = int(self.basis.value)
        if self.min is not None:
            size = max(size, self.min)
        if self.max is not None:
            size = min(size, self.max)
        return size


class Flex:
    """A container that sizes its items along one axis."""

    def __init__(
        self, direction: FlexDirection, items: Iterable[FlexItem] = ()
    ) -> None:
        if not isinstance(direction, FlexDirection):
            raise TypeError(f"invalid flex direction {direction!r}")
        self.direction = direction
        self.items: list[FlexItem] = []
        for item in items:
            self.add(item)

    def add(self, item: FlexItem) -> Flex:
        """Append an item; returns the container for chaining."""
        if not isinstance(item, FlexItem):
            raise TypeError("only FlexItem values can be added")
        self.items.append(item)
        return self

    def calculate(self, container: Rect) -> list[Rect]:
        """One rect per item, laid out back to back along the main axis."""
        if not self.items:
            return []

        if self.direction is FlexDirection.ROW:
            main_size, cross_size = container.width, container.height
        else:
            main_size, cross_size = container.height, container.width

        sizes = [item._base_size(main_size) for item in self.items]
        total = min(sum(sizes), _U16_MAX)
        if total < main_size:
            sizes = self._grow(sizes, main_size)
        elif total > main_size:
            sizes = self._shrink(sizes, main_size)

        return self._to_rects(sizes, container, cross_size)

    def _grow(self, sizes: list[int], main_size: int) -> list[int]:
        remaining = _sat_sub(main_size, min(sum(sizes), _U16_MAX))
        if remaining == 0:
            return sizes
        total_grow = _f32_sum(item.grow for item in self.items)
        if total_grow <= 0:
            return sizes

        def grown(size: int, item: FlexItem) -> int:
            grow = _f32(item.grow)
            if not grow > 0:
                return size
            amount = _to_u16(_f32(_f32(remaining * grow) / total_grow))
            new_size = _sat_add(size, amount)
            if item.max is not None:
                new_size = min(new_size, item.max)
            return new_size

        return [grown(size, item) for size, item in zip(sizes, self.items)]

    def _shrink(self, sizes: list[int], main_size: int) -> list[int]:
        overflow = _sat_sub(min(sum(sizes), _U16_MAX), main_size)
        if overflow == 0:
            return sizes
        total_shrink = _f32_sum(item.shrink for item in self.items)
        if total_shrink <= 0:
            return sizes

        def shrunk(size: int, item: FlexItem) -> int:
            shrink = _f32(item.shrink)
            if not (shrink > 0 and size > 0):
                return size
            amount = _to_u16(_f32(_f32(overflow * shrink) / total_shrink))
            new_size = _sat_sub(size, amount)
            if item.min is not None:
                new_size = max(new_size, item.min)
            return new_size

        return [shrunk(size, item) for size, item in zip(sizes, self.items)]

    def _to_rects(
        self, sizes: list[int], container: Rect, cross_size: int
    ) -> list[Rect]:
        rects = []
        offset = 0
        for size in sizes:
            if self.direction is FlexDirection.ROW:
                rect = Rect(
                    _sat_add(container.x, offset),
                    container.y,
                    size,
                    min(cross_size, container.height),
                )
            else:
                rect = Rect(
                    container.x,
                    _sat_add(container.y, offset),
                    min(cross_size, container.width),
                    size,
                )
            rects.append(rect)
            offset = _sat_add(offset, size)
        return rects