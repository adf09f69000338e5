"""Row, column and stack containers that split an area among their children."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Sequence

from rsdrav.geometry import Align, Justify, Length, LengthKind, Rect

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


def _check_u16(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if not 0 <= value <= _U16_MAX:
        raise ValueError(f"{name} must be in 0..={_U16_MAX}, got {value}")


def _check_modes(align: Align, justify: Justify | None = None) -> None:
    if not isinstance(align, Align):
        raise TypeError(f"invalid alignment {align!r}")
    if justify is not None and not isinstance(justify, Justify):
        raise TypeError(f"invalid justification {justify!r}")


def _fill_share(remaining: int, weight: int, total_weight: int) -> int:
    return _to_u16(_f32(_f32(remaining * weight) / total_weight))


def _main_axis(
    lengths: Sequence[Length], origin: int, extent: int, gap: int, justify: Justify
) -> list[tuple[int, int]]:
    """Offsets and sizes of each child along the main axis."""
    for length in lengths:
        if not isinstance(length, Length):
            raise TypeError(f"expected a Length, got {length!r}")
    if not lengths:
        return []

    count = len(lengths)
    total_gap = min(gap * (count - 1), _U16_MAX)
    available = _sat_sub(extent, total_gap)

    resolved = [
        None if length.kind is LengthKind.FILL else length.resolve(available)
        for length in lengths
    ]
    remaining = available
    for size in resolved:
        if size is not None:
            remaining = _sat_sub(remaining, size)

    total_weight = 0
    for length in lengths:
        if length.kind is LengthKind.FILL:
            total_weight = _sat_add(total_weight, int(length.value))

    sizes = [
        size
        if size is not None
        else (
            _fill_share(remaining, int(length.value), total_weight)
            if total_weight > 0
            else 0
        )
        for size, length in zip(resolved, lengths)
    ]

    total_size = min(sum(sizes), _U16_MAX)
    slack = _sat_sub(extent, _sat_add(total_size, total_gap))
    if justify is Justify.END:
        position = _sat_add(origin, slack)
    elif justify is Justify.CENTER:
        position = _sat_add(origin, slack // 2)
    else:
        position = origin

    placed = []
    for size in sizes:
        placed.append((position, size))
        position = _sat_add(_sat_add(position, size), gap)
    return placed


def _cross_start(align: Align, origin: int, extent: int) -> int:
    if align is Align.END:
        return _sat_add(origin, _sat_sub(extent, extent))
    if align is Align.CENTER:
        return _sat_sub(_sat_add(origin, extent // 2), extent // 2)
    return origin


@dataclass
class Row:
    """Lays children out left to right with an optional gap between them."""

    gap: int = 0
    align: Align = Align.STRETCH
    justify: Justify = Justify.START

    def __post_init__(self) -> None:
        _check_u16("gap", self.gap)
        _check_modes(self.align, self.justify)

    def layout(self, area: Rect, lengths: Sequence[Length]) -> list[Rect]:
        """One rect per child width; fill weights share what is left over."""
        y = _cross_start(self.align, area.y, area.height)
        return [
            Rect(x, y, width, area.height)
            for x, width in _main_axis(
                lengths, area.x, area.width, self.gap, self.justify
            )
        ]


@dataclass
class Column:
    """Lays children out top to bottom with an optional gap between them."""

    gap: int = 0
    align: Align = Align.STRETCH
    justify: Justify = Justify.START

    def __post_init__(self) -> None:
        _check_u16("gap", self.gap)
        _check_modes(self.align, self.justify)

    def layout(self, area: Rect, lengths: Sequence[Length]) -> list[Rect]:
        """One rect per child height; fill weights share what is left over."""
        x = _cross_start(self.align, area.x, area.width)
        return [
            Rect(x, y, area.width, height)
            for y, height in _main_axis(
                lengths, area.y, area.height, self.gap, self.justify
            )
        ]


@dataclass
class Stack:
    """Overlays children: every child receives the whole area."""

    align: Align = Align.STRETCH

    def __post_init__(self) -> None:
        _check_modes(self.align)

    def layout(self, area: Rect, count: int) -> list[Rect]:
        return [area] * count