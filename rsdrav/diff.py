"""Find the parts of a frame that changed since the previous one."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from rsdrav.buffer import Buffer, Cell
from rsdrav.geometry import Rect

_FNV_OFFSET = 0xCBF29CE484222325
_FNV_PRIME = 0x100000001B3
_U64_MASK = (1 << 64) - 1


@dataclass(frozen=True)
class DirtyRegion:
    """A rectangular area that needs to be redrawn."""

    rect: Rect

    def __post_init__(self) -> None:
        if not isinstance(self.rect, Rect):
            raise TypeError("rect must be a Rect")

    @classmethod
    def full_screen(cls, width: int, height: int) -> DirtyRegion:
        """A region covering a whole screen of the given size."""
        return cls(Rect(0, 0, width, height))


def _mix(hash_value: int, value: int) -> int:
    return ((hash_value ^ value) * _FNV_PRIME) & _U64_MASK


def line_hash(line: Sequence[Cell]) -> int:
    """FNV-1a style 64-bit hash of a row of cells, characters and styles."""
    hash_value = _FNV_OFFSET
    for cell in line:
        hash_value = _mix(hash_value, ord(cell.ch))
        for colour in (cell.style.fg, cell.style.bg):
            if colour is not None:
                hash_value = _mix(hash_value, colour.r)
                hash_value = _mix(hash_value, colour.g)
                hash_value = _mix(hash_value, colour.b)
        hash_value = _mix(hash_value, int(cell.style.modifiers))
    return hash_value


def _changed_spans(
    old_line: Sequence[Cell], new_line: Sequence[Cell], y: int
) -> list[DirtyRegion]:
    """Runs of consecutive differing cells within one row."""
    spans = []
    start: int | None = None
    width = min(len(old_line), len(new_line))
    for x, (old_cell, new_cell) in enumerate(zip(old_line, new_line)):
        if old_cell != new_cell:
            if start is None:
                start = x
        elif start is not None:
            spans.append(DirtyRegion(Rect(start, y, x - start, 1)))
            start = None
    if start is not None:
        spans.append(DirtyRegion(Rect(start, y, width - start, 1)))
    return spans


def _merge_adjacent(regions: list[DirtyRegion]) -> list[DirtyRegion]:
    """Join regions on the same row that touch or are one cell apart."""
    if len(regions) <= 1:
        return regions
    ordered = sorted(regions, key=lambda r: (r.rect.y, r.rect.x))
    merged = []
    current = ordered[0].rect
    for region in ordered[1:]:
        following = region.rect
        if current.y == following.y:
            current_end = current.x + current.width
            if following.x <= current_end + 1:
                new_end = max(following.x + following.width, current_end)
                current = Rect(current.x, current.y, new_end - current.x, current.height)
                continue
        merged.append(DirtyRegion(current))
        current = following
    merged.append(DirtyRegion(current))
    return merged


def compute_diff(old: Buffer, new: Buffer) -> list[DirtyRegion]:
    """Regions of `new` that differ from `old`; a size change redraws everything."""
    if old.width != new.width or old.height != new.height:
        return [DirtyRegion.full_screen(new.width, new.height)]

    dirty: list[DirtyRegion] = []
    for y, (old_line, new_line) in enumerate(zip(old.lines(), new.lines())):
        if line_hash(old_line) == line_hash(new_line):
            continue
        dirty.extend(_changed_spans(old_line, new_line, y))
    return _merge_adjacent(dirty)


def compute_diff_precise(old: Buffer, new: Buffer) -> list[DirtyRegion]:
    """Same as compute_diff, which already finds exact spans."""
    return compute_diff(old, new)