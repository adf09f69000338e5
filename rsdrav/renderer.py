"""Draw buffers to a backend, sending only what changed since the last frame."""

from __future__ import annotations

from rsdrav.backend import Backend
from rsdrav.buffer import Buffer, Modifier, Style
from rsdrav.diff import DirtyRegion, compute_diff

_RESET = "\x1b[0m"

_MODIFIER_CODES = (
    (Modifier.BOLD, "\x1b[1m"),
    (Modifier.DIM, "\x1b[2m"),
    (Modifier.ITALIC, "\x1b[3m"),
    (Modifier.UNDERLINE, "\x1b[4m"),
    (Modifier.BLINK, "\x1b[5m"),
    (Modifier.REVERSE, "\x1b[7m"),
    (Modifier.HIDDEN, "\x1b[8m"),
    (Modifier.STRIKETHROUGH, "\x1b[9m"),
)


def style_codes(style: Style) -> str:
    """ANSI escape sequence that resets attributes and then applies style."""
    parts = [_RESET]
    if style.fg is not None:
        parts.append(f"\x1b[38;2;{style.fg.r};{style.fg.g};{style.fg.b}m")
    if style.bg is not None:
        parts.append(f"\x1b[48;2;{style.bg.r};{style.bg.g};{style.bg.b}m")
    parts.extend(code for flag, code in _MODIFIER_CODES if style.modifiers & flag)
    return "".join(parts)


class Renderer:
    """Writes buffer contents to a backend, redrawing only dirty regions."""

    def __init__(self) -> None:
        self._first_render = True

    @property
    def first_render(self) -> bool:
        """True until the first frame has been drawn."""
        return self._first_render

    def render(
        self, backend: Backend, prev_buffer: Buffer | None, buffer: Buffer
    ) -> None:
        """Draw buffer; without a previous frame (or on the first call) redraw everything."""
        if self._first_render or prev_buffer is None:
            self._first_render = False
            regions = [DirtyRegion.full_screen(buffer.width, buffer.height)]
        else:
            regions = compute_diff(prev_buffer, buffer)

        if not regions:
            return

        for region in regions:
            self._render_region(backend, buffer, region)
        backend.flush()

    @staticmethod
    def _render_region(backend: Backend, buffer: Buffer, region: DirtyRegion) -> None:
        rect = region.rect
        y_end = min(rect.y + rect.height, buffer.height)
        x_end = min(rect.x + rect.width, buffer.width)
        for y in range(rect.y, y_end):
            backend.cursor_goto(rect.x, y)
            parts: list[str] = []
            current: Style | None = None
            for x in range(rect.x, x_end):
                cell = buffer.get(x, y)
                if cell is None:
                    continue
                if current != cell.style:
                    parts.append(style_codes(cell.style))
                    current = cell.style
                parts.append(cell.ch)
            if current is not None:
                parts.append(_RESET)
            backend.write("".join(parts).encode("utf-8"))