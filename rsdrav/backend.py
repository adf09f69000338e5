"""Terminal control: the backend interface, an ANSI terminal backend and input decoding."""

from __future__ import annotations

import collections
import os
import select
import sys
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import BinaryIO, Iterator

from rsdrav.events import (
    Char,
    Event,
    FocusGained,
    FocusLost,
    FunctionKey,
    KeyCode,
    KeyEvent,
    KeyModifiers,
    MouseAction,
    MouseButton,
    MouseEvent,
    PasteEvent,
)

try:
    import termios
    import tty
except ImportError:  # not available on every platform
    termios = None
    tty = None

_U16_MAX = 0xFFFF
_ESC = "\x1b"
_PASTE_END = "\x1b[201~"
_READ_SIZE = 4096

_ALT_SCREEN_ON = b"\x1b[?1049h"
_ALT_SCREEN_OFF = b"\x1b[?1049l"
_MOUSE_MODES = (1000, 1002, 1003, 1015, 1006)
_CLEAR_ALL = b"\x1b[2J"
_CURSOR_SHOW = b"\x1b[?25h"
_CURSOR_HIDE = b"\x1b[?25l"


class BackendError(Exception):
    """The terminal could not be controlled or read."""


class Backend(ABC):
    """Operations a terminal backend provides to the renderer and the event loop."""

    @abstractmethod
    def enter_raw_mode(self) -> None:
        """Disable line buffering and echo."""

    @abstractmethod
    def leave_raw_mode(self) -> None:
        """Restore the terminal mode saved when raw mode was entered."""

    @abstractmethod
    def enter_alt_screen(self) -> None:
        """Switch to the alternate screen."""

    @abstractmethod
    def leave_alt_screen(self) -> None:
        """Return to the main screen."""

    @abstractmethod
    def enable_mouse(self) -> None:
        """Start reporting mouse events."""

    @abstractmethod
    def disable_mouse(self) -> None:
        """Stop reporting mouse events."""

    @abstractmethod
    def size(self) -> tuple[int, int]:
        """Terminal size as (columns, rows)."""

    @abstractmethod
    def clear(self) -> None:
        """Clear the whole screen."""

    @abstractmethod
    def flush(self) -> None:
        """Push buffered output to the terminal."""

    @abstractmethod
    def write(self, content: bytes) -> None:
        """Write raw bytes to the terminal."""

    @abstractmethod
    def read_event(self, timeout: float | timedelta) -> Event | None:
        """Wait up to timeout for an input event; None if none arrived."""

    @abstractmethod
    def cursor_goto(self, x: int, y: int) -> None:
        """Move the cursor to a zero-based cell position."""

    @abstractmethod
    def cursor_show(self) -> None:
        """Make the cursor visible."""

    @abstractmethod
    def cursor_hide(self) -> None:
        """Make the cursor invisible."""


def _timeout_seconds(timeout: float | timedelta) -> float:
    if isinstance(timeout, timedelta):
        seconds = timeout.total_seconds()
    elif isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise TypeError("timeout must be a number of seconds or a timedelta")
    else:
        seconds = float(timeout)
    if seconds < 0:
        raise ValueError("timeout must not be negative")
    return seconds


class TerminalBackend(Backend):
    """A backend that speaks ANSI escape sequences over file descriptors."""

    def __init__(
        self, input: BinaryIO | int | None = None, output: BinaryIO | None = None
    ) -> None:
        self._input = input if input is not None else sys.stdin
        self._output = output if output is not None else sys.stdout.buffer
        self._saved_mode: list | None = None
        self._pending: collections.deque[Event] = collections.deque()

    def _input_fd(self) -> int:
        if isinstance(self._input, int):
            return self._input
        try:
            return self._input.fileno()
        except (AttributeError, OSError, ValueError) as exc:
            raise BackendError(f"input has no file descriptor: {exc}") from exc

    def _emit(self, content: bytes, flush: bool = True) -> None:
        try:
            self._output.write(content)
            if flush:
                self._output.flush()
        except (OSError, ValueError) as exc:
            raise BackendError(str(exc)) from exc

    def enter_raw_mode(self) -> None:
        if termios is None or tty is None:
            raise BackendError("raw mode is not supported on this platform")
        fd = self._input_fd()
        try:
            saved = termios.tcgetattr(fd)
            tty.setraw(fd)
        except (termios.error, OSError) as exc:
            raise BackendError(f"cannot enter raw mode: {exc}") from exc
        if self._saved_mode is None:
            self._saved_mode = saved

    def leave_raw_mode(self) -> None:
        if self._saved_mode is None:
            return
        fd = self._input_fd()
        try:
            termios.tcsetattr(fd, termios.TCSAFLUSH, self._saved_mode)
        except (termios.error, OSError) as exc:
            raise BackendError(f"cannot leave raw mode: {exc}") from exc
        self._saved_mode = None

    def enter_alt_screen(self) -> None:
        self._emit(_ALT_SCREEN_ON)

    def leave_alt_screen(self) -> None:
        self._emit(_ALT_SCREEN_OFF)

    def enable_mouse(self) -> None:
        self._emit(b"".join(b"\x1b[?%dh" % mode for mode in _MOUSE_MODES))

    def disable_mouse(self) -> None:
        self._emit(b"".join(b"\x1b[?%dl" % mode for mode in reversed(_MOUSE_MODES)))

    def size(self) -> tuple[int, int]:
        try:
            fd = self._output.fileno()
            columns, lines = os.get_terminal_size(fd)
        except (AttributeError, OSError, ValueError) as exc:
            raise BackendError(f"cannot query terminal size: {exc}") from exc
        return min(columns, _U16_MAX), min(lines, _U16_MAX)

    def clear(self) -> None:
        self._emit(_CLEAR_ALL)

    def flush(self) -> None:
        try:
            self._output.flush()
        except (OSError, ValueError) as exc:
            raise BackendError(str(exc)) from exc

    def write(self, content: bytes) -> None:
        if not isinstance(content, (bytes, bytearray, memoryview)):
            raise TypeError("content must be bytes")
        self._emit(bytes(content), flush=False)

    def read_event(self, timeout: float | timedelta) -> Event | None:
        seconds = _timeout_seconds(timeout)
        if self._pending:
            return self._pending.popleft()
        fd = self._input_fd()
        try:
            ready, _, _ = select.select([fd], [], [], seconds)
            if not ready:
                return None
            data = os.read(fd, _READ_SIZE)
        except OSError as exc:
            raise BackendError(f"cannot read input: {exc}") from exc
        if not data:
            raise BackendError("input closed")
        self._pending.extend(decode_input(data))
        return self._pending.popleft() if self._pending else None

    def cursor_goto(self, x: int, y: int) -> None:
        self._emit(b"\x1b[%d;%dH" % (y + 1, x + 1), flush=False)

    def cursor_show(self) -> None:
        self._emit(_CURSOR_SHOW)

    def cursor_hide(self) -> None:
        self._emit(_CURSOR_HIDE)


_SS3_KEYS = {
    "P": FunctionKey(1),
    "Q": FunctionKey(2),
    "R": FunctionKey(3),
    "S": FunctionKey(4),
    "A": KeyCode.UP,
    "B": KeyCode.DOWN,
    "C": KeyCode.RIGHT,
    "D": KeyCode.LEFT,
    "H": KeyCode.HOME,
    "F": KeyCode.END,
}

_CSI_LETTER_KEYS = {
    "A": KeyCode.UP,
    "B": KeyCode.DOWN,
    "C": KeyCode.RIGHT,
    "D": KeyCode.LEFT,
    "H": KeyCode.HOME,
    "F": KeyCode.END,
    "P": FunctionKey(1),
    "Q": FunctionKey(2),
    "R": FunctionKey(3),
    "S": FunctionKey(4),
}

_TILDE_KEYS = {
    1: KeyCode.HOME,
    2: KeyCode.INSERT,
    3: KeyCode.DELETE,
    4: KeyCode.END,
    5: KeyCode.PAGE_UP,
    6: KeyCode.PAGE_DOWN,
    7: KeyCode.HOME,
    8: KeyCode.END,
    11: FunctionKey(1),
    12: FunctionKey(2),
    13: FunctionKey(3),
    14: FunctionKey(4),
    15: FunctionKey(5),
    17: FunctionKey(6),
    18: FunctionKey(7),
    19: FunctionKey(8),
    20: FunctionKey(9),
    21: FunctionKey(10),
    23: FunctionKey(11),
    24: FunctionKey(12),
}

_MOUSE_BUTTONS = {0: MouseButton.LEFT, 1: MouseButton.MIDDLE, 2: MouseButton.RIGHT}


def _key_for_char(ch: str) -> KeyEvent:
    code = ord(ch)
    if ch in "\r\n":
        return KeyEvent(KeyCode.ENTER)
    if ch == "\t":
        return KeyEvent(KeyCode.TAB)
    if ch in "\x7f\x08":
        return KeyEvent(KeyCode.BACKSPACE)
    if code == 0:
        return KeyEvent(KeyCode.NULL)
    if 0x01 <= code <= 0x1A:
        return KeyEvent(Char(chr(code + 0x60)), KeyModifiers.CONTROL)
    if 0x1C <= code <= 0x1F:
        return KeyEvent(Char(chr(code + 0x40)), KeyModifiers.CONTROL)
    if ch.isupper():
        return KeyEvent(Char(ch), KeyModifiers.SHIFT)
    return KeyEvent(Char(ch))


def _csi_modifiers(params: str) -> KeyModifiers:
    parts = params.split(";")
    if len(parts) < 2 or not parts[1].isdigit():
        return KeyModifiers.NONE
    bits = max(int(parts[1]) - 1, 0)
    mods = KeyModifiers.NONE
    if bits & 1:
        mods |= KeyModifiers.SHIFT
    if bits & 2:
        mods |= KeyModifiers.ALT
    if bits & 4:
        mods |= KeyModifiers.CONTROL
    if bits & 8:
        mods |= KeyModifiers.META
    return mods


def _mouse_event(params: str, final: str) -> MouseEvent | None:
    fields = params[1:].split(";")
    if len(fields) != 3 or not all(f.isdigit() for f in fields):
        return None
    cb, cx, cy = (int(f) for f in fields)
    x = min(max(cx - 1, 0), _U16_MAX)
    y = min(max(cy - 1, 0), _U16_MAX)

    mods = KeyModifiers.NONE
    if cb & 4:
        mods |= KeyModifiers.SHIFT
    if cb & 8:
        mods |= KeyModifiers.ALT
    if cb & 16:
        mods |= KeyModifiers.CONTROL

    low = cb & 3
    button = _MOUSE_BUTTONS.get(low)
    if cb & 64:
        if low == 0:
            return MouseEvent(MouseAction.SCROLL_UP, x, y, modifiers=mods)
        if low == 1:
            return MouseEvent(MouseAction.SCROLL_DOWN, x, y, modifiers=mods)
        return MouseEvent(MouseAction.MOVED, x, y, modifiers=mods)
    if cb & 32:
        if button is None:
            return MouseEvent(MouseAction.MOVED, x, y, modifiers=mods)
        return MouseEvent(MouseAction.DRAG, x, y, button, mods)
    if final == "m" or button is None:
        return MouseEvent(MouseAction.UP, x, y, button or MouseButton.LEFT, mods)
    return MouseEvent(MouseAction.DOWN, x, y, button, mods)


def _csi_event(params: str, final: str) -> Event | None:
    if params.startswith("<"):
        return _mouse_event(params, final) if final in "Mm" else None
    if final in _CSI_LETTER_KEYS:
        return KeyEvent(_CSI_LETTER_KEYS[final], _csi_modifiers(params))
    if final == "Z":
        return KeyEvent(KeyCode.BACK_TAB, KeyModifiers.SHIFT)
    if final == "I" and not params:
        return FocusGained()
    if final == "O" and not params:
        return FocusLost()
    if final == "~":
        first = params.split(";")[0]
        if first.isdigit() and int(first) in _TILDE_KEYS:
            return KeyEvent(_TILDE_KEYS[int(first)], _csi_modifiers(params))
    return None


def _parse_csi(text: str, start: int) -> tuple[Event | None, int]:
    """Decode a CSI sequence whose parameters begin at start; return the event and next position."""
    n = len(text)
    i = start
    while i < n and "\x30" <= text[i] <= "\x3f":
        i += 1
    while i < n and "\x20" <= text[i] <= "\x2f":
        i += 1
    if i >= n or not "\x40" <= text[i] <= "\x7e":
        # Not a complete sequence: a lone Escape, then the rest as ordinary input.
        return KeyEvent(KeyCode.ESC), start - 1
    params, final, end = text[start:i], text[i], i + 1
    if final == "~" and params == "200":
        close = text.find(_PASTE_END, end)
        if close < 0:
            return PasteEvent(text[end:]), n
        return PasteEvent(text[end:close]), close + len(_PASTE_END)
    return _csi_event(params, final), end


def _events(text: str) -> Iterator[Event]:
    pos = 0
    n = len(text)
    while pos < n:
        ch = text[pos]
        if ch != _ESC:
            yield _key_for_char(ch)
            pos += 1
            continue
        if pos + 1 >= n:
            yield KeyEvent(KeyCode.ESC)
            pos += 1
            continue
        following = text[pos + 1]
        if following == "[":
            event, pos = _parse_csi(text, pos + 2)
            if event is not None:
                yield event
        elif following == "O" and pos + 2 < n and text[pos + 2] in _SS3_KEYS:
            yield KeyEvent(_SS3_KEYS[text[pos + 2]])
            pos += 3
        elif following == _ESC:
            yield KeyEvent(KeyCode.ESC)
            pos += 1
        else:
            key = _key_for_char(following)
            yield KeyEvent(key.code, key.modifiers | KeyModifiers.ALT)
            pos += 2


def decode_input(data: bytes) -> list[Event]:
    """Turn raw terminal input into events, in the order they were typed."""
    if isinstance(data, str):
        text = data
    elif isinstance(data, (bytes, bytearray, memoryview)):
        text = bytes(data).decode("utf-8", errors="replace")
    else:
        raise TypeError("input data must be bytes")
    return list(_events(text))