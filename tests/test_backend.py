import io
import os
from datetime import timedelta

import pytest

from rsdrav.backend import Backend, BackendError, TerminalBackend, decode_input
from rsdrav.events import (
    Char,
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


@pytest.fixture
def pipe():
    read_fd, write_fd = os.pipe()
    ends = {"r": read_fd, "w": write_fd}
    yield ends
    for fd in ends.values():
        if fd is not None:
            try:
                os.close(fd)
            except OSError:
                pass


def test_backend_is_abstract():
    with pytest.raises(TypeError):
        Backend()


def test_alt_screen_sequences():
    out = io.BytesIO()
    backend = TerminalBackend(input=0, output=out)
    backend.enter_alt_screen()
    backend.leave_alt_screen()
    assert out.getvalue() == b"\x1b[?1049h\x1b[?1049l"


def test_cursor_goto_is_one_based():
    out = io.BytesIO()
    backend = TerminalBackend(input=0, output=out)
    backend.cursor_goto(4, 2)
    assert out.getvalue() == b"\x1b[3;5H"


def test_cursor_hide_and_show():
    out = io.BytesIO()
    backend = TerminalBackend(input=0, output=out)
    backend.cursor_hide()
    backend.cursor_show()
    assert out.getvalue() == b"\x1b[?25l\x1b[?25h"


def test_mouse_disable_undoes_enable():
    on, off = io.BytesIO(), io.BytesIO()
    TerminalBackend(input=0, output=on).enable_mouse()
    TerminalBackend(input=0, output=off).disable_mouse()
    enabled = [s for s in on.getvalue().split(b"\x1b") if s]
    disabled = [s for s in off.getvalue().split(b"\x1b") if s]
    assert all(s.endswith(b"h") for s in enabled)
    assert all(s.endswith(b"l") for s in disabled)
    assert sorted(s[:-1] for s in enabled) == sorted(s[:-1] for s in disabled)
    assert len(enabled) > 0


def test_write_passes_bytes_through():
    out = io.BytesIO()
    backend = TerminalBackend(input=0, output=out)
    backend.write(b"hello")
    backend.flush()
    assert out.getvalue() == b"hello"


def test_write_rejects_text():
    backend = TerminalBackend(input=0, output=io.BytesIO())
    with pytest.raises(TypeError):
        backend.write("hello")


def test_clear_writes_escape():
    out = io.BytesIO()
    TerminalBackend(input=0, output=out).clear()
    assert out.getvalue().startswith(b"\x1b[")


def test_size_without_terminal_raises():
    backend = TerminalBackend(input=0, output=io.BytesIO())
    with pytest.raises(BackendError):
        backend.size()


def test_raw_mode_on_pipe_raises(pipe):
    backend = TerminalBackend(input=pipe["r"], output=io.BytesIO())
    with pytest.raises(BackendError):
        backend.enter_raw_mode()


def test_leave_raw_mode_without_enter_writes_nothing():
    out = io.BytesIO()
    backend = TerminalBackend(input=0, output=out)
    backend.leave_raw_mode()
    assert out.getvalue() == b""


def test_read_event_decodes_and_queues(pipe):
    os.write(pipe["w"], b"\x1b[Ax")
    backend = TerminalBackend(input=pipe["r"], output=io.BytesIO())
    assert backend.read_event(1.0) == KeyEvent(KeyCode.UP)
    assert backend.read_event(0) == KeyEvent(Char("x"))


def test_read_event_timeout_returns_none(pipe):
    backend = TerminalBackend(input=pipe["r"], output=io.BytesIO())
    assert backend.read_event(timedelta(milliseconds=10)) is None


def test_read_event_closed_input_raises(pipe):
    os.close(pipe["w"])
    pipe["w"] = None
    backend = TerminalBackend(input=pipe["r"], output=io.BytesIO())
    with pytest.raises(BackendError):
        backend.read_event(1.0)


def test_read_event_negative_timeout(pipe):
    backend = TerminalBackend(input=pipe["r"], output=io.BytesIO())
    with pytest.raises(ValueError):
        backend.read_event(-1)


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"a", KeyEvent(Char("a"))),
        (b"A", KeyEvent(Char("A"), KeyModifiers.SHIFT)),
        (b"\r", KeyEvent(KeyCode.ENTER)),
        (b"\t", KeyEvent(KeyCode.TAB)),
        (b"\x7f", KeyEvent(KeyCode.BACKSPACE)),
        (b"\x03", KeyEvent(Char("c"), KeyModifiers.CONTROL)),
        (b"\x1ba", KeyEvent(Char("a"), KeyModifiers.ALT)),
        (b"\x1b", KeyEvent(KeyCode.ESC)),
        (b"\x1b[A", KeyEvent(KeyCode.UP)),
        (b"\x1b[D", KeyEvent(KeyCode.LEFT)),
        (b"\x1b[1;5C", KeyEvent(KeyCode.RIGHT, KeyModifiers.CONTROL)),
        (b"\x1b[Z", KeyEvent(KeyCode.BACK_TAB, KeyModifiers.SHIFT)),
        (b"\x1b[3~", KeyEvent(KeyCode.DELETE)),
        (b"\x1b[5~", KeyEvent(KeyCode.PAGE_UP)),
        (b"\x1bOP", KeyEvent(FunctionKey(1))),
        (b"\x1b[15~", KeyEvent(FunctionKey(5))),
        (b"\x1b[24~", KeyEvent(FunctionKey(12))),
        (b"\x1b[I", FocusGained()),
        (b"\x1b[O", FocusLost()),
        ("é".encode(), KeyEvent(Char("é"))),
    ],
)
def test_decode_single_event(data, expected):
    assert decode_input(data) == [expected]


def test_decode_bracketed_paste():
    events = decode_input(b"\x1b[200~hello world\x1b[201~q")
    assert events == [PasteEvent("hello world"), KeyEvent(Char("q"))]


def test_decode_mouse_press_is_zero_based():
    events = decode_input(b"\x1b[<0;10;5M")
    assert events == [MouseEvent(MouseAction.DOWN, 10 - 1, 5 - 1, MouseButton.LEFT)]


def test_decode_mouse_release_and_drag():
    events = decode_input(b"\x1b[<2;3;4m\x1b[<32;3;4M\x1b[<35;3;4M")
    assert [e.action for e in events] == [
        MouseAction.UP,
        MouseAction.DRAG,
        MouseAction.MOVED,
    ]
    assert events[0].button is MouseButton.RIGHT
    assert events[1].button is MouseButton.LEFT


def test_decode_scroll():
    events = decode_input(b"\x1b[<64;1;1M\x1b[<65;1;1M")
    assert [e.action for e in events] == [MouseAction.SCROLL_UP, MouseAction.SCROLL_DOWN]
    assert all((e.x, e.y) == (0, 0) for e in events)


def test_decode_mouse_modifiers():
    (event,) = decode_input(b"\x1b[<16;2;2M")
    assert event.modifiers == KeyModifiers.CONTROL


def test_decode_unterminated_csi():
    assert decode_input(b"\x1b[") == [KeyEvent(KeyCode.ESC), KeyEvent(Char("["))]


def test_decode_keeps_order():
    events = decode_input(b"ab\x1b[Bc")
    assert events == [
        KeyEvent(Char("a")),
        KeyEvent(Char("b")),
        KeyEvent(KeyCode.DOWN),
        KeyEvent(Char("c")),
    ]


def test_decode_empty():
    assert decode_input(b"") == []


def test_decode_rejects_non_bytes():
    with pytest.raises(TypeError):
        decode_input(42)