# rsdrav

Building blocks for terminal user interfaces, in plain Python with no
runtime dependencies.

| Module | What it holds |
| --- | --- |
| `rsdrav.geometry` | `Rect`, `Length` / `LengthKind`, `Align`, `Justify`, `FlexDirection` |
| `rsdrav.containers` | `Row`, `Column` and `Stack` layouts |
| `rsdrav.flex` | flexbox-style `Flex` with `FlexItem` (grow, shrink, basis, min, max) |
| `rsdrav.events` | `KeyEvent`, `MouseEvent`, `ResizeEvent`, `FocusGained`, `FocusLost`, `PasteEvent`, `EventResult` |
| `rsdrav.routing` | `EventRouter` running `EventHandler`s in capture, target and bubble phases |
| `rsdrav.focus` | `FocusManager` for Tab / Shift+Tab navigation in tab order |
| `rsdrav.buffer` | `Color`, `Modifier`, `Style`, `Cell` and the cell grid `Buffer` |
| `rsdrav.diff` | `compute_diff` and `DirtyRegion`: which parts of a frame changed |
| `rsdrav.renderer` | `Renderer` and `style_codes`: write buffers as ANSI escape sequences |
| `rsdrav.backend` | the `Backend` interface, `TerminalBackend` and `decode_input` |
| `rsdrav.plugins` | `Plugin`, `PluginManager`, `Capability`, `CapabilityDenied`, `ExamplePlugin` |

## Installation

```
pip install rsdrav
```

## Layout

```python
from rsdrav.geometry import Rect, Length, FlexDirection
from rsdrav.containers import Row
from rsdrav.flex import Flex, FlexItem

area = Rect(0, 0, 100, 20)
rects = Row(gap=1).layout(area, [Length.fixed(30), Length.fill(1), Length.fill(1)])
# The first child is 30 cells wide. The two fill children share what is
# left after the fixed width and the gaps.

left, right = area.split_h(40)
inner = area.inner(2)

flex = Flex(FlexDirection.ROW).add(FlexItem(grow=1.0)).add(FlexItem(grow=2.0, max=50))
print(flex.calculate(Rect(0, 0, 90, 10)))
```

`Row` and `Column` place children from the start, the centre or the end of
the main axis. The space-between, space-around and space-evenly values of
`Justify` are accepted but place children from the start.

## Events and routing

```python
from rsdrav.events import Char, KeyEvent, EventResult
from rsdrav.routing import EventRouter, EventHandler, EventPhase

router = EventRouter()
root = router.register(None)
child = router.register(root)

router.add_handler(root, EventHandler(EventPhase.CAPTURE, lambda ev, ctx: EventResult.CONSUMED))
assert router.route(KeyEvent(Char("a")), child) is EventResult.CONSUMED
```

A handler that returns `EventResult.CONSUMED` stops propagation. `route`
returns `CONSUMED` if propagation was stopped, `HANDLED` if a handler called
`ctx.prevent_default()`, and `IGNORED` otherwise.

## Focus

```python
from rsdrav.focus import FocusManager, ComponentId

focus = FocusManager()
focus.register(ComponentId(1), 0, True)
focus.register(ComponentId(2), 1, False)   # skipped by Tab
focus.register(ComponentId(3), 2, True)

focus.focus_next()
assert focus.is_focused(ComponentId(3))
```

## Buffers, diffs and rendering

```python
import io

from rsdrav.backend import TerminalBackend
from rsdrav.buffer import Buffer, Cell, Color, Style
from rsdrav.diff import compute_diff
from rsdrav.renderer import Renderer

before = Buffer(20, 5)
after = before.copy()
after.set(10, 2, Cell("X", Style(fg=Color.RED)))

regions = compute_diff(before, after)
# One dirty region on line 2, starting at x=10, one cell wide.

out = io.BytesIO()
backend = TerminalBackend(output=out)
renderer = Renderer()
renderer.render(backend, None, before)    # first frame: everything
renderer.render(backend, before, after)   # afterwards: only the changes
```

`TerminalBackend` writes ANSI sequences to a binary stream (standard output
by default) and reads input from a file descriptor. Raw mode needs the
POSIX `termios` module and raises `BackendError` where it is missing.
`read_event` waits up to a timeout (seconds or a `timedelta`) and decodes
keys, mouse reports (SGR mode), focus changes and bracketed paste with
`decode_input`, which can also be called directly on bytes:

```python
from rsdrav.backend import decode_input

decode_input(b"a\x1b[A")   # [KeyEvent(Char('a')), KeyEvent(KeyCode.UP)]
```

## Plugins

```python
from rsdrav.plugins import PluginManager, ExamplePlugin

manager = PluginManager()
manager.register(ExamplePlugin("widgets"))
manager.init_all()
print(manager.list_plugins())
```

A plugin that asks for `Capability.EXECUTE` or `Capability.FILE_WRITE` is
refused with `CapabilityDenied`.

## What this package does not do

It has no widgets, no application or event loop, no reactive state, no
command engine and no themes. It does not load plugins from files. It
supplies the layout, event, focus, buffer and rendering pieces that such
things are built on.

## Running the tests

```
pip install -e ".[test]"
pytest
```