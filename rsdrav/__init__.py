"""Terminal UI building blocks: geometry and layout, events and routing, focus, cell buffers, diffing, ANSI rendering, a terminal backend and plugins."""

__version__ = "1.0.0"