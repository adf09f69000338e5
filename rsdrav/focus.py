"""Keyboard focus tracking with Tab / Shift+Tab navigation."""

from __future__ import annotations

import itertools
from dataclasses import dataclass


@dataclass(frozen=True)
class ComponentId:
    """Identifier of a focusable component."""

    value: int


@dataclass
class _Focusable:
    id: ComponentId
    order: int
    focusable: bool


class FocusManager:
    """Holds components in tab order and knows which one has focus."""

    def __init__(self) -> None:
        self._components: list[_Focusable] = []
        self._current: ComponentId | None = None
        self._ids = itertools.count(1)

    @property
    def current(self) -> ComponentId | None:
        """The focused component, if any."""
        return self._current

    def new_id(self) -> ComponentId:
        """A fresh, unique component id."""
        return ComponentId(next(self._ids))

    def register(self, id: ComponentId, order: int, focusable: bool) -> None:
        """Add or re-register a component; lower order is focused first."""
        self._components = [c for c in self._components if c.id != id]
        self._components.append(_Focusable(id, order, focusable))
        self._components.sort(key=lambda c: c.order)
        if self._current is None and focusable:
            self._current = id

    def unregister(self, id: ComponentId) -> None:
        """Remove a component; if it had focus, move focus on."""
        self._components = [c for c in self._components if c.id != id]
        if self._current == id:
            self._current = None
            if self._components:
                self.focus_next()

    def is_focused(self, id: ComponentId) -> bool:
        return self._current == id

    def focus(self, id: ComponentId) -> bool:
        """Focus a registered, focusable component; report whether it worked."""
        for component in self._components:
            if component.id == id:
                if component.focusable:
                    self._current = id
                    return True
                return False
        return False

    def _current_index(self) -> int | None:
        if self._current is None:
            return None
        return next(
            (i for i, c in enumerate(self._components) if c.id == self._current),
            None,
        )

    def _focus_first_focusable(self, indices) -> bool:
        for index in indices:
            component = self._components[index]
            if component.focusable:
                self._current = component.id
                return True
        return False

    def focus_next(self) -> bool:
        """Move focus forward, wrapping around."""
        count = len(self._components)
        if not count:
            return False
        index = self._current_index()
        start = 0 if index is None else index + 1
        return self._focus_first_focusable((start + k) % count for k in range(count))

    def focus_prev(self) -> bool:
        """Move focus backward, wrapping around."""
        count = len(self._components)
        if not count:
            return False
        index = self._current_index()
        start = count - 1 if index is None else (index - 1) % count
        return self._focus_first_focusable((start - k) % count for k in range(count))

    def clear(self) -> None:
        """Drop focus but keep registrations."""
        self._current = None

    def clear_all(self) -> None:
        """Forget every component and drop focus."""
        self._components.clear()
        self._current = None

    def count(self) -> int:
        return len(self._components)

    def focusable_count(self) -> int:
        return sum(1 for c in self._components if c.focusable)