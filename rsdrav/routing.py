"""Event propagation through a component tree in capture, target and bubble phases."""

from __future__ import annotations

import enum
import itertools
from dataclasses import dataclass
from typing import Callable, Iterable

from rsdrav.events import Event, EventResult


class EventPhase(enum.Enum):
    """Stage of propagation an event is in."""

    CAPTURE = "capture"
    TARGET = "target"
    BUBBLE = "bubble"


@dataclass
class EventRoutingContext:
    """Mutable state shared by the handlers of one routed event."""

    phase: EventPhase = EventPhase.CAPTURE
    stopped: bool = False
    prevented: bool = False

    def stop_propagation(self) -> None:
        """No further components receive the event."""
        self.stopped = True

    def prevent_default(self) -> None:
        """Mark the default action as suppressed."""
        self.prevented = True

    def should_continue(self) -> bool:
        return not self.stopped


HandlerFunc = Callable[[Event, EventRoutingContext], EventResult]


class EventHandler:
    """A callback that only runs during one propagation phase."""

    def __init__(self, phase: EventPhase, handler: HandlerFunc) -> None:
        if not isinstance(phase, EventPhase):
            raise TypeError(f"invalid event phase {phase!r}")
        if not callable(handler):
            raise TypeError("handler must be callable")
        self.phase = phase
        self._handler = handler

    def handle(self, event: Event, ctx: EventRoutingContext) -> EventResult:
        """Run the callback if the context is in this handler's phase."""
        if self.phase is ctx.phase:
            return self._handler(event, ctx)
        return EventResult.IGNORED

    def __repr__(self) -> str:
        return f"EventHandler(phase={self.phase.name})"


class EventRouter:
    """Keeps a child-to-parent hierarchy and the handlers of each component."""

    def __init__(self) -> None:
        self._parents: dict[int, int] = {}
        self._handlers: dict[int, list[EventHandler]] = {}
        self._ids = itertools.count(1)

    def register(self, parent: int | None = None) -> int:
        """Add a component, optionally under a parent, and return its id."""
        component = next(self._ids)
        if parent is not None:
            self._parents[component] = parent
        return component

    def add_handler(self, component: int, handler: EventHandler) -> None:
        if not isinstance(handler, EventHandler):
            raise TypeError("handler must be an EventHandler")
        self._handlers.setdefault(component, []).append(handler)

    def _ancestors(self, target: int) -> list[int]:
        """Ancestors of target, nearest first."""
        chain = []
        current = target
        while current in self._parents:
            current = self._parents[current]
            chain.append(current)
        return chain

    def _dispatch(
        self, component: int, event: Event, ctx: EventRoutingContext
    ) -> None:
        for handler in self._handlers.get(component, ()):
            if handler.handle(event, ctx) is EventResult.CONSUMED:
                ctx.stop_propagation()
                break

    def _dispatch_all(
        self, components: Iterable[int], event: Event, ctx: EventRoutingContext
    ) -> None:
        for component in components:
            if not ctx.should_continue():
                break
            self._dispatch(component, event, ctx)

    def route(self, event: Event, target: int) -> EventResult:
        """Deliver an event to target and its ancestors; report the overall outcome."""
        ctx = EventRoutingContext()
        ancestors = self._ancestors(target)
        root_first = [*reversed(ancestors), target]

        ctx.phase = EventPhase.CAPTURE
        self._dispatch_all(ancestors, event, ctx)

        if ctx.should_continue():
            ctx.phase = EventPhase.TARGET
            self._dispatch(target, event, ctx)

        if ctx.should_continue():
            ctx.phase = EventPhase.BUBBLE
            self._dispatch_all(root_first[1:], event, ctx)

        if ctx.stopped:
            return EventResult.CONSUMED
        if ctx.prevented:
            return EventResult.HANDLED
        return EventResult.IGNORED

    def unregister(self, component: int) -> None:
        """Forget a component's parent link and its handlers."""
        self._parents.pop(component, None)
        self._handlers.pop(component, None)