"""In-process event dispatcher with an interceptable delivery entry point."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from vres.api.touch import (
    TOUCH_EVENT_NAME,
    TOUCH_PHASES,
    DispatchedEvent,
    DispatchMiddleware,
    Listener,
    ListenerHandler,
    TouchEvent,
    TouchPhase,
)

_CYCLE_KEY = "vres.delivery_cycle"


def deliver_to_listener(event: Any, listener: Listener) -> object:
    """Innermost delivery step: call the listener with the event."""
    return listener(event)


class TouchDispatcher:
    """Listener registry that delivers events through a middleware chain.

    Touch events are pooled per target and reused across phases and dispatch
    calls, so per-event state written by middleware survives between cycles.
    Every ``dispatch``/``dispatch_touch`` call is one delivery cycle.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[tuple[Any, Listener]]] = {}
        self._middlewares: list[DispatchMiddleware] = []
        self._handler: ListenerHandler = deliver_to_listener
        self._touch_pool: dict[int | None, TouchEvent] = {}
        self._cycle = 0

    @property
    def cycle(self) -> int:
        return self._cycle

    def cycle_oracle(self) -> "FrameDeliveryCycle":
        """Return an oracle bound to this dispatcher's cycle counter."""
        return FrameDeliveryCycle(lambda: self._cycle)

    def add_event_listener(self, name: str, listener: Listener, *, target: Any = None) -> None:
        """Register listener for events named name, optionally scoped to a target."""
        normalized = name.strip()
        if not normalized:
            raise ValueError("event name must not be empty")
        self._listeners.setdefault(normalized, []).append((target, listener))

    def remove_event_listener(self, name: str, listener: Listener, *, target: Any = None) -> None:
        """Remove a listener registration if present."""
        entries = self._listeners.get(name)
        if not entries:
            return
        self._listeners[name] = [
            entry for entry in entries if not (entry[0] is target and entry[1] == listener)
        ]

    def add_middleware(self, middleware: DispatchMiddleware) -> None:
        """Wrap the delivery entry point; later middleware runs first."""
        self._middlewares.append(middleware)
        self._rebuild_chain()

    def remove_middleware(self, middleware: DispatchMiddleware) -> None:
        """Remove middleware if present."""
        if middleware not in self._middlewares:
            return
        self._middlewares.remove(middleware)
        self._rebuild_chain()

    def handle_event_with_listener(self, event: Any, listener: Listener) -> object:
        """Deliver one event to one listener through the middleware chain."""
        return self._handler(event, listener)

    def dispatch(self, event: DispatchedEvent) -> int:
        """Start a cycle and deliver event to listeners matching its name and target."""
        self._cycle += 1
        return self._deliver_all(event)

    def dispatch_touch(self, phase: TouchPhase, x: float, y: float, *, touch_id: int = 0) -> int:
        """Start a cycle and deliver a touch to system listeners and each target.

        Each target receives its own pooled event object, refreshed with the
        raw window coordinates.
        """
        if phase not in TOUCH_PHASES:
            raise ValueError(f"unknown touch phase: {phase!r}")
        self._cycle += 1
        invoked = 0
        for target in self._touch_targets():
            event = self._pooled_touch_event(target)
            event.phase = phase
            event.x = float(x)
            event.y = float(y)
            event.id = touch_id
            invoked += self._deliver_all(event)
        return invoked

    def touch_event_for(self, target: Any = None) -> TouchEvent | None:
        """Return the pooled touch event used for target, if one exists."""
        return self._touch_pool.get(None if target is None else id(target))

    def _deliver_all(self, event: DispatchedEvent) -> int:
        invoked = 0
        for target, listener in tuple(self._listeners.get(event.name, ())):
            if target is not event.target:
                continue
            self._handler(event, listener)
            invoked += 1
        return invoked

    def _touch_targets(self) -> list[Any]:
        targets: list[Any] = []
        for target, _ in self._listeners.get(TOUCH_EVENT_NAME, ()):
            if not any(existing is target for existing in targets):
                targets.append(target)
        return targets

    def _pooled_touch_event(self, target: Any) -> TouchEvent:
        key = None if target is None else id(target)
        event = self._touch_pool.get(key)
        if event is None or event.target is not target:
            event = TouchEvent(phase="began", x=0.0, y=0.0, target=target)
            self._touch_pool[key] = event
        return event

    def _rebuild_chain(self) -> None:
        handler: ListenerHandler = deliver_to_listener
        for middleware in self._middlewares:
            handler = middleware(handler)
        self._handler = handler


class FrameDeliveryCycle:
    """Delivery-cycle oracle tracking the last cycle id seen per event."""

    def __init__(self, cycle_source: Callable[[], int]) -> None:
        self._cycle_source = cycle_source

    def is_new_delivery_cycle(self, event: DispatchedEvent) -> bool:
        current = self._cycle_source()
        if event.annotations.get(_CYCLE_KEY) == current:
            return False
        event.annotations[_CYCLE_KEY] = current
        return True


__all__ = ["FrameDeliveryCycle", "TouchDispatcher", "deliver_to_listener"]
