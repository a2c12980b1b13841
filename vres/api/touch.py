"""Touch event and dispatch contracts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Final, Literal, Protocol

TouchPhase = Literal["began", "moved", "ended"]

TOUCH_EVENT_NAME: Final = "touch"
TOUCH_PHASES: Final[tuple[TouchPhase, ...]] = ("began", "moved", "ended")


class DispatchedEvent(Protocol):
    """Event surface shared by everything the dispatcher delivers."""

    name: str
    target: Any
    annotations: dict[str, Any]


@dataclass(slots=True, eq=False)
class TouchEvent:
    """Mutable touch event, reused by the dispatcher across phases and cycles.

    ``annotations`` is transient per-event scratch space owned by the
    dispatcher; interceptors keep their own keys in it.
    """

    phase: TouchPhase
    x: float
    y: float
    target: Any = None
    id: int = 0
    name: str = TOUCH_EVENT_NAME
    annotations: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True, eq=False)
class AppEvent:
    """Non-touch event (orientation, accelerometer, ...) passed through untouched."""

    name: str
    data: dict[str, Any] = field(default_factory=dict)
    target: Any = None
    annotations: dict[str, Any] = field(default_factory=dict)


Listener = Callable[[Any], object]
ListenerHandler = Callable[[Any, Listener], object]
DispatchMiddleware = Callable[[ListenerHandler], ListenerHandler]


class TouchDispatchPort(Protocol):
    """Interceptable event-with-listener delivery entry point."""

    def add_middleware(self, middleware: DispatchMiddleware) -> None:
        """Wrap the delivery entry point with middleware."""

    def remove_middleware(self, middleware: DispatchMiddleware) -> None:
        """Remove previously added middleware."""


class DeliveryCycleOracle(Protocol):
    """Tells whether a delivery belongs to a new dispatch cycle for this event."""

    def is_new_delivery_cycle(self, event: DispatchedEvent) -> bool:
        """Return True on the first delivery of event in the current cycle."""


__all__ = [
    "AppEvent",
    "DeliveryCycleOracle",
    "DispatchMiddleware",
    "DispatchedEvent",
    "Listener",
    "ListenerHandler",
    "TOUCH_EVENT_NAME",
    "TOUCH_PHASES",
    "TouchDispatchPort",
    "TouchEvent",
    "TouchPhase",
]
