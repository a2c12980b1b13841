"""In-process pub/sub used to fan out display resize events."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

TEvent = TypeVar("TEvent")
EventHandler = Callable[[Any], None]


@dataclass(frozen=True, slots=True)
class Subscription:
    """Token returned by ``subscribe``; hand it back to ``unsubscribe``."""

    id: int


class RuntimeEventBus:
    """Handlers registered per event type; publishing walks the event's MRO.

    A handler subscribed to a base class receives subclass events. Handlers
    run in subscription order.
    """

    def __init__(self) -> None:
        self._next_id = 1
        self._handlers: dict[type[Any], dict[int, EventHandler]] = {}
        self._owners: dict[int, type[Any]] = {}

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        sub_id = self._next_id
        self._next_id += 1
        self._handlers.setdefault(event_type, {})[sub_id] = handler
        self._owners[sub_id] = event_type
        return Subscription(sub_id)

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription if present."""
        event_type = self._owners.pop(subscription.id, None)
        if event_type is None:
            return
        handlers = self._handlers[event_type]
        del handlers[subscription.id]
        if not handlers:
            del self._handlers[event_type]

    def publish(self, event: object) -> int:
        """Publish one event and return number of invoked handlers."""
        matched: list[tuple[int, EventHandler]] = []
        for event_type in type(event).__mro__:
            handlers = self._handlers.get(event_type)
            if handlers:
                matched.extend(handlers.items())
        matched.sort(key=lambda item: item[0])
        invoked = 0
        for sub_id, handler in matched:
            if sub_id not in self._owners:
                continue
            handler(event)
            invoked += 1
        logger.debug("event_published type=%s handlers=%d", type(event).__name__, invoked)
        return invoked


EventBus = RuntimeEventBus


def create_event_bus() -> RuntimeEventBus:
    """Create the bus hosts publish ``DisplayResizeEvent`` on."""
    return RuntimeEventBus()


__all__ = ["EventBus", "RuntimeEventBus", "Subscription", "create_event_bus"]
