"""Window-to-user rewriting of touch coordinates during event delivery.

Touch event objects are reused: the same object travels through every
listener of a delivery chain and is refilled for later phases and cycles.
The rewriter therefore tags each event with the phase it rewrote in the
current delivery cycle; the injected delivery-cycle oracle clears the tag when
a new cycle starts.

- no tag, or tag differs from the phase: rewrite and tag.
- tag equals a ``began``/``ended`` phase: already rewritten in this cycle.
- tag equals ``moved``: a shared event can be retargeted within one cycle, so
  a per-cycle marker (one flag for system events, a set of target ids for
  targeted events) records which deliveries were already rewritten.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from vres.api.errors import NotInitialised
from vres.api.state import VirtualResolutionState
from vres.api.touch import (
    TOUCH_EVENT_NAME,
    DeliveryCycleOracle,
    DispatchMiddleware,
    Listener,
    ListenerHandler,
    TouchDispatchPort,
)

logger = logging.getLogger(__name__)

REWRITE_PHASE_KEY = "vres.rewrite_phase"
MOVED_SYSTEM_KEY = "vres.moved_system"
MOVED_TARGETS_KEY = "vres.moved_targets"


class TouchCoordinateRewriter:
    """Dispatch middleware converting touch ``x``/``y`` into user space in place."""

    def __init__(
        self,
        *,
        state_source: Callable[[], VirtualResolutionState | None],
        cycle_oracle: DeliveryCycleOracle,
        trace: bool = False,
    ) -> None:
        self._state_source = state_source
        self._cycle_oracle = cycle_oracle
        self._trace = trace
        self._port: TouchDispatchPort | None = None
        self._middleware: DispatchMiddleware = self.wrap

    @property
    def installed(self) -> bool:
        return self._port is not None

    def install(self, port: TouchDispatchPort) -> bool:
        """Wrap port's delivery entry point; returns False when already installed."""
        if self._port is not None:
            if self._port is not port:
                raise RuntimeError("touch rewriter is installed on another dispatcher")
            return False
        port.add_middleware(self._middleware)
        self._port = port
        logger.debug("touch_rewriter_installed")
        return True

    def uninstall(self) -> bool:
        """Restore the original delivery entry point; returns False when not installed."""
        port = self._port
        if port is None:
            return False
        port.remove_middleware(self._middleware)
        self._port = None
        logger.debug("touch_rewriter_uninstalled")
        return True

    def wrap(self, next_handler: ListenerHandler) -> ListenerHandler:
        def handle_event_with_listener(event: Any, listener: Listener) -> object:
            if getattr(event, "name", None) == TOUCH_EVENT_NAME:
                self.rewrite(event)
            return next_handler(event, listener)

        return handle_event_with_listener

    def rewrite(self, event: Any) -> bool:
        """Rewrite event coordinates unless already done for this phase/cycle."""
        state = self._state_source()
        if state is None:
            raise NotInitialised("touch rewrite")
        annotations: dict[str, Any] = event.annotations
        if self._cycle_oracle.is_new_delivery_cycle(event):
            annotations.pop(REWRITE_PHASE_KEY, None)
            annotations.pop(MOVED_SYSTEM_KEY, None)
            annotations.pop(MOVED_TARGETS_KEY, None)
        if not _needs_rewrite(event, annotations):
            return False

        win_x = event.x
        win_y = event.y
        event.x = (win_x - state.x_offset) / state.scale
        event.y = (win_y - state.y_offset) / state.scale
        annotations[REWRITE_PHASE_KEY] = event.phase
        if event.phase == "moved":
            if event.target is None:
                annotations[MOVED_SYSTEM_KEY] = True
            else:
                annotations.setdefault(MOVED_TARGETS_KEY, set()).add(id(event.target))
        if self._trace:
            logger.debug(
                "touch_rewritten phase=%s win=(%.1f,%.1f) user=(%.1f,%.1f)",
                event.phase,
                win_x,
                win_y,
                event.x,
                event.y,
            )
        return True


def _needs_rewrite(event: Any, annotations: dict[str, Any]) -> bool:
    if annotations.get(REWRITE_PHASE_KEY) != event.phase:
        return True
    if event.phase != "moved":
        return False
    if event.target is None:
        return not annotations.get(MOVED_SYSTEM_KEY, False)
    return id(event.target) not in annotations.get(MOVED_TARGETS_KEY, ())


__all__ = [
    "MOVED_SYSTEM_KEY",
    "MOVED_TARGETS_KEY",
    "REWRITE_PHASE_KEY",
    "TouchCoordinateRewriter",
]
