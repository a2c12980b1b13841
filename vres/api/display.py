"""Display size contracts and providers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DisplaySizeProvider(Protocol):
    """Synchronous source of the current display/window size in pixels."""

    def display_size(self) -> tuple[float, float]:
        """Return current (width, height)."""


@dataclass(frozen=True, slots=True)
class DisplayResizeEvent:
    """Normalized display resize or orientation change."""

    width: float
    height: float


class StaticDisplaySize:
    """Display provider holding an explicitly set size."""

    def __init__(self, width: float, height: float) -> None:
        self._width = float(width)
        self._height = float(height)

    def display_size(self) -> tuple[float, float]:
        return (self._width, self._height)

    def resize(self, width: float, height: float) -> DisplayResizeEvent:
        """Store a new size and return the matching resize event."""
        self._width = float(width)
        self._height = float(height)
        return DisplayResizeEvent(width=self._width, height=self._height)


class CanvasDisplaySize:
    """Display provider reading the logical size of a rendercanvas-style canvas."""

    def __init__(self, canvas: Any) -> None:
        if not hasattr(canvas, "get_logical_size"):
            raise TypeError("canvas does not expose get_logical_size()")
        self._canvas = canvas

    def display_size(self) -> tuple[float, float]:
        width, height = self._canvas.get_logical_size()
        return (float(width), float(height))


def resize_event_from_payload(event: Mapping[str, object]) -> DisplayResizeEvent | None:
    """Extract a resize event from heterogeneous canvas resize payloads."""
    width = event.get("width")
    height = event.get("height")
    if isinstance(width, (int, float)) and isinstance(height, (int, float)):
        return DisplayResizeEvent(width=float(width), height=float(height))

    for key in ("size", "logical_size"):
        size = event.get(key)
        if isinstance(size, (tuple, list)) and len(size) >= 2:
            w = size[0]
            h = size[1]
            if isinstance(w, (int, float)) and isinstance(h, (int, float)):
                return DisplayResizeEvent(width=float(w), height=float(h))
    return None


__all__ = [
    "CanvasDisplaySize",
    "DisplayResizeEvent",
    "DisplaySizeProvider",
    "StaticDisplaySize",
    "resize_event_from_payload",
]
