"""Retained scene node used when no host scene graph is attached."""

from __future__ import annotations

from collections.abc import Callable

from vres.api.scene import SceneNodePort


class Node:
    """Minimal 2D transform node with ordered children.

    Local position composes with the parent as ``parent.x + x * parent.x_scale``.
    ``w``/``h`` are the unscaled content size (image size for sprites).
    """

    def __init__(
        self,
        *,
        x: float = 0.0,
        y: float = 0.0,
        x_scale: float = 1.0,
        y_scale: float = 1.0,
        w: float = 0.0,
        h: float = 0.0,
        name: str = "",
    ) -> None:
        self.x = float(x)
        self.y = float(y)
        self.x_scale = float(x_scale)
        self.y_scale = float(y_scale)
        self.w = float(w)
        self.h = float(h)
        self.name = name
        self.parent: SceneNodePort | None = None
        self._children: list[SceneNodePort] = []
        self._timers: list[Callable[[], None]] = []
        self._tweens: list[Callable[[], None]] = []

    def __repr__(self) -> str:
        label = self.name or hex(id(self))
        return f"Node({label}, x={self.x:g}, y={self.y:g}, scale=({self.x_scale:g},{self.y_scale:g}))"

    @property
    def children(self) -> tuple[SceneNodePort, ...]:
        return tuple(self._children)

    def add_child(self, child: SceneNodePort) -> None:
        if child is self:
            raise ValueError("node cannot be its own child")
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self._children.append(child)

    def remove_child(self, child: SceneNodePort) -> None:
        try:
            self._children.remove(child)
        except ValueError:
            raise ValueError(f"{child!r} is not a child of {self!r}") from None
        child.parent = None

    def remove_from_parent(self) -> None:
        if self.parent is None:
            return
        self.parent.remove_child(self)

    def add_timer(self, cancel: Callable[[], None]) -> None:
        """Track a running timer by its cancel callback."""
        self._timers.append(cancel)

    def add_tween(self, cancel: Callable[[], None]) -> None:
        """Track a running tween by its cancel callback."""
        self._tweens.append(cancel)

    def cancel_timers(self) -> None:
        timers = self._timers
        self._timers = []
        for cancel in timers:
            cancel()

    def cancel_tweens(self) -> None:
        tweens = self._tweens
        self._tweens = []
        for cancel in tweens:
            cancel()


def create_node(*, x: float, y: float, x_scale: float, y_scale: float) -> Node:
    """Default transform node factory."""
    return Node(x=x, y=y, x_scale=x_scale, y_scale=y_scale, name="scaler_root_node")


__all__ = ["Node", "create_node"]
