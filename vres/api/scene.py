"""Scene graph collaborator contracts."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SceneNodePort(Protocol):
    """Host scene node surface consumed by the scene binder and tree utilities.

    Positions compose as ``parent_x + local_x * parent_x_scale`` (no rotation).
    ``add_child`` is resolved per instance, so the binder can redirect it on a
    scene object while keeping the class implementation reachable.
    """

    x: float
    y: float
    x_scale: float
    y_scale: float
    parent: "SceneNodePort | None"

    @property
    def children(self) -> tuple["SceneNodePort", ...]:
        """Return a snapshot of direct children in insertion order."""

    def add_child(self, child: "SceneNodePort") -> None:
        """Attach child, detaching it from any previous parent."""

    def remove_child(self, child: "SceneNodePort") -> None:
        """Detach a direct child."""

    def remove_from_parent(self) -> None:
        """Detach this node from its parent if it has one."""


class NodeFactory(Protocol):
    """Creates plain transform nodes."""

    def __call__(
        self,
        *,
        x: float,
        y: float,
        x_scale: float,
        y_scale: float,
    ) -> SceneNodePort:
        """Create a detached node with the given transform."""


__all__ = ["NodeFactory", "SceneNodePort"]
