"""Scene binding: route child insertion through a scaling transform node."""

from __future__ import annotations

import logging
import weakref
from collections.abc import Callable
from dataclasses import dataclass

from vres.api.errors import AlreadyBound, NoBinding
from vres.api.scene import NodeFactory, SceneNodePort
from vres.api.state import VirtualResolutionState
from vres.scene.node import create_node

logger = logging.getLogger(__name__)

_BINDING_ATTR = "_vres_binding"


@dataclass(slots=True, eq=False)
class SceneBinding:
    """Transform node plus the scene's original insertion entry point."""

    owner: "SceneBinder"
    transform_node: SceneNodePort
    original_add_child: Callable[[SceneNodePort], None]
    had_instance_add_child: bool

    def add_child(self, child: SceneNodePort) -> None:
        """Insert child under the transform node (user space)."""
        self.transform_node.add_child(child)

    def add_child_unscaled(self, child: SceneNodePort) -> None:
        """Insert child directly into the scene (window space)."""
        self.original_add_child(child)

    def sync(self, state: VirtualResolutionState) -> None:
        node = self.transform_node
        node.x = state.x_offset
        node.y = state.y_offset
        node.x_scale = state.scale
        node.y_scale = state.scale


class SceneBinder:
    """Creates, re-syncs and releases per-scene transform nodes."""

    def __init__(self, node_factory: NodeFactory | None = None) -> None:
        self._node_factory: NodeFactory = node_factory or create_node
        self._scenes: weakref.WeakSet[SceneNodePort] = weakref.WeakSet()

    def binding_for(self, scene: SceneNodePort) -> SceneBinding | None:
        binding = getattr(scene, _BINDING_ATTR, None)
        if isinstance(binding, SceneBinding) and binding.owner is self:
            return binding
        return None

    def is_bound(self, scene: SceneNodePort) -> bool:
        return self.binding_for(scene) is not None

    def bound_scenes(self) -> tuple[SceneNodePort, ...]:
        return tuple(self._scenes)

    def apply(self, scene: SceneNodePort, state: VirtualResolutionState) -> SceneBinding:
        """Bind scene on first call; later calls only re-sync the transform node."""
        existing = getattr(scene, _BINDING_ATTR, None)
        if isinstance(existing, SceneBinding):
            if existing.owner is not self:
                raise AlreadyBound(f"{scene!r} is bound by another virtual resolution context")
            existing.sync(state)
            logger.debug(
                "scene_resynced scale=%.4f offset=(%.2f,%.2f)",
                state.scale,
                state.x_offset,
                state.y_offset,
            )
            return existing

        transform_node = self._node_factory(
            x=state.x_offset,
            y=state.y_offset,
            x_scale=state.scale,
            y_scale=state.scale,
        )
        had_instance_add_child = "add_child" in getattr(scene, "__dict__", {})
        original_add_child = scene.add_child
        original_add_child(transform_node)

        binding = SceneBinding(
            owner=self,
            transform_node=transform_node,
            original_add_child=original_add_child,
            had_instance_add_child=had_instance_add_child,
        )
        setattr(scene, _BINDING_ATTR, binding)
        setattr(scene, "scaler_root_node", transform_node)
        setattr(scene, "add_child_unscaled", original_add_child)
        setattr(scene, "add_child", binding.add_child)
        self._scenes.add(scene)
        logger.debug(
            "scene_bound scale=%.4f offset=(%.2f,%.2f)",
            state.scale,
            state.x_offset,
            state.y_offset,
        )
        return binding

    def release(self, scene: SceneNodePort, *, keep_children: bool = True) -> None:
        """Restore the scene's insertion entry point and remove its transform node."""
        binding = self.binding_for(scene)
        if binding is None:
            raise NoBinding(f"{scene!r} has no virtual resolution transform node")

        if binding.had_instance_add_child:
            setattr(scene, "add_child", binding.original_add_child)
        else:
            delattr(scene, "add_child")
        delattr(scene, "add_child_unscaled")
        delattr(scene, "scaler_root_node")
        delattr(scene, _BINDING_ATTR)
        self._scenes.discard(scene)

        transform_node = binding.transform_node
        moved = 0
        if keep_children:
            siblings = scene.children
            # Siblings added after the transform node stay drawn above the moved children.
            later = siblings[siblings.index(transform_node) + 1 :] if transform_node in siblings else ()
            for child in transform_node.children:
                child.x = transform_node.x + child.x * transform_node.x_scale
                child.y = transform_node.y + child.y * transform_node.y_scale
                child.x_scale = child.x_scale * transform_node.x_scale
                child.y_scale = child.y_scale * transform_node.y_scale
                binding.original_add_child(child)
                moved += 1
            for sibling in later:
                binding.original_add_child(sibling)
        transform_node.remove_from_parent()
        logger.debug("scene_released keep_children=%s moved=%d", keep_children, moved)

    def resync_all(self, state: VirtualResolutionState) -> int:
        """Re-apply state to every live binding and return how many were updated."""
        count = 0
        for scene in tuple(self._scenes):
            binding = self.binding_for(scene)
            if binding is None:
                continue
            binding.sync(state)
            count += 1
        return count


__all__ = ["SceneBinder", "SceneBinding"]
