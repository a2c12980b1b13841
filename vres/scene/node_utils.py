"""Scene tree helpers: world/local coordinates, teardown, default sizing.

Coordinates follow parent links, so a scene's ``scaler_root_node`` takes part
like any other node. Inside touch listeners ``get_local_coords`` is a cheaper
alternative to global touch rewriting.
"""

from __future__ import annotations

from typing import Any

from vres.api.scene import SceneNodePort


def get_world_coords(node: SceneNodePort) -> tuple[float, float]:
    world_x = node.x
    world_y = node.y
    parent = node.parent
    while parent is not None:
        world_x = world_x * parent.x_scale + parent.x
        world_y = world_y * parent.y_scale + parent.y
        parent = parent.parent
    return world_x, world_y


def get_world_coord_x(node: SceneNodePort) -> float:
    return get_world_coords(node)[0]


def get_world_coord_y(node: SceneNodePort) -> float:
    return get_world_coords(node)[1]


def get_local_coords(
    world_x: float, world_y: float, local_node: SceneNodePort
) -> tuple[float, float]:
    """Express a world position in the coordinate space local_node is positioned in."""
    chain: list[SceneNodePort] = []
    parent = local_node.parent
    while parent is not None:
        chain.append(parent)
        parent = parent.parent
    local_x = world_x
    local_y = world_y
    # Undo the outermost transform first.
    for ancestor in reversed(chain):
        local_x = (local_x - ancestor.x) / ancestor.x_scale
        local_y = (local_y - ancestor.y) / ancestor.y_scale
    return local_x, local_y


def _call_hooks(node: SceneNodePort, hook_names: tuple[str, ...]) -> None:
    for hook_name in hook_names:
        hook = getattr(node, hook_name, None)
        if callable(hook):
            hook()


def pause_nodes_in_tree(node: SceneNodePort) -> None:
    """Pause timers and tweens on node and every descendant that supports it."""
    _call_hooks(node, ("pause_timers", "pause_tweens"))
    for child in node.children:
        pause_nodes_in_tree(child)


def resume_nodes_in_tree(node: SceneNodePort) -> None:
    _call_hooks(node, ("resume_timers", "resume_tweens"))
    for child in node.children:
        resume_nodes_in_tree(child)


def destroy_node(node: SceneNodePort) -> None:
    """Cancel timers/tweens when supported and detach node from its parent."""
    _call_hooks(node, ("cancel_timers", "cancel_tweens"))
    node.remove_from_parent()


def destroy_nodes_in_tree(node: SceneNodePort, destroy_root: bool = False) -> None:
    """Destroy every descendant of node, keeping any virtual resolution scaler node.

    The scaler node itself survives; its children are destroyed.
    """
    scaler = getattr(node, "scaler_root_node", None)
    for child in node.children:
        is_scaler = child is scaler
        destroy_nodes_in_tree(child, destroy_root=not is_scaler)
    if destroy_root:
        destroy_node(node)


def set_default_size(
    node: Any,
    w: float | None = None,
    h: float | None = None,
    keep_ratio: bool = True,
    scale_now: bool = True,
) -> None:
    """Record an absolute default size in pixels as default scale factors.

    With keep_ratio, giving only one of w/h scales the other axis equally.
    """
    default_x = w / node.w if w is not None else None
    default_y = h / node.h if h is not None else None
    if keep_ratio:
        if default_x is None and default_y is not None:
            default_x = default_y
        if default_y is None and default_x is not None:
            default_y = default_x
    node.default_scale_x = 1.0 if default_x is None else default_x
    node.default_scale_y = 1.0 if default_y is None else default_y
    node.default_w = w
    node.default_h = h
    if scale_now:
        node.x_scale = node.default_scale_x
        node.y_scale = node.default_scale_y


def set_size(node: Any, w: float | None = None, h: float | None = None, keep_ratio: bool = True) -> None:
    """One-off sizing; does not touch the recorded default scale."""
    w_scale = w / node.w if w is not None else None
    h_scale = h / node.h if h is not None else None
    if w_scale is not None:
        node.x_scale = w_scale
    if h_scale is not None:
        node.y_scale = h_scale
    if keep_ratio:
        if h_scale is not None and w_scale is None:
            node.x_scale = h_scale
        if w_scale is not None and h_scale is None:
            node.y_scale = w_scale


def get_scaled_x(node: Any, x: float) -> float:
    default = getattr(node, "default_scale_x", None)
    return x if default is None else x * default


def get_scaled_y(node: Any, y: float) -> float:
    default = getattr(node, "default_scale_y", None)
    return y if default is None else y * default


def set_relative_scale(
    node: Any, x_scale: float | None = None, y_scale: float | None = None
) -> None:
    """Set scales relative to the size recorded by ``set_default_size``."""
    if x_scale is not None:
        node.x_scale = get_scaled_x(node, x_scale)
    if y_scale is not None:
        node.y_scale = get_scaled_y(node, y_scale)


def get_width(node: Any) -> float:
    return float(node.w * node.x_scale)


def get_height(node: Any) -> float:
    return float(node.h * node.y_scale)


__all__ = [
    "destroy_node",
    "destroy_nodes_in_tree",
    "get_height",
    "get_local_coords",
    "get_scaled_x",
    "get_scaled_y",
    "get_width",
    "get_world_coord_x",
    "get_world_coord_y",
    "get_world_coords",
    "pause_nodes_in_tree",
    "resume_nodes_in_tree",
    "set_default_size",
    "set_relative_scale",
    "set_size",
]
