from __future__ import annotations

import pytest

from vres.runtime.context import VirtualResolution
from vres.scene.node import Node
from vres.scene.node_utils import (
    destroy_node,
    destroy_nodes_in_tree,
    get_height,
    get_local_coords,
    get_scaled_x,
    get_scaled_y,
    get_width,
    get_world_coord_x,
    get_world_coord_y,
    get_world_coords,
    pause_nodes_in_tree,
    resume_nodes_in_tree,
    set_default_size,
    set_relative_scale,
    set_size,
)


def _chain() -> tuple[Node, Node, Node]:
    root = Node(x=10.0, y=20.0, x_scale=2.0, y_scale=3.0, name="root")
    middle = Node(x=5.0, y=5.0, x_scale=0.5, y_scale=0.5, name="middle")
    leaf = Node(x=4.0, y=-2.0, name="leaf")
    root.add_child(middle)
    middle.add_child(leaf)
    return root, middle, leaf


def test_world_coords_compose_parent_transforms() -> None:
    _, _, leaf = _chain()
    assert get_world_coords(leaf) == (24.0, 32.0)
    assert get_world_coord_x(leaf) == 24.0
    assert get_world_coord_y(leaf) == 32.0


def test_local_coords_invert_world_coords() -> None:
    _, _, leaf = _chain()
    world_x, world_y = get_world_coords(leaf)
    assert get_local_coords(world_x, world_y, leaf) == pytest.approx((4.0, -2.0))


def test_local_coords_inside_bound_scene_match_user_space(vr: VirtualResolution) -> None:
    scene = Node(name="scene")
    vr.apply_to_scene(scene)
    sprite = Node(name="sprite")
    scene.add_child(sprite)
    assert get_local_coords(220.0, 100.0, sprite) == vr.get_user_pos(220.0, 100.0)


def test_destroy_node_cancels_and_detaches() -> None:
    parent = Node()
    child = Node()
    parent.add_child(child)
    cancelled: list[str] = []
    child.add_timer(lambda: cancelled.append("timer"))
    child.add_tween(lambda: cancelled.append("tween"))

    destroy_node(child)

    assert parent.children == ()
    assert cancelled == ["timer", "tween"]


def test_destroy_nodes_in_tree_keeps_scaler_node(vr: VirtualResolution) -> None:
    scene = Node(name="scene")
    binding = vr.apply_to_scene(scene)
    sprite = Node(name="sprite")
    sprite.add_child(Node(name="glow"))
    scene.add_child(sprite)
    hud = Node(name="hud")
    scene.add_child_unscaled(hud)

    destroy_nodes_in_tree(scene)

    assert scene.children == (binding.transform_node,)
    assert binding.transform_node.children == ()
    assert sprite.children == ()


def test_destroy_nodes_in_tree_can_remove_root() -> None:
    root, middle, leaf = _chain()
    holder = Node()
    holder.add_child(root)

    destroy_nodes_in_tree(root, destroy_root=True)

    assert holder.children == ()
    assert root.children == ()
    assert middle.children == ()
    assert leaf.parent is None


def test_default_size_keeps_ratio_and_drives_relative_scale() -> None:
    sprite = Node(w=50.0, h=25.0)

    set_default_size(sprite, w=100.0)

    assert (sprite.x_scale, sprite.y_scale) == (2.0, 2.0)
    assert (get_width(sprite), get_height(sprite)) == (100.0, 50.0)
    set_relative_scale(sprite, x_scale=0.5)
    assert sprite.x_scale == 1.0
    assert sprite.y_scale == 2.0
    assert get_scaled_x(sprite, 3.0) == 6.0
    assert get_scaled_y(sprite, 3.0) == 6.0


def test_default_size_without_ratio_or_immediate_scaling() -> None:
    sprite = Node(w=50.0, h=25.0)

    set_default_size(sprite, h=100.0, keep_ratio=False, scale_now=False)

    assert (sprite.x_scale, sprite.y_scale) == (1.0, 1.0)
    assert sprite.default_scale_x == 1.0
    assert sprite.default_scale_y == 4.0


def test_scaled_values_pass_through_without_default_size() -> None:
    sprite = Node(w=10.0, h=10.0)
    assert get_scaled_x(sprite, 3.0) == 3.0
    set_relative_scale(sprite, y_scale=0.25)
    assert sprite.y_scale == 0.25


def test_set_size_is_one_off() -> None:
    sprite = Node(w=40.0, h=20.0)

    set_size(sprite, h=40.0)
    assert (sprite.x_scale, sprite.y_scale) == (2.0, 2.0)

    set_size(sprite, w=20.0, h=10.0)
    assert (sprite.x_scale, sprite.y_scale) == (0.5, 0.5)

    set_size(sprite, w=80.0, keep_ratio=False)
    assert (sprite.x_scale, sprite.y_scale) == (2.0, 0.5)
    assert not hasattr(sprite, "default_scale_x")


class _ClockedNode(Node):
    def __init__(self, name: str, log: list[str]) -> None:
        super().__init__(name=name)
        self.log = log

    def pause_timers(self) -> None:
        self.log.append(f"{self.name}:pause_timers")

    def pause_tweens(self) -> None:
        self.log.append(f"{self.name}:pause_tweens")

    def resume_timers(self) -> None:
        self.log.append(f"{self.name}:resume_timers")

    def resume_tweens(self) -> None:
        self.log.append(f"{self.name}:resume_tweens")


def test_pause_and_resume_walk_tree_and_skip_nodes_without_hooks(vr: VirtualResolution) -> None:
    log: list[str] = []
    scene = _ClockedNode("scene", log)
    vr.apply_to_scene(scene)
    sprite = _ClockedNode("sprite", log)
    sprite.add_child(_ClockedNode("glow", log))
    scene.add_child(sprite)

    pause_nodes_in_tree(scene)
    resume_nodes_in_tree(scene)

    assert log == [
        "scene:pause_timers",
        "scene:pause_tweens",
        "sprite:pause_timers",
        "sprite:pause_tweens",
        "glow:pause_timers",
        "glow:pause_tweens",
        "scene:resume_timers",
        "scene:resume_tweens",
        "sprite:resume_timers",
        "sprite:resume_tweens",
        "glow:resume_timers",
        "glow:resume_tweens",
    ]
