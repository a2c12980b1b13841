from __future__ import annotations

import logging

import pytest

from vres.api.config import VirtualResolutionConfig
from vres.api.display import DisplayResizeEvent, StaticDisplaySize
from vres.api.errors import InvalidConfiguration, NotInitialised, TouchDispatchUnavailable
from vres.api.state import ControllingAxis
from vres.runtime.context import VirtualResolution, create_virtual_resolution
from vres.runtime.events import EventBus
from vres.scene.node import Node


def test_initialise_solves_for_current_display(vr: VirtualResolution) -> None:
    assert vr.is_initialised
    assert vr.scale == 2.0
    assert vr.x_offset == 120.0
    assert vr.y_offset == 0.0
    assert vr.solution.controlling_axis is ControllingAxis.HEIGHT
    assert vr.config.user_width == 480


def test_initialise_accepts_camel_case_mapping(display: StaticDisplaySize) -> None:
    context = VirtualResolution(display)
    state = context.initialise({"userSpaceW": 480, "userSpaceH": 640, "nearestMultiple": True})
    assert state.config.nearest_multiple is True
    assert context.scale == 2.0


def test_update_rereads_display_size(vr: VirtualResolution, display: StaticDisplaySize) -> None:
    display.resize(960, 2000)
    state = vr.update()
    assert state.solution.controlling_axis is ControllingAxis.WIDTH
    assert vr.scale == 2.0
    assert vr.x_offset == 0.0
    assert vr.y_offset == 360.0


def test_update_replaces_state_object_as_a_whole(
    vr: VirtualResolution, display: StaticDisplaySize
) -> None:
    before = vr.state
    display.resize(2400, 2560)
    after = vr.update()
    assert before is not None
    assert after is not before
    assert before.scale == 2.0
    assert after.scale == 4.0


def test_operations_before_initialise_fail_fast(display: StaticDisplaySize) -> None:
    context = VirtualResolution(display)
    with pytest.raises(NotInitialised):
        context.update()
    with pytest.raises(NotInitialised):
        context.apply_to_scene(Node())
    with pytest.raises(NotInitialised):
        context.get_user_x(10.0)
    with pytest.raises(NotInitialised):
        context.win_to_user_size(10.0)
    with pytest.raises(NotInitialised):
        _ = context.scale


def test_failed_solve_keeps_previous_state(vr: VirtualResolution, display: StaticDisplaySize) -> None:
    before = vr.state
    display.resize(0, 1280)
    with pytest.raises(InvalidConfiguration):
        vr.update()
    assert vr.state is before


def test_failed_initialise_keeps_previous_state(vr: VirtualResolution) -> None:
    before = vr.state
    with pytest.raises(InvalidConfiguration):
        vr.initialise({"userSpaceW": 0, "userSpaceH": 640})
    assert vr.state is before


def test_context_delegates_conversions(vr: VirtualResolution) -> None:
    assert vr.get_user_pos(220.0, 100.0) == (50.0, 50.0)
    assert vr.get_win_pos(50.0, 50.0) == (220.0, 100.0)
    assert vr.user_to_win_size(40.0) == 80.0
    assert vr.screen_bounds().min_x == -60.0
    assert vr.win_to_user_points([[120.0, 0.0]]).tolist() == [[0.0, 0.0]]


def test_independent_contexts_do_not_share_state() -> None:
    first = VirtualResolution(StaticDisplaySize(960, 1280))
    second = VirtualResolution(StaticDisplaySize(480, 640))
    first.initialise(VirtualResolutionConfig(user_width=480, user_height=640))
    second.initialise(VirtualResolutionConfig(user_width=480, user_height=640))
    assert first.scale == 2.0
    assert second.scale == 1.0


def test_display_resize_event_updates_and_resyncs_bound_scenes(
    vr: VirtualResolution, display: StaticDisplaySize
) -> None:
    scene = Node(name="scene")
    binding = vr.apply_to_scene(scene)
    bus = EventBus()
    vr.subscribe_display_resize(bus)

    invoked = bus.publish(display.resize(1280, 1200))

    assert invoked == 1
    assert vr.solution.controlling_axis is ControllingAxis.HEIGHT
    assert vr.scale == 1.875
    assert binding.transform_node.x_scale == 1.875
    assert binding.transform_node.x == vr.x_offset


def test_handle_display_resize_returns_resynced_count(vr: VirtualResolution) -> None:
    scenes = [Node(name="a"), Node(name="b")]
    for scene in scenes:
        vr.apply_to_scene(scene)
    assert vr.handle_display_resize(DisplayResizeEvent(width=1200, height=1280)) == 2


def test_scale_touch_events_requires_dispatcher(display: StaticDisplaySize) -> None:
    context = VirtualResolution(display)
    context.initialise(VirtualResolutionConfig(user_width=480, user_height=640))
    with pytest.raises(TouchDispatchUnavailable):
        context.scale_touch_events(True)
    context.scale_touch_events(False)
    assert context.touch_scaling_enabled is False


def test_create_virtual_resolution_applies_env_overrides(monkeypatch) -> None:
    from vres.runtime import config as runtime_config

    monkeypatch.setenv("VRES_WINDOW_OVERRIDE", "960x1280")
    runtime_config.initialize_runtime_config()
    try:
        context = create_virtual_resolution(StaticDisplaySize(1200, 1280))
        context.initialise(VirtualResolutionConfig(user_width=480, user_height=640))
        assert context.config.window_override_width == 960.0
        assert context.scale == 2.0
        assert context.x_offset == 120.0
    finally:
        monkeypatch.delenv("VRES_WINDOW_OVERRIDE")
        runtime_config.initialize_runtime_config()


def test_initialise_logs_solution(display: StaticDisplaySize, caplog) -> None:
    context = VirtualResolution(display)
    with caplog.at_level(logging.INFO, logger="vres.runtime.context"):
        context.initialise(VirtualResolutionConfig(user_width=480, user_height=640))
    assert any("virtual_resolution_initialised" in record.message for record in caplog.records)
