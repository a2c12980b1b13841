"""Virtual resolution context: state ownership and public operations."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import numpy as np
from numpy.typing import ArrayLike

from vres.api.config import VirtualResolutionConfig
from vres.api.display import DisplayResizeEvent, DisplaySizeProvider
from vres.api.errors import NotInitialised, TouchDispatchUnavailable
from vres.api.scene import NodeFactory, SceneNodePort
from vres.api.state import ScaleSolution, UserScreenBounds, VirtualResolutionState
from vres.api.touch import DeliveryCycleOracle, TouchDispatchPort
from vres.runtime import converters
from vres.runtime.config import apply_env_overrides, get_runtime_config
from vres.runtime.events import EventBus, Subscription
from vres.runtime.logging import setup_logging
from vres.runtime.scale_solver import solve
from vres.runtime.scene_binder import SceneBinder, SceneBinding
from vres.runtime.touch_rewriter import TouchCoordinateRewriter

logger = logging.getLogger(__name__)


class VirtualResolution:
    """Maps a fixed user coordinate space onto the current display.

    One instance is one independent context: it owns the configuration, the
    last solved scale/offset, the scene bindings and the touch rewriter.
    """

    def __init__(
        self,
        display: DisplaySizeProvider,
        *,
        dispatcher: TouchDispatchPort | None = None,
        node_factory: NodeFactory | None = None,
        cycle_oracle: DeliveryCycleOracle | None = None,
        trace_touch: bool | None = None,
        env_overrides: bool = False,
    ) -> None:
        self._display = display
        self._env_overrides = env_overrides
        self._dispatcher = dispatcher
        self._state: VirtualResolutionState | None = None
        self._binder = SceneBinder(node_factory)
        self._cycle_oracle = cycle_oracle
        self._trace_touch = trace_touch
        self._rewriter: TouchCoordinateRewriter | None = None

    @property
    def state(self) -> VirtualResolutionState | None:
        return self._state

    @property
    def is_initialised(self) -> bool:
        return self._state is not None

    @property
    def solution(self) -> ScaleSolution:
        return self._require("solution").solution

    @property
    def config(self) -> VirtualResolutionConfig:
        return self._require("config").config

    @property
    def scale(self) -> float:
        return self._require("scale").scale

    @property
    def x_offset(self) -> float:
        return self._require("x_offset").x_offset

    @property
    def y_offset(self) -> float:
        return self._require("y_offset").y_offset

    @property
    def touch_scaling_enabled(self) -> bool:
        return self._rewriter is not None and self._rewriter.installed

    def initialise(
        self, config: VirtualResolutionConfig | Mapping[str, object]
    ) -> VirtualResolutionState:
        """Store config and solve for the current display."""
        if not isinstance(config, VirtualResolutionConfig):
            config = VirtualResolutionConfig.from_mapping(config)
        if self._env_overrides:
            config = apply_env_overrides(config)
        state = self._solve(config)
        self._state = state
        logger.info(
            "virtual_resolution_initialised user=(%g,%g) scale=%.4f offset=(%.2f,%.2f)",
            config.user_width,
            config.user_height,
            state.scale,
            state.x_offset,
            state.y_offset,
        )
        return state

    def update(self) -> VirtualResolutionState:
        """Re-read the display size, replace the solved state and re-sync bound scenes."""
        current = self._require("update")
        state = self._solve(current.config)
        self._state = state
        resynced = self._binder.resync_all(state)
        logger.debug(
            "virtual_resolution_updated axis=%s scale=%.4f effective=(%.1f,%.1f) offset=(%.2f,%.2f) scenes=%d",
            state.solution.controlling_axis,
            state.scale,
            state.solution.effective_width,
            state.solution.effective_height,
            state.x_offset,
            state.y_offset,
            resynced,
        )
        return state

    def handle_display_resize(self, event: DisplayResizeEvent | None = None) -> int:
        """Update after a resize/orientation change; returns the bound scene count.

        The size is always re-read from the display provider; event only
        signals the change.
        """
        self.update()
        return len(self._binder.bound_scenes())

    def subscribe_display_resize(self, bus: EventBus) -> Subscription:
        """Run ``handle_display_resize`` for every DisplayResizeEvent published on bus."""
        return bus.subscribe(DisplayResizeEvent, self._on_display_resize)

    def _on_display_resize(self, event: DisplayResizeEvent) -> None:
        self.handle_display_resize(event)

    def apply_to_scene(self, scene: SceneNodePort) -> SceneBinding:
        """Scale and offset everything added to scene; re-syncs if already bound."""
        return self._binder.apply(scene, self._require("apply_to_scene"))

    def release_scene(self, scene: SceneNodePort, keep_children: bool = True) -> None:
        """Remove the transform node from scene, optionally keeping its children."""
        self._binder.release(scene, keep_children=keep_children)

    def binding_for(self, scene: SceneNodePort) -> SceneBinding | None:
        return self._binder.binding_for(scene)

    def scale_touch_events(self, on: bool) -> None:
        """Install or remove touch coordinate rewriting on the dispatcher."""
        if not on:
            if self._rewriter is not None:
                self._rewriter.uninstall()
            return
        self._require("scale_touch_events")
        dispatcher = self._dispatcher
        if dispatcher is None:
            raise TouchDispatchUnavailable("no touch dispatcher attached to this context")
        if self._rewriter is None:
            self._rewriter = TouchCoordinateRewriter(
                state_source=lambda: self._state,
                cycle_oracle=self._resolve_cycle_oracle(dispatcher),
                trace=self._resolve_trace_touch(),
            )
        self._rewriter.install(dispatcher)

    def get_user_x(self, win_x: float) -> float:
        return converters.get_user_x(self._state, win_x)

    def get_user_y(self, win_y: float) -> float:
        return converters.get_user_y(self._state, win_y)

    def get_win_x(self, user_x: float) -> float:
        return converters.get_win_x(self._state, user_x)

    def get_win_y(self, user_y: float) -> float:
        return converters.get_win_y(self._state, user_y)

    def get_user_pos(self, win_x: float, win_y: float) -> tuple[float, float]:
        return converters.get_user_pos(self._state, win_x, win_y)

    def get_win_pos(self, user_x: float, user_y: float) -> tuple[float, float]:
        return converters.get_win_pos(self._state, user_x, user_y)

    def user_to_win_size(self, user_size: float) -> float:
        return converters.user_to_win_size(self._state, user_size)

    def win_to_user_size(self, win_size: float) -> float:
        return converters.win_to_user_size(self._state, win_size)

    def win_to_user_points(self, points: ArrayLike) -> np.ndarray:
        return converters.win_to_user_points(self._state, points)

    def user_to_win_points(self, points: ArrayLike) -> np.ndarray:
        return converters.user_to_win_points(self._state, points)

    def screen_bounds(self) -> UserScreenBounds:
        return converters.screen_bounds(self._state)

    def _solve(self, config: VirtualResolutionConfig) -> VirtualResolutionState:
        display_w, display_h = self._display.display_size()
        solution = solve(config.user_width, config.user_height, display_w, display_h, config)
        return VirtualResolutionState(config=config, solution=solution)

    def _require(self, operation: str) -> VirtualResolutionState:
        state = self._state
        if state is None:
            raise NotInitialised(operation)
        return state

    def _resolve_cycle_oracle(self, dispatcher: TouchDispatchPort) -> DeliveryCycleOracle:
        if self._cycle_oracle is not None:
            return self._cycle_oracle
        factory = getattr(dispatcher, "cycle_oracle", None)
        if factory is None:
            raise TouchDispatchUnavailable(
                "dispatcher provides no delivery-cycle oracle; pass cycle_oracle explicitly"
            )
        oracle: DeliveryCycleOracle = factory()
        return oracle

    def _resolve_trace_touch(self) -> bool:
        if self._trace_touch is not None:
            return self._trace_touch
        return get_runtime_config().trace_touch


def create_virtual_resolution(
    display: DisplaySizeProvider,
    *,
    dispatcher: TouchDispatchPort | None = None,
    node_factory: NodeFactory | None = None,
    cycle_oracle: DeliveryCycleOracle | None = None,
    env_overrides: bool = True,
) -> VirtualResolution:
    """Create a virtual resolution context honouring VRES_* overrides by default."""
    setup_logging()
    return VirtualResolution(
        display,
        dispatcher=dispatcher,
        node_factory=node_factory,
        cycle_oracle=cycle_oracle,
        env_overrides=env_overrides,
    )


__all__ = ["VirtualResolution", "create_virtual_resolution"]
