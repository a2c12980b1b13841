"""Virtual resolution runtime modules."""

from vres.runtime.config import RuntimeConfig, apply_env_overrides, load_runtime_config
from vres.runtime.context import VirtualResolution, create_virtual_resolution
from vres.runtime.dispatch import FrameDeliveryCycle, TouchDispatcher
from vres.runtime.events import EventBus, Subscription, create_event_bus
from vres.runtime.logging import configure_logging, setup_logging
from vres.runtime.scale_solver import solve
from vres.runtime.scene_binder import SceneBinder, SceneBinding
from vres.runtime.touch_rewriter import TouchCoordinateRewriter

__all__ = [
    "EventBus",
    "FrameDeliveryCycle",
    "RuntimeConfig",
    "SceneBinder",
    "SceneBinding",
    "Subscription",
    "TouchCoordinateRewriter",
    "TouchDispatcher",
    "VirtualResolution",
    "apply_env_overrides",
    "configure_logging",
    "create_event_bus",
    "create_virtual_resolution",
    "load_runtime_config",
    "setup_logging",
    "solve",
]
