"""Public virtual resolution contracts."""

from vres.api.config import VirtualResolutionConfig
from vres.api.display import (
    CanvasDisplaySize,
    DisplayResizeEvent,
    DisplaySizeProvider,
    StaticDisplaySize,
    resize_event_from_payload,
)
from vres.api.errors import (
    AlreadyBound,
    InvalidConfiguration,
    NoBinding,
    NotInitialised,
    TouchDispatchUnavailable,
    VirtualResolutionError,
)
from vres.api.logging import LoggingConfig
from vres.api.scene import NodeFactory, SceneNodePort
from vres.api.state import ControllingAxis, ScaleSolution, UserScreenBounds, VirtualResolutionState
from vres.api.touch import (
    AppEvent,
    DeliveryCycleOracle,
    DispatchMiddleware,
    ListenerHandler,
    TouchDispatchPort,
    TouchEvent,
    TouchPhase,
)

__all__ = [
    "AlreadyBound",
    "AppEvent",
    "CanvasDisplaySize",
    "ControllingAxis",
    "DeliveryCycleOracle",
    "DispatchMiddleware",
    "DisplayResizeEvent",
    "DisplaySizeProvider",
    "InvalidConfiguration",
    "ListenerHandler",
    "LoggingConfig",
    "NoBinding",
    "NodeFactory",
    "NotInitialised",
    "ScaleSolution",
    "SceneNodePort",
    "StaticDisplaySize",
    "TouchDispatchPort",
    "TouchDispatchUnavailable",
    "TouchEvent",
    "TouchPhase",
    "UserScreenBounds",
    "VirtualResolutionConfig",
    "VirtualResolutionError",
    "VirtualResolutionState",
    "resize_event_from_payload",
]
