"""Resolution-independent scaling for 2D scene graphs."""

from vres.api.config import VirtualResolutionConfig
from vres.api.display import CanvasDisplaySize, DisplayResizeEvent, StaticDisplaySize
from vres.api.errors import (
    AlreadyBound,
    InvalidConfiguration,
    NoBinding,
    NotInitialised,
    TouchDispatchUnavailable,
    VirtualResolutionError,
)
from vres.api.state import ControllingAxis, ScaleSolution, UserScreenBounds
from vres.api.touch import AppEvent, TouchEvent
from vres.runtime.context import VirtualResolution, create_virtual_resolution
from vres.runtime.dispatch import TouchDispatcher
from vres.scene.node import Node

__all__ = [
    "AlreadyBound",
    "AppEvent",
    "CanvasDisplaySize",
    "ControllingAxis",
    "DisplayResizeEvent",
    "InvalidConfiguration",
    "NoBinding",
    "Node",
    "NotInitialised",
    "ScaleSolution",
    "StaticDisplaySize",
    "TouchDispatchUnavailable",
    "TouchDispatcher",
    "TouchEvent",
    "UserScreenBounds",
    "VirtualResolution",
    "VirtualResolutionConfig",
    "VirtualResolutionError",
    "create_virtual_resolution",
]
