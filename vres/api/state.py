"""Computed virtual resolution state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from vres.api.config import VirtualResolutionConfig


class ControllingAxis(StrEnum):
    """Axis whose fit determines the uniform scale."""

    WIDTH = "WIDTH"
    HEIGHT = "HEIGHT"


@dataclass(frozen=True, slots=True)
class ScaleSolution:
    """Uniform scale and letterbox offsets mapping user space into window space."""

    scale: float
    controlling_axis: ControllingAxis
    effective_width: float
    effective_height: float
    x_offset: float
    y_offset: float
    display_width: float
    display_height: float
    nearest_multiple_applied: bool = False


@dataclass(frozen=True, slots=True)
class VirtualResolutionState:
    """Configuration and the solution computed from it, committed together."""

    config: VirtualResolutionConfig
    solution: ScaleSolution

    @property
    def scale(self) -> float:
        return self.solution.scale

    @property
    def x_offset(self) -> float:
        return self.solution.x_offset

    @property
    def y_offset(self) -> float:
        return self.solution.y_offset


@dataclass(frozen=True, slots=True)
class UserScreenBounds:
    """Full display extent expressed in user coordinates, letterbox included."""

    width: float
    height: float
    min_x: float
    max_x: float
    min_y: float
    max_y: float


__all__ = ["ControllingAxis", "ScaleSolution", "UserScreenBounds", "VirtualResolutionState"]
