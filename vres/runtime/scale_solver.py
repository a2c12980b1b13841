"""Scale and letterbox offset computation.

The solver fits user space into the target window preserving aspect ratio,
then runs an ordered adjustment pipeline when no window override is set:

1. nearest integer multiple (optionally abandoned when it covers too little),
2. forced coverage fraction, only when no nearest multiple was applied,
3. max-screen clamps, width before height, otherwise.

Offsets always centre the effective extent inside the raw display size.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Protocol

from vres.api.config import VirtualResolutionConfig
from vres.api.errors import InvalidConfiguration
from vres.api.state import ControllingAxis, ScaleSolution


class NearestMultipleStatus(StrEnum):
    UNSET = "UNSET"
    APPLIED = "APPLIED"
    FAILED = "FAILED"


@dataclass(frozen=True, slots=True)
class ScaleCandidate:
    """Intermediate solve result threaded through adjustment strategies."""

    user_width: float
    user_height: float
    display_width: float
    display_height: float
    scale: float
    controlling_axis: ControllingAxis
    effective_width: float
    effective_height: float
    nearest_multiple: NearestMultipleStatus = NearestMultipleStatus.UNSET

    def user_extent(self, axis: ControllingAxis) -> float:
        return self.user_width if axis is ControllingAxis.WIDTH else self.user_height

    def display_extent(self, axis: ControllingAxis) -> float:
        return self.display_width if axis is ControllingAxis.WIDTH else self.display_height

    def effective_extent(self, axis: ControllingAxis) -> float:
        return self.effective_width if axis is ControllingAxis.WIDTH else self.effective_height

    def with_extent(self, axis: ControllingAxis, extent: float) -> "ScaleCandidate":
        """Pin one axis to extent and derive scale and the other axis from it."""
        scale = extent / self.user_extent(axis)
        if axis is ControllingAxis.WIDTH:
            return replace(
                self,
                scale=scale,
                effective_width=extent,
                effective_height=scale * self.user_height,
            )
        return replace(
            self,
            scale=scale,
            effective_width=scale * self.user_width,
            effective_height=extent,
        )


class ScaleStrategy(Protocol):
    """One pure step of the adjustment pipeline."""

    def apply(self, candidate: ScaleCandidate) -> ScaleCandidate:
        """Return the adjusted candidate."""


@dataclass(frozen=True, slots=True)
class NearestMultipleStrategy:
    """Snap scale down to an integer so user pixels map to whole window pixels."""

    ignore_if_too_small: float | None = None

    def apply(self, candidate: ScaleCandidate) -> ScaleCandidate:
        snapped = float(math.floor(candidate.scale))
        if snapped <= 0.0:
            return replace(candidate, nearest_multiple=NearestMultipleStatus.FAILED)
        result = replace(
            candidate,
            scale=snapped,
            effective_width=snapped * candidate.user_width,
            effective_height=snapped * candidate.user_height,
            nearest_multiple=NearestMultipleStatus.APPLIED,
        )
        threshold = self.ignore_if_too_small
        if threshold is not None:
            axis = candidate.controlling_axis
            coverage = result.effective_extent(axis) / candidate.display_extent(axis)
            if coverage < threshold:
                return replace(candidate, nearest_multiple=NearestMultipleStatus.FAILED)
        return result


@dataclass(frozen=True, slots=True)
class ForceScaleStrategy:
    """Cover an explicit fraction of the display on the controlling axis."""

    fraction: float

    def apply(self, candidate: ScaleCandidate) -> ScaleCandidate:
        if candidate.nearest_multiple is NearestMultipleStatus.APPLIED:
            return candidate
        axis = candidate.controlling_axis
        return candidate.with_extent(axis, self.fraction * candidate.display_extent(axis))


@dataclass(frozen=True, slots=True)
class MaxScreenClampStrategy:
    """Clamp the effective extent of each axis to a fraction of the display."""

    max_width: float | None = None
    max_height: float | None = None
    skip_when_forced: bool = False

    def apply(self, candidate: ScaleCandidate) -> ScaleCandidate:
        if self.skip_when_forced and candidate.nearest_multiple is not NearestMultipleStatus.APPLIED:
            return candidate
        result = candidate
        if self.max_width is not None:
            limit = self.max_width * result.display_width
            if result.effective_width > limit:
                result = result.with_extent(ControllingAxis.WIDTH, limit)
        if self.max_height is not None:
            limit = self.max_height * result.display_height
            if result.effective_height > limit:
                result = result.with_extent(ControllingAxis.HEIGHT, limit)
        return result


def build_pipeline(config: VirtualResolutionConfig) -> tuple[ScaleStrategy, ...]:
    """Return the ordered adjustment strategies enabled by config."""
    if config.has_window_override:
        return ()
    steps: list[ScaleStrategy] = []
    if config.nearest_multiple:
        steps.append(NearestMultipleStrategy(ignore_if_too_small=config.ignore_multiple_if_too_small))
    if config.force_scale is not None:
        steps.append(ForceScaleStrategy(fraction=config.force_scale))
    if config.max_screen_width is not None or config.max_screen_height is not None:
        steps.append(
            MaxScreenClampStrategy(
                max_width=config.max_screen_width,
                max_height=config.max_screen_height,
                # A forced fraction replaces the clamps unless a snap won.
                skip_when_forced=config.force_scale is not None,
            )
        )
    return tuple(steps)


def fit_candidate(
    *,
    user_width: float,
    user_height: float,
    target_width: float,
    target_height: float,
    display_width: float,
    display_height: float,
) -> ScaleCandidate:
    """Fit user space into the target extent, controlled by the tighter axis."""
    win_aspect = target_width / target_height
    user_aspect = user_width / user_height
    if win_aspect < user_aspect:
        scale = target_width / user_width
        return ScaleCandidate(
            user_width=user_width,
            user_height=user_height,
            display_width=display_width,
            display_height=display_height,
            scale=scale,
            controlling_axis=ControllingAxis.WIDTH,
            effective_width=target_width,
            effective_height=user_height * scale,
        )
    scale = target_height / user_height
    return ScaleCandidate(
        user_width=user_width,
        user_height=user_height,
        display_width=display_width,
        display_height=display_height,
        scale=scale,
        controlling_axis=ControllingAxis.HEIGHT,
        effective_width=user_width * scale,
        effective_height=target_height,
    )


def solve(
    user_width: float,
    user_height: float,
    display_width: float,
    display_height: float,
    config: VirtualResolutionConfig,
) -> ScaleSolution:
    """Compute scale, controlling axis, effective extent and letterbox offsets."""
    for name, value in (
        ("user_width", user_width),
        ("user_height", user_height),
        ("display_width", display_width),
        ("display_height", display_height),
    ):
        if not math.isfinite(value) or value <= 0:
            raise InvalidConfiguration(f"{name} must be positive, got {value!r}")

    user_w = float(user_width)
    user_h = float(user_height)
    display_w = float(display_width)
    display_h = float(display_height)
    target_w = float(config.window_override_width or display_w)
    target_h = float(config.window_override_height or display_h)

    candidate = fit_candidate(
        user_width=user_w,
        user_height=user_h,
        target_width=target_w,
        target_height=target_h,
        display_width=display_w,
        display_height=display_h,
    )
    for step in build_pipeline(config):
        candidate = step.apply(candidate)

    return ScaleSolution(
        scale=candidate.scale,
        controlling_axis=candidate.controlling_axis,
        effective_width=candidate.effective_width,
        effective_height=candidate.effective_height,
        x_offset=(display_w - candidate.effective_width) / 2.0,
        y_offset=(display_h - candidate.effective_height) / 2.0,
        display_width=display_w,
        display_height=display_h,
        nearest_multiple_applied=candidate.nearest_multiple is NearestMultipleStatus.APPLIED,
    )


__all__ = [
    "ForceScaleStrategy",
    "MaxScreenClampStrategy",
    "NearestMultipleStatus",
    "NearestMultipleStrategy",
    "ScaleCandidate",
    "ScaleStrategy",
    "build_pipeline",
    "fit_candidate",
    "solve",
]
