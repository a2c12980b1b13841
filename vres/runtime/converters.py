"""Conversions between user space and window space."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from vres.api.errors import NotInitialised
from vres.api.state import UserScreenBounds, VirtualResolutionState


def require_state(state: VirtualResolutionState | None, operation: str) -> VirtualResolutionState:
    if state is None:
        raise NotInitialised(operation)
    return state


def get_user_x(state: VirtualResolutionState | None, win_x: float) -> float:
    current = require_state(state, "get_user_x")
    return (win_x - current.x_offset) / current.scale


def get_user_y(state: VirtualResolutionState | None, win_y: float) -> float:
    current = require_state(state, "get_user_y")
    return (win_y - current.y_offset) / current.scale


def get_win_x(state: VirtualResolutionState | None, user_x: float) -> float:
    current = require_state(state, "get_win_x")
    return user_x * current.scale + current.x_offset


def get_win_y(state: VirtualResolutionState | None, user_y: float) -> float:
    current = require_state(state, "get_win_y")
    return user_y * current.scale + current.y_offset


def get_user_pos(
    state: VirtualResolutionState | None, win_x: float, win_y: float
) -> tuple[float, float]:
    current = require_state(state, "get_user_pos")
    return (
        (win_x - current.x_offset) / current.scale,
        (win_y - current.y_offset) / current.scale,
    )


def get_win_pos(
    state: VirtualResolutionState | None, user_x: float, user_y: float
) -> tuple[float, float]:
    current = require_state(state, "get_win_pos")
    return (
        user_x * current.scale + current.x_offset,
        user_y * current.scale + current.y_offset,
    )


def user_to_win_size(state: VirtualResolutionState | None, user_size: float) -> float:
    return user_size * require_state(state, "user_to_win_size").scale


def win_to_user_size(state: VirtualResolutionState | None, win_size: float) -> float:
    return win_size / require_state(state, "win_to_user_size").scale


def win_to_user_points(state: VirtualResolutionState | None, points: ArrayLike) -> np.ndarray:
    """Convert an (N, 2) array of window positions to user positions."""
    current = require_state(state, "win_to_user_points")
    array = _as_points(points)
    offset = np.array([current.x_offset, current.y_offset], dtype=np.float64)
    return (array - offset) / current.scale


def user_to_win_points(state: VirtualResolutionState | None, points: ArrayLike) -> np.ndarray:
    """Convert an (N, 2) array of user positions to window positions."""
    current = require_state(state, "user_to_win_points")
    array = _as_points(points)
    offset = np.array([current.x_offset, current.y_offset], dtype=np.float64)
    return array * current.scale + offset


def screen_bounds(state: VirtualResolutionState | None) -> UserScreenBounds:
    """Return the whole display, letterbox included, in user coordinates."""
    current = require_state(state, "screen_bounds")
    solution = current.solution
    min_x = (0.0 - solution.x_offset) / solution.scale
    max_x = (solution.display_width - solution.x_offset) / solution.scale
    min_y = (0.0 - solution.y_offset) / solution.scale
    max_y = (solution.display_height - solution.y_offset) / solution.scale
    return UserScreenBounds(
        width=solution.display_width / solution.scale,
        height=solution.display_height / solution.scale,
        min_x=min_x,
        max_x=max_x,
        min_y=min_y,
        max_y=max_y,
    )


def _as_points(points: ArrayLike) -> np.ndarray:
    array = np.asarray(points, dtype=np.float64)
    if array.ndim != 2 or array.shape[1] != 2:
        raise ValueError(f"points must have shape (N, 2), got {array.shape}")
    return array


__all__ = [
    "get_user_pos",
    "get_user_x",
    "get_user_y",
    "get_win_pos",
    "get_win_x",
    "get_win_y",
    "require_state",
    "screen_bounds",
    "user_to_win_points",
    "user_to_win_size",
    "win_to_user_points",
    "win_to_user_size",
]
