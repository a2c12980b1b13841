from __future__ import annotations

import math

import pytest

from vres.api.config import VirtualResolutionConfig
from vres.api.errors import (
    AlreadyBound,
    InvalidConfiguration,
    NoBinding,
    NotInitialised,
    TouchDispatchUnavailable,
    VirtualResolutionError,
)
from vres.api.state import ControllingAxis


def test_defaults_disable_every_policy() -> None:
    config = VirtualResolutionConfig(user_width=480, user_height=640)
    assert config.nearest_multiple is False
    assert config.force_scale is None
    assert config.max_screen_width is None
    assert config.has_window_override is False


@pytest.mark.parametrize(
    "kwargs",
    [
        {"user_width": 0, "user_height": 640},
        {"user_width": 480, "user_height": -640},
        {"user_width": math.inf, "user_height": 640},
        {"user_width": math.nan, "user_height": 640},
        {"user_width": True, "user_height": 640},
        {"user_width": "480", "user_height": 640},
        {"user_width": 480, "user_height": 640, "window_override_width": 960},
        {"user_width": 480, "user_height": 640, "window_override_width": 0, "window_override_height": 1},
        {"user_width": 480, "user_height": 640, "force_scale": 0.0},
        {"user_width": 480, "user_height": 640, "force_scale": 1.5},
        {"user_width": 480, "user_height": 640, "max_screen_width": -0.1},
        {"user_width": 480, "user_height": 640, "ignore_multiple_if_too_small": 2},
    ],
)
def test_invalid_values_are_rejected(kwargs: dict[str, object]) -> None:
    with pytest.raises(InvalidConfiguration):
        VirtualResolutionConfig(**kwargs)  # type: ignore[arg-type]


def test_override_requires_both_dimensions() -> None:
    config = VirtualResolutionConfig(
        user_width=480,
        user_height=640,
        window_override_width=960,
        window_override_height=1280,
    )
    assert config.has_window_override is True


def test_from_mapping_accepts_camel_case_and_snake_case() -> None:
    config = VirtualResolutionConfig.from_mapping(
        {
            "userSpaceW": 480,
            "userSpaceH": 640,
            "windowOverrideW": 960,
            "windowOverrideH": 1280,
            "ignoreMultipleIfTooSmall": 0.5,
            "max_screen_height": 0.9,
        }
    )
    assert (config.user_width, config.user_height) == (480, 640)
    assert config.window_override_width == 960
    assert config.ignore_multiple_if_too_small == 0.5
    assert config.max_screen_height == 0.9


def test_from_mapping_rejects_unknown_and_missing_keys() -> None:
    with pytest.raises(InvalidConfiguration, match="unknown"):
        VirtualResolutionConfig.from_mapping({"userSpaceW": 480, "userSpaceH": 640, "zoom": 2})
    with pytest.raises(InvalidConfiguration, match="user_height"):
        VirtualResolutionConfig.from_mapping({"userSpaceW": 480})


def test_error_taxonomy() -> None:
    for error_type in (InvalidConfiguration, NotInitialised, AlreadyBound, NoBinding, TouchDispatchUnavailable):
        assert issubclass(error_type, VirtualResolutionError)
        assert issubclass(error_type, RuntimeError)
    assert issubclass(InvalidConfiguration, ValueError)
    error = NotInitialised("update")
    assert error.operation == "update"
    assert str(error) == "update called before initialise"


def test_controlling_axis_is_a_string_enum() -> None:
    assert ControllingAxis.WIDTH == "WIDTH"
    assert ControllingAxis("HEIGHT") is ControllingAxis.HEIGHT
