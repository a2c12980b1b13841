"""Virtual resolution configuration contract."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, fields

from vres.api.errors import InvalidConfiguration

# camelCase keys accepted by ``from_mapping`` for table-style configuration.
_MAPPING_ALIASES: dict[str, str] = {
    "userSpaceW": "user_width",
    "userSpaceH": "user_height",
    "userWidth": "user_width",
    "userHeight": "user_height",
    "windowOverrideW": "window_override_width",
    "windowOverrideH": "window_override_height",
    "windowOverrideWidth": "window_override_width",
    "windowOverrideHeight": "window_override_height",
    "nearestMultiple": "nearest_multiple",
    "ignoreMultipleIfTooSmall": "ignore_multiple_if_too_small",
    "forceScale": "force_scale",
    "maxScreenW": "max_screen_width",
    "maxScreenH": "max_screen_height",
}


@dataclass(frozen=True, slots=True)
class VirtualResolutionConfig:
    """User-space extent and optional scaling policies."""

    user_width: float
    user_height: float
    window_override_width: float | None = None
    window_override_height: float | None = None
    nearest_multiple: bool = False
    ignore_multiple_if_too_small: float | None = None
    force_scale: float | None = None
    max_screen_width: float | None = None
    max_screen_height: float | None = None

    def __post_init__(self) -> None:
        _require_positive("user_width", self.user_width)
        _require_positive("user_height", self.user_height)
        override_w = self.window_override_width
        override_h = self.window_override_height
        if (override_w is None) != (override_h is None):
            raise InvalidConfiguration(
                "window_override_width and window_override_height must be set together"
            )
        if override_w is not None:
            _require_positive("window_override_width", override_w)
        if override_h is not None:
            _require_positive("window_override_height", override_h)
        _require_fraction("ignore_multiple_if_too_small", self.ignore_multiple_if_too_small)
        _require_fraction("force_scale", self.force_scale)
        _require_fraction("max_screen_width", self.max_screen_width)
        _require_fraction("max_screen_height", self.max_screen_height)

    @property
    def has_window_override(self) -> bool:
        return self.window_override_width is not None and self.window_override_height is not None

    @classmethod
    def from_mapping(cls, values: Mapping[str, object]) -> "VirtualResolutionConfig":
        """Build config from snake_case or camelCase keyed values."""
        known = {item.name for item in fields(cls)}
        kwargs: dict[str, object] = {}
        for raw_key, value in values.items():
            key = _MAPPING_ALIASES.get(str(raw_key), str(raw_key))
            if key not in known:
                raise InvalidConfiguration(f"unknown virtual resolution option: {raw_key}")
            kwargs[key] = value
        for required in ("user_width", "user_height"):
            if required not in kwargs:
                raise InvalidConfiguration(f"missing virtual resolution option: {required}")
        return cls(**kwargs)  # type: ignore[arg-type]


def _require_positive(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidConfiguration(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value) or value <= 0:
        raise InvalidConfiguration(f"{name} must be positive, got {value!r}")


def _require_fraction(name: str, value: object) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidConfiguration(f"{name} must be a number, got {value!r}")
    if not 0.0 < float(value) <= 1.0:
        raise InvalidConfiguration(f"{name} must be in (0, 1], got {value!r}")


__all__ = ["VirtualResolutionConfig"]
