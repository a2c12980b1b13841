"""Environment-sourced runtime configuration."""

from __future__ import annotations

import os
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import Mapping

from vres.api.config import VirtualResolutionConfig


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    window_override: tuple[int, int] | None
    nearest_multiple: bool | None
    force_scale: float | None
    log_level: str
    trace_touch: bool


_RUNTIME_CONFIG: ContextVar[RuntimeConfig | None] = ContextVar("vres_runtime_config", default=None)


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _optional_flag(name: str, *, env: Mapping[str, str] | None = None) -> bool | None:
    raw = _raw(name, env=env)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return None


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    value = _optional_flag(name, env=env)
    return bool(default) if value is None else value


def _optional_float(name: str, *, env: Mapping[str, str] | None = None) -> float | None:
    raw = _raw(name, env=env)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw.strip())
    except ValueError:
        return None


def _resolution(raw: str | None) -> tuple[int, int] | None:
    if raw is None:
        return None
    value = str(raw).strip().lower()
    if not value:
        return None
    normalized = value.replace(" ", "")
    for sep in ("x", ",", ":"):
        if sep in normalized:
            left, right = normalized.split(sep, 1)
            try:
                width = max(1, int(left))
                height = max(1, int(right))
            except ValueError:
                return None
            return (width, height)
    return None


def resolve_log_level_name(
    default: str = "INFO", *, env: Mapping[str, str] | None = None
) -> str:
    """Resolve log level with package-prefixed override."""
    value = _raw("VRES_LOG_LEVEL", env=env)
    if value is None:
        value = _raw("LOG_LEVEL", env=env) or default
    return value.strip().upper()


def load_runtime_config(*, env: Mapping[str, str] | None = None) -> RuntimeConfig:
    return RuntimeConfig(
        window_override=_resolution(_raw("VRES_WINDOW_OVERRIDE", env=env)),
        nearest_multiple=_optional_flag("VRES_NEAREST_MULTIPLE", env=env),
        force_scale=_optional_float("VRES_FORCE_SCALE", env=env),
        log_level=resolve_log_level_name(env=env),
        trace_touch=_flag("VRES_TRACE_TOUCH", False, env=env),
    )


def apply_env_overrides(
    config: VirtualResolutionConfig,
    *,
    env: Mapping[str, str] | None = None,
) -> VirtualResolutionConfig:
    """Return config with any environment-provided policy overrides applied."""
    runtime = get_runtime_config() if env is None else load_runtime_config(env=env)
    updated = config
    if runtime.window_override is not None:
        updated = replace(
            updated,
            window_override_width=float(runtime.window_override[0]),
            window_override_height=float(runtime.window_override[1]),
        )
    if runtime.nearest_multiple is not None:
        updated = replace(updated, nearest_multiple=runtime.nearest_multiple)
    if runtime.force_scale is not None:
        updated = replace(updated, force_scale=runtime.force_scale)
    return updated


def initialize_runtime_config(*, env: Mapping[str, str] | None = None) -> RuntimeConfig:
    config = load_runtime_config(env=env)
    _RUNTIME_CONFIG.set(config)
    return config


def set_runtime_config(config: RuntimeConfig) -> RuntimeConfig:
    _RUNTIME_CONFIG.set(config)
    return config


def get_runtime_config() -> RuntimeConfig:
    config = _RUNTIME_CONFIG.get()
    if config is not None:
        return config
    return initialize_runtime_config()


__all__ = [
    "RuntimeConfig",
    "apply_env_overrides",
    "get_runtime_config",
    "initialize_runtime_config",
    "load_runtime_config",
    "resolve_log_level_name",
    "set_runtime_config",
]
