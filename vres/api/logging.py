"""Public logging configuration API."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Handlers for the ``vres`` logger tree.

    An empty ``console_format`` disables console output. With ``propagate``
    records also reach the host application's root handlers.
    """

    level_name: str = "INFO"
    console_format: str = "text"  # text|json|""
    file_path: str | None = None
    file_format: str = "json"  # text|json
    propagate: bool = False


__all__ = ["LoggingConfig"]
