"""Logging setup for the ``vres`` logger tree.

Only the package logger is configured; the host application's root logger is
left alone. File output is streamed through a queue so logging from the
touch path never blocks on disk.
"""

from __future__ import annotations

import json
import logging
import queue
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from vres.api.logging import LoggingConfig
from vres.runtime.config import resolve_log_level_name

PACKAGE_LOGGER = "vres"

_QUEUE_LISTENER: QueueListener | None = None
_INSTALLED_HANDLERS: list[logging.Handler] = []

_STANDARD_RECORD_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` fields are kept under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        extras = {k: v for k, v in vars(record).items() if k not in _STANDARD_RECORD_FIELDS}
        if extras:
            payload["fields"] = extras
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(config: LoggingConfig) -> logging.Logger:
    """Replace the handlers installed on the package logger by a previous call."""
    global _QUEUE_LISTENER

    shutdown_logging()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))
    package_logger.propagate = config.propagate

    sinks: list[logging.Handler] = []
    if config.console_format:
        console = logging.StreamHandler()
        console.setFormatter(_resolve_formatter(config.console_format))
        sinks.append(console)

    if config.file_path:
        file_path = Path(config.file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_path, mode="a", encoding="utf-8", delay=True)
        file_handler.setFormatter(_resolve_formatter(config.file_format))
        log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
        _QUEUE_LISTENER = QueueListener(log_queue, file_handler, respect_handler_level=True)
        _QUEUE_LISTENER.start()
        sinks.append(QueueHandler(log_queue))

    for handler in sinks:
        package_logger.addHandler(handler)
        _INSTALLED_HANDLERS.append(handler)
    return package_logger


def shutdown_logging() -> None:
    """Flush file output and detach every handler installed by ``configure_logging``."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        for handler in _QUEUE_LISTENER.handlers:
            handler.close()
        _QUEUE_LISTENER = None
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    while _INSTALLED_HANDLERS:
        package_logger.removeHandler(_INSTALLED_HANDLERS.pop())


def setup_logging() -> None:
    """Configure console logging unless the host already configured logging."""
    if logging.getLogger().handlers or logging.getLogger(PACKAGE_LOGGER).handlers:
        return
    configure_logging(
        LoggingConfig(
            level_name=resolve_log_level_name(default="INFO"),
            console_format="text",
            file_path=None,
            file_format="json",
        )
    )


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")


__all__ = [
    "JsonFormatter",
    "PACKAGE_LOGGER",
    "configure_logging",
    "setup_logging",
    "shutdown_logging",
]
