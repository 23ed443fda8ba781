"""Logging configuration.

Everything uses the standard :mod:`logging` library. Modules log dotted
event names (``permissions.structure.loaded``) and pass context through
``extra=``; the console formatter appends those extras as ``key=value``.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from partguard.config import Settings

# Attributes handled by logging itself, never rendered as extras.
_STANDARD_ATTRS: set[str] = set(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}

_CONFIGURED_FLAG = "_partguard_configured"


class ConsoleLogFormatter(logging.Formatter):
    """Render log records as a single console line.

    Example:

        2026-10-19T08:15:02.114Z DEBUG partguard.infrastructure.permission.permission_resolver
        permissions.check.implied permission=parts operation=read implied_by=parts.edit
    """

    _time_format = "%Y-%m-%dT%H:%M:%S"

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)-5s %(name)s %(message)s",
            datefmt=self._time_format,
        )

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        dt = datetime.fromtimestamp(record.created, tz=UTC)
        base = dt.strftime(datefmt or self._time_format)
        return f"{base}.{int(record.msecs):03d}Z"

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = [
            f"{key}={_format_extra_value(value)}"
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        ]
        if extras:
            return f"{base} " + " ".join(extras)
        return base


def _format_extra_value(value: Any) -> str:
    text = str(value)
    if " " in text or not text:
        return repr(text)
    return text


def configure_logging(settings: Settings) -> None:
    """Install the console handler on the ``partguard`` logger once."""
    logger = logging.getLogger("partguard")
    level = "DEBUG" if settings.debug else settings.log_level.upper()
    logger.setLevel(level)
    if getattr(logger, _CONFIGURED_FLAG, False):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(ConsoleLogFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    setattr(logger, _CONFIGURED_FLAG, True)
