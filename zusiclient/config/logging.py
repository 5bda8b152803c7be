"""Logging setup for applications built on zusiclient.

The library itself only attaches a ``NullHandler``; applications call
:func:`configure_logging` once to get one JSON object per log line.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from logging.config import dictConfig
from logging.handlers import SysLogHandler
from pathlib import Path
from typing import Any

import msgspec

from .settings import ClientConfig

SYSLOG_SOCKETS: tuple[Path, ...] = (Path("/dev/log"), Path("/var/run/log"))
LOGGER_PREFIX = "zusiclient."

_RECORD_FIELDS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


class LogEntry(msgspec.Struct, omit_defaults=True):
    ts: str
    level: str
    logger: str
    message: str
    extra: dict[str, Any] | None = None
    exception: str | None = None


def _extra_value(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        # Wire payloads are shown as hex, never decoded as text.
        return f"[{bytes(value).hex(' ').upper()}]"
    return str(value)


class StructuredLogFormatter(logging.Formatter):
    """Render records as JSON with the ``zusiclient.`` logger prefix removed."""

    _encoder = msgspec.json.Encoder()

    def format(self, record: logging.LogRecord) -> str:
        extra = {
            key: _extra_value(value)
            for key, value in record.__dict__.items()
            if key not in _RECORD_FIELDS and not key.startswith("_")
        }
        entry = LogEntry(
            ts=datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z"),
            level=record.levelname,
            logger=record.name.removeprefix(LOGGER_PREFIX),
            message=record.getMessage(),
            extra=extra or None,
            exception=self.formatException(record.exc_info) if record.exc_info else None,
        )
        return self._encoder.encode(entry).decode("utf-8")


def _syslog_address() -> Path | None:
    return next((path for path in SYSLOG_SOCKETS if path.exists()), None)


def _build_handler(use_syslog: bool = False) -> logging.Handler:
    """Return a syslog handler when requested and available, else stderr.

    ``ZUSICLIENT_LOG_STREAM`` forces stderr output.
    """
    address = _syslog_address() if use_syslog and not os.environ.get("ZUSICLIENT_LOG_STREAM") else None
    if address is None:
        return logging.StreamHandler()
    handler = SysLogHandler(address=str(address), facility=SysLogHandler.LOG_USER)
    handler.ident = "zusiclient "
    return handler


def configure_logging(config: ClientConfig) -> None:
    """Install the structured handler on the root logger."""
    level_name = "DEBUG" if config.debug_logging else "INFO"
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"json": {"()": StructuredLogFormatter}},
            "handlers": {
                "zusiclient": {
                    "()": _build_handler,
                    "use_syslog": config.log_syslog,
                    "formatter": "json",
                }
            },
            "root": {"level": level_name, "handlers": ["zusiclient"]},
        }
    )
    logging.getLogger("zusiclient").debug("Logging configured at level %s", level_name)
