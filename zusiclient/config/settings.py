"""Settings loader for the Zusi client.

Configuration comes from a plain mapping or from the ``[zusiclient]`` table
of a TOML file. Environment variables are not used as overrides.
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Any

import msgspec

from ..const import (
    CONFIG_FILE_TABLE,
    DEFAULT_CLIENT_NAME,
    DEFAULT_CLIENT_VERSION,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_DEBUG_LOGGING,
    DEFAULT_HOST,
    DEFAULT_LOG_SYSLOG,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_ZUSI_PORT,
)
from ..protocol import protocol

logger = logging.getLogger(__name__)


class ClientConfig(msgspec.Struct, frozen=True, kw_only=True, forbid_unknown_fields=True):
    """Strongly typed configuration for a Zusi client connection."""

    host: Annotated[str, msgspec.Meta(min_length=1)] = DEFAULT_HOST
    port: Annotated[int, msgspec.Meta(ge=1, le=protocol.UINT16_MAX)] = DEFAULT_ZUSI_PORT
    client_name: Annotated[str, msgspec.Meta(min_length=1)] = DEFAULT_CLIENT_NAME
    client_version: str = DEFAULT_CLIENT_VERSION
    connect_timeout: Annotated[float, msgspec.Meta(gt=0)] = DEFAULT_CONNECT_TIMEOUT
    read_timeout: Annotated[float, msgspec.Meta(gt=0)] | None = DEFAULT_READ_TIMEOUT
    debug_logging: bool = DEFAULT_DEBUG_LOGGING
    log_syslog: bool = DEFAULT_LOG_SYSLOG

    @property
    def address(self) -> tuple[str, int]:
        return (self.host, self.port)


def load_client_config(raw: Mapping[str, Any] | None = None) -> ClientConfig:
    """Build a :class:`ClientConfig` from ``raw``, filling in defaults.

    Raises ``msgspec.ValidationError`` for unknown keys or out-of-range values.
    """
    config = msgspec.convert(dict(raw or {}), ClientConfig)
    logger.debug("Loaded client configuration for %s:%d", config.host, config.port)
    return config


def load_client_config_file(path: str | Path) -> ClientConfig:
    """Load the ``[zusiclient]`` table of a TOML file.

    A file without that table yields the defaults.
    """
    data = tomllib.loads(Path(path).read_text(encoding="utf-8"))
    section = data.get(CONFIG_FILE_TABLE, {})
    if not isinstance(section, dict):
        raise msgspec.ValidationError(f"[{CONFIG_FILE_TABLE}] must be a table")
    return load_client_config(section)


__all__ = ["ClientConfig", "load_client_config", "load_client_config_file"]
