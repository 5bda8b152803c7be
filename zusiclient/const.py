"""Default values for the Zusi client."""

from __future__ import annotations

from typing import Final

from .protocol.protocol import DEFAULT_PORT

DEFAULT_HOST: Final[str] = "127.0.0.1"
DEFAULT_ZUSI_PORT: Final[int] = DEFAULT_PORT
DEFAULT_CLIENT_NAME: Final[str] = "zusiclient"
DEFAULT_CLIENT_VERSION: Final[str] = "1.0"
DEFAULT_CONNECT_TIMEOUT: Final[float] = 5.0
DEFAULT_READ_TIMEOUT: Final[float | None] = None
DEFAULT_DEBUG_LOGGING: Final[bool] = False
DEFAULT_LOG_SYSLOG: Final[bool] = False
CONFIG_FILE_TABLE: Final[str] = "zusiclient"
