"""Stream transports for talking to Zusi."""

from .base import ZusiStream
from .tcp import ZusiConnection, open_connection

__all__ = [
    "ZusiConnection",
    "ZusiStream",
    "open_connection",
]
