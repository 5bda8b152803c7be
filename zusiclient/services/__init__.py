"""Protocol exchanges with the Zusi host."""

from .base import ZusiExchange
from .handshake import HelloExchange, send_hello
from .needed_data import NeededDataExchange, build_needed_data_sections, send_needed_data

__all__ = [
    "HelloExchange",
    "NeededDataExchange",
    "ZusiExchange",
    "build_needed_data_sections",
    "send_hello",
    "send_needed_data",
]
