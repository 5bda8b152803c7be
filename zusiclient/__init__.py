"""Zusi 3 TCP client library.

Builds, encodes and decodes the node/attribute message trees Zusi exchanges
over TCP, and performs the HELLO handshake and NEEDED_DATA subscription.
"""

__version__ = "1.0.0"

import logging

from .exceptions import AttributeDecodeError, FramingError, ProtocolError, RejectedError, ZusiError
from .protocol import Attribute, Node, decode_node, encode_node, receive, send
from .services import send_hello, send_needed_data
from .transport import ZusiConnection, open_connection

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    "Attribute",
    "AttributeDecodeError",
    "FramingError",
    "Node",
    "ProtocolError",
    "RejectedError",
    "ZusiConnection",
    "ZusiError",
    "decode_node",
    "encode_node",
    "open_connection",
    "receive",
    "send",
    "send_hello",
    "send_needed_data",
]
