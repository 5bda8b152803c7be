"""Exception hierarchy for the Zusi client library.

Stream failures are not wrapped: ``OSError`` (including socket timeouts)
reaches the caller unchanged.
"""

from __future__ import annotations


class ZusiError(Exception):
    """Base error for the zusiclient library."""


class FramingError(ZusiError, ValueError):
    """The byte stream does not follow the node/attribute framing."""


class AttributeDecodeError(ZusiError, ValueError):
    """An attribute payload cannot be read as the requested type."""


class ProtocolError(ZusiError):
    """A response tree does not have the shape the exchange expects."""


class RejectedError(ZusiError):
    """Zusi answered a well-formed acknowledgement with a non-zero result.

    The acceptance byte is available as ``code``.
    """

    def __init__(self, message: str, *, code: int) -> None:
        super().__init__(f"{message} (result=0x{code:02X})")
        self.code = code


__all__ = [
    "AttributeDecodeError",
    "FramingError",
    "ProtocolError",
    "RejectedError",
    "ZusiError",
]
