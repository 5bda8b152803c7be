"""HELLO / ACK_HELLO connection handshake.

The client announces itself inside the connection-establishment group::

    Node 0x0001
      Node 0x0001 (HELLO)
        Attribute 0x0001 = u16 protocol version (2)
        Attribute 0x0002 = u16 client type (2, cab client)
        Attribute 0x0003 = client name
        Attribute 0x0004 = client version

Zusi answers with ACK_HELLO whose attribute 0x0003 carries the result byte.
"""

from __future__ import annotations

import logging

from ..exceptions import AttributeDecodeError
from ..protocol import protocol
from ..protocol.protocol import AckHelloAttribute, Command, HelloAttribute, MessageGroup
from ..protocol.structures import Attribute, Node
from ..transport.base import ZusiStream
from .base import ZusiExchange

logger = logging.getLogger("zusiclient.service.handshake")


class HelloExchange(ZusiExchange):
    """Announce the client to Zusi and wait for ACK_HELLO."""

    NAME = "HELLO"
    ROOT_ID = MessageGroup.CONNECTING.value
    ACK_COMMAND = Command.ACK_HELLO.value
    RESULT_ATTRIBUTE = AckHelloAttribute.RESULT.value
    REJECTED_MESSAGE = "Zusi did not accept the client"

    def __init__(self, client_name: str, client_version: str, *, logger_: logging.Logger | None = None) -> None:
        super().__init__(logger_=logger_ or logger)
        self.client_name = client_name
        self.client_version = client_version
        self.zusi_version: str | None = None
        self.connection_info: str | None = None

    def build_request(self) -> Node:
        return Node(
            id=MessageGroup.CONNECTING.value,
            children=[
                Node(
                    id=Command.HELLO.value,
                    attributes=[
                        Attribute.from_u16(HelloAttribute.PROTOCOL_VERSION.value, protocol.PROTOCOL_VERSION),
                        Attribute.from_u16(HelloAttribute.CLIENT_TYPE.value, protocol.CLIENT_TYPE_FAHRPULT),
                        Attribute.from_str(HelloAttribute.CLIENT_NAME.value, self.client_name),
                        Attribute.from_str(HelloAttribute.CLIENT_VERSION.value, self.client_version),
                    ],
                )
            ],
        )

    def run(self, stream: ZusiStream) -> Node:
        ack = super().run(stream)
        self.zusi_version = _optional_text(ack, AckHelloAttribute.ZUSI_VERSION.value)
        self.connection_info = _optional_text(ack, AckHelloAttribute.CONNECTION_INFO.value)
        self._logger.info(
            "Connected as %r (Zusi version=%s, connection=%s)",
            self.client_name,
            self.zusi_version or "unknown",
            self.connection_info or "unknown",
        )
        return ack


def _optional_text(node: Node, attribute_id: int) -> str | None:
    attribute = node.find_attribute_excl([attribute_id])
    if attribute is None:
        return None
    try:
        return attribute.to_str()
    except AttributeDecodeError:
        return None


def send_hello(client_name: str, client_version: str, stream: ZusiStream) -> Node:
    """Perform the HELLO handshake on ``stream`` and return the ACK_HELLO node."""
    return HelloExchange(client_name, client_version).run(stream)


__all__ = ["HelloExchange", "send_hello"]
