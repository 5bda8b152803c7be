"""One-shot request/acknowledgement exchanges with Zusi.

Every exchange follows the same sequence: build a request tree, write it,
flush, read exactly one response tree, check its shape and finally inspect
the acceptance byte of the acknowledgement. Progress is tracked by a small
state machine::

    sending_request -> awaiting_response -> complete
           |                   |
           +------> failed <---+

The response is matched to the request purely by position on the stream, so
a stream must not be shared by concurrent exchanges. Nothing is retried;
every failure is raised to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, ClassVar

from transitions import Machine

from ..exceptions import FramingError, ProtocolError, RejectedError
from ..protocol import protocol
from ..protocol.frame import receive, send
from ..protocol.structures import Node
from ..transport.base import ZusiStream
from ..util import log_node

logger = logging.getLogger("zusiclient.service")


class ZusiExchange:
    """Base class for a single request/acknowledgement round trip."""

    if TYPE_CHECKING:
        # FSM generated methods and attributes for static analysis
        fsm_state: str
        request_sent: Callable[[], None]
        complete_exchange: Callable[[], None]
        fail_exchange: Callable[[], None]

    # FSM States
    STATE_SENDING_REQUEST = "sending_request"
    STATE_AWAITING_RESPONSE = "awaiting_response"
    STATE_COMPLETE = "complete"
    STATE_FAILED = "failed"

    NAME: ClassVar[str]
    ROOT_ID: ClassVar[int]
    ACK_COMMAND: ClassVar[int]
    RESULT_ATTRIBUTE: ClassVar[int]
    REJECTED_MESSAGE: ClassVar[str]

    def __init__(self, *, logger_: logging.Logger | None = None) -> None:
        self._logger = logger_ or logger
        self.accepted: bool | None = None
        self.failure_reason: str | None = None

        self.state_machine = Machine(
            model=self,
            states=[
                self.STATE_SENDING_REQUEST,
                self.STATE_AWAITING_RESPONSE,
                self.STATE_COMPLETE,
                {"name": self.STATE_FAILED, "on_enter": "_on_fsm_failed"},
            ],
            initial=self.STATE_SENDING_REQUEST,
            ignore_invalid_triggers=True,
            model_attribute="fsm_state",
        )

        self.state_machine.add_transition(
            trigger="request_sent", source=self.STATE_SENDING_REQUEST, dest=self.STATE_AWAITING_RESPONSE
        )
        self.state_machine.add_transition(
            trigger="complete_exchange", source=self.STATE_AWAITING_RESPONSE, dest=self.STATE_COMPLETE
        )
        self.state_machine.add_transition(
            trigger="fail_exchange",
            source=[self.STATE_SENDING_REQUEST, self.STATE_AWAITING_RESPONSE],
            dest=self.STATE_FAILED,
        )

    def _on_fsm_failed(self) -> None:
        self._logger.warning("%s exchange failed: %s", self.NAME, self.failure_reason)

    def build_request(self) -> Node:
        raise NotImplementedError

    def run(self, stream: ZusiStream) -> Node:
        """Perform the exchange on ``stream`` and return the acknowledgement node.

        Raises ``OSError`` for stream failures, :class:`FramingError` for an
        undecodable response, :class:`ProtocolError` for a response of the
        wrong shape and :class:`RejectedError` when Zusi refuses the request.
        ``ValueError`` from an unrepresentable request also fails the exchange.
        """
        if self.fsm_state != self.STATE_SENDING_REQUEST:
            raise RuntimeError(f"{self.NAME} exchange already ran (state={self.fsm_state})")

        try:
            request = self.build_request()
            log_node(self._logger, logging.DEBUG, f"{self.NAME} request", request)
            send(request, stream)
            stream.flush()
        except (OSError, ValueError) as exc:
            self._fail(f"send failed: {exc}")
            raise
        self.request_sent()

        try:
            response = receive(stream)
            log_node(self._logger, logging.DEBUG, f"{self.NAME} response", response)
            ack = self.validate_response(response)
            code = self._result_code(ack)
        except (OSError, FramingError, ProtocolError) as exc:
            self._fail(str(exc) or type(exc).__name__)
            raise

        self.accepted = code == protocol.RESULT_ACCEPTED
        self.complete_exchange()
        if not self.accepted:
            self._logger.warning("%s rejected by Zusi (result=0x%02X)", self.NAME, code)
            raise RejectedError(self.REJECTED_MESSAGE, code=code)
        self._logger.info("%s accepted by Zusi", self.NAME)
        return ack

    def validate_response(self, response: Node) -> Node:
        """Check the response envelope and return the acknowledgement node."""
        if response.id != self.ROOT_ID:
            raise ProtocolError(
                f"Invalid root node id 0x{response.id:04X}, expected 0x{self.ROOT_ID:04X}"
            )
        if len(response.children) != 1:
            raise ProtocolError(
                f"Root node has {len(response.children)} children, expected exactly one"
            )
        ack = response.children[0]
        if ack.id != self.ACK_COMMAND:
            raise ProtocolError(
                f"Invalid command id 0x{ack.id:04X}, expected "
                f"{protocol.Command(self.ACK_COMMAND).name} (0x{self.ACK_COMMAND:04X})"
            )
        return ack

    def _result_code(self, ack: Node) -> int:
        result = ack.find_attribute_excl([self.RESULT_ATTRIBUTE])
        if result is None:
            raise ProtocolError(f"{self.REJECTED_MESSAGE}: no result attribute")
        if not result.value:
            raise ProtocolError(f"{self.REJECTED_MESSAGE}: empty result attribute")
        return result.value[0]

    def _fail(self, reason: str) -> None:
        self.failure_reason = reason
        self.fail_exchange()


__all__ = ["ZusiExchange"]
