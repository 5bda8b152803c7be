"""Tests for the NEEDED_DATA subscription."""

from __future__ import annotations

import pytest

from zusiclient.exceptions import ProtocolError, RejectedError
from zusiclient.protocol.structures import Attribute, Node
from zusiclient.services.needed_data import NeededDataExchange, build_needed_data_sections, send_needed_data
from tests.mocks import MockZusiStream


def _ack_needed_data(result: bytes, *, root_id: int = 0x0002) -> Node:
    return Node(id=root_id, children=[Node(id=0x0004, attributes=[Attribute.from_bytes(0x0001, result)])])


def test_needed_data_request_shape(ack_needed_data_accepted: Node) -> None:
    stream = MockZusiStream.replying(ack_needed_data_accepted)

    ack = send_needed_data([0x0001, 0x001B], [], True, stream)

    assert ack == ack_needed_data_accepted.children[0]
    assert stream.flush_count == 1
    request = stream.sent_node()
    assert request.id == 0x0002
    assert len(request.children) == 1
    command = request.children[0]
    assert command.id == 0x0003
    assert command.attributes == []
    assert command.children == [
        Node(id=0x000A, attributes=[Attribute.from_u16(0x0001, 0x0001), Attribute.from_u16(0x0001, 0x001B)]),
        Node(id=0x000B),
    ]


def test_sections_in_wire_order() -> None:
    sections = build_needed_data_sections([0x0001], [0x0010, 0x0011], True)

    assert [section.id for section in sections] == [0x000A, 0x000B, 0x000C]
    assert sections[2].attributes == [Attribute.from_u16(0x0001, 0x0010), Attribute.from_u16(0x0001, 0x0011)]
    assert sections[2].children == []


def test_empty_sections_are_omitted() -> None:
    assert build_needed_data_sections([], [], False) == []
    assert [s.id for s in build_needed_data_sections([], [0x0005], False)] == [0x000C]
    assert [s.id for s in build_needed_data_sections([], [], True)] == [0x000B]


def test_needed_data_preserves_duplicate_ids() -> None:
    sections = build_needed_data_sections([0x0001, 0x0001], [], False)

    assert sections[0].attributes == [Attribute.from_u16(0x0001, 1), Attribute.from_u16(0x0001, 1)]


def test_needed_data_empty_request_still_sent(ack_needed_data_accepted: Node) -> None:
    stream = MockZusiStream.replying(ack_needed_data_accepted)

    send_needed_data([], [], False, stream)

    assert stream.sent_node() == Node(id=0x0002, children=[Node(id=0x0003)])


def test_needed_data_rejected() -> None:
    exchange = NeededDataExchange([0x0001])

    with pytest.raises(RejectedError, match="NEEDED_DATA") as excinfo:
        exchange.run(MockZusiStream.replying(_ack_needed_data(b"\x02")))

    assert excinfo.value.code == 0x02
    assert exchange.accepted is False


def test_needed_data_wrong_root() -> None:
    with pytest.raises(ProtocolError, match="Invalid root node id 0x0001"):
        send_needed_data([1], [], False, MockZusiStream.replying(_ack_needed_data(b"\x00", root_id=0x0001)))


def test_needed_data_hello_ack_is_not_accepted(ack_hello_accepted: Node) -> None:
    with pytest.raises(ProtocolError):
        send_needed_data([1], [], False, MockZusiStream.replying(ack_hello_accepted))


def test_needed_data_out_of_range_id_sends_nothing() -> None:
    stream = MockZusiStream()

    with pytest.raises(ValueError):
        send_needed_data([0x10000], [], False, stream)
    assert stream.written == bytearray()


def test_needed_data_unencodable_request_fails_exchange() -> None:
    exchange = NeededDataExchange([0x0001], [0x10000])
    stream = MockZusiStream()

    with pytest.raises(ValueError):
        exchange.run(stream)

    assert exchange.fsm_state == NeededDataExchange.STATE_FAILED
    assert exchange.failure_reason is not None
    assert exchange.accepted is None
    with pytest.raises(RuntimeError, match="already ran"):
        exchange.run(stream)
    assert stream.written == bytearray()
