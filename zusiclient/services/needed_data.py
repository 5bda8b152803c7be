"""NEEDED_DATA subscription and its acknowledgement.

The request lists the data groups the client wants to receive, inside the
client-application group::

    Node 0x0002
      Node 0x0003 (NEEDED_DATA)
        Node 0x000A  cab displays, one u16 attribute 0x0001 per display id
        Node 0x000B  cab operation, empty
        Node 0x000C  program data, one u16 attribute 0x0001 per data id

Empty groups are left out. Zusi answers with ACK_NEEDED_DATA whose attribute
0x0001 carries the result byte.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..protocol.protocol import (
    NEEDED_DATA_ID_ATTRIBUTE,
    AckNeededDataAttribute,
    Command,
    MessageGroup,
    NeededDataSection,
)
from ..protocol.structures import Attribute, Node
from ..transport.base import ZusiStream
from .base import ZusiExchange

logger = logging.getLogger("zusiclient.service.needed_data")


def _id_section(section: NeededDataSection, ids: Sequence[int]) -> Node:
    return Node(
        id=section.value,
        attributes=[Attribute.from_u16(NEEDED_DATA_ID_ATTRIBUTE, data_id) for data_id in ids],
    )


def build_needed_data_sections(
    cab_display_ids: Sequence[int],
    program_data_ids: Sequence[int],
    cab_operation: bool,
) -> list[Node]:
    """Return the section nodes of a NEEDED_DATA request in wire order."""
    sections: list[Node] = []
    if cab_display_ids:
        sections.append(_id_section(NeededDataSection.CAB_DISPLAYS, cab_display_ids))
    if cab_operation:
        sections.append(Node(id=NeededDataSection.CAB_OPERATION.value))
    if program_data_ids:
        sections.append(_id_section(NeededDataSection.PROGRAM_DATA, program_data_ids))
    return sections


class NeededDataExchange(ZusiExchange):
    """Subscribe to data groups and wait for ACK_NEEDED_DATA."""

    NAME = "NEEDED_DATA"
    ROOT_ID = MessageGroup.FAHRPULT.value
    ACK_COMMAND = Command.ACK_NEEDED_DATA.value
    RESULT_ATTRIBUTE = AckNeededDataAttribute.RESULT.value
    REJECTED_MESSAGE = "Zusi did not accept the NEEDED_DATA command"

    def __init__(
        self,
        cab_display_ids: Sequence[int] = (),
        program_data_ids: Sequence[int] = (),
        cab_operation: bool = False,
        *,
        logger_: logging.Logger | None = None,
    ) -> None:
        super().__init__(logger_=logger_ or logger)
        self.cab_display_ids = tuple(cab_display_ids)
        self.program_data_ids = tuple(program_data_ids)
        self.cab_operation = cab_operation

    def build_request(self) -> Node:
        return Node(
            id=MessageGroup.FAHRPULT.value,
            children=[
                Node(
                    id=Command.NEEDED_DATA.value,
                    children=build_needed_data_sections(
                        self.cab_display_ids, self.program_data_ids, self.cab_operation
                    ),
                )
            ],
        )


def send_needed_data(
    cab_display_ids: Sequence[int],
    program_data_ids: Sequence[int],
    cab_operation: bool,
    stream: ZusiStream,
) -> Node:
    """Send NEEDED_DATA on ``stream`` and return the ACK_NEEDED_DATA node."""
    return NeededDataExchange(cab_display_ids, program_data_ids, cab_operation).run(stream)


__all__ = ["NeededDataExchange", "build_needed_data_sections", "send_needed_data"]
