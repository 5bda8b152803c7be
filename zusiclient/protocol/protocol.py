"""Zusi 3 TCP protocol constants and wire layouts."""
from __future__ import annotations
from construct import Float32l, Int8ul, Int16sl, Int16ul, Int32ul, Struct as BinStruct  # type: ignore
from enum import IntEnum
from typing import Final

DEFAULT_PORT: Final[int] = 1436
UINT16_MAX: Final[int] = 65535
UINT32_MAX: Final[int] = 4294967295

# Record length sentinels
NODE_START: Final[int] = 0x00000000
NODE_END: Final[int] = 0xFFFFFFFF

PROTOCOL_VERSION: Final[int] = 2
CLIENT_TYPE_FAHRPULT: Final[int] = 2
RESULT_ACCEPTED: Final[int] = 0


class MessageGroup(IntEnum):
    CONNECTING = 0x0001  # Connection establishment
    FAHRPULT = 0x0002  # Client application 02 (cab)


class Command(IntEnum):
    HELLO = 0x0001
    ACK_HELLO = 0x0002
    NEEDED_DATA = 0x0003
    ACK_NEEDED_DATA = 0x0004


class NeededDataSection(IntEnum):
    CAB_DISPLAYS = 0x000A  # Fuehrerstandsanzeigen
    CAB_OPERATION = 0x000B  # Fuehrerstandsbedienung
    PROGRAM_DATA = 0x000C  # Programmdaten


class HelloAttribute(IntEnum):
    PROTOCOL_VERSION = 0x0001
    CLIENT_TYPE = 0x0002
    CLIENT_NAME = 0x0003
    CLIENT_VERSION = 0x0004


class AckHelloAttribute(IntEnum):
    ZUSI_VERSION = 0x0001
    CONNECTION_INFO = 0x0002
    RESULT = 0x0003


class AckNeededDataAttribute(IntEnum):
    RESULT = 0x0001


NEEDED_DATA_ID_ATTRIBUTE: Final[int] = 0x0001

LENGTH_STRUCT: Final = Int32ul
ID_STRUCT: Final = Int16ul
NODE_HEADER_STRUCT: Final = BinStruct(
    "marker" / Int32ul,
    "id" / Int16ul,
)
ATTRIBUTE_HEADER_STRUCT: Final = BinStruct(
    "length" / Int32ul,
    "id" / Int16ul,
)
UINT8_STRUCT: Final = Int8ul
UINT16_STRUCT: Final = Int16ul
UINT32_STRUCT: Final = Int32ul
INT16_STRUCT: Final = Int16sl
FLOAT32_STRUCT: Final = Float32l

LENGTH_SIZE: Final[int] = LENGTH_STRUCT.sizeof()  # type: ignore
ID_SIZE: Final[int] = ID_STRUCT.sizeof()  # type: ignore
NODE_HEADER_SIZE: Final[int] = NODE_HEADER_STRUCT.sizeof()  # type: ignore
ATTRIBUTE_HEADER_SIZE: Final[int] = ATTRIBUTE_HEADER_STRUCT.sizeof()  # type: ignore

# The attribute length field counts the id, and must stay below NODE_END.
MAX_ATTRIBUTE_VALUE_SIZE: Final[int] = NODE_END - 1 - ID_SIZE

NODE_END_BYTES: Final[bytes] = LENGTH_STRUCT.build(NODE_END)  # type: ignore
