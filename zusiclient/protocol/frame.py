"""Stream framing for Zusi message trees.

Every record starts with a little-endian u32 length field whose value
selects the record kind:

    0x00000000  start of node, followed by the u16 node id
    0xFFFFFFFF  end of node
    L           attribute: u16 attribute id, then L - 2 value bytes

A message is one outermost start/end pair. Nodes nest by embedding further
start/end pairs between their attributes and their end marker; there is no
envelope length, so a node's extent is only known once its end marker is read.

Encoding streams records without buffering whole subtrees. Decoding keeps an
explicit parent stack instead of recursing, so tree depth is bounded by
memory rather than by the interpreter's recursion limit.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterator
from typing import Protocol

from ..exceptions import FramingError
from ..util import log_hexdump
from . import protocol
from .structures import Attribute, Node

logger = logging.getLogger("zusiclient.protocol.frame")

_READ_CHUNK_SIZE = 64 * 1024


class ReadableStream(Protocol):
    def read(self, size: int = -1, /) -> bytes | None: ...


class WritableStream(Protocol):
    def write(self, data: bytes, /) -> int | None: ...


def _check_id(value: int, kind: str) -> None:
    if not 0 <= value <= protocol.UINT16_MAX:
        raise ValueError(f"{kind} id {value} outside 16-bit range")


def _check_tree(node: Node) -> None:
    pending = [node]
    while pending:
        current = pending.pop()
        _check_id(current.id, "Node")
        for attribute in current.attributes:
            _check_id(attribute.id, "Attribute")
            if len(attribute.value) > protocol.MAX_ATTRIBUTE_VALUE_SIZE:
                raise ValueError(
                    f"Attribute 0x{attribute.id:04X} value too large ({len(attribute.value)} bytes); "
                    f"max is {protocol.MAX_ATTRIBUTE_VALUE_SIZE}"
                )
        pending.extend(current.children)


def iter_node_records(node: Node) -> Iterator[bytes]:
    """Yield the wire encoding of ``node`` chunk by chunk.

    The whole tree is validated before the first chunk is produced, so an
    unrepresentable id or oversized value raises ``ValueError`` without any
    partial output.
    """
    _check_tree(node)
    # None marks the point where the enclosing node's end marker is due.
    pending: list[Node | None] = [node]
    while pending:
        current = pending.pop()
        if current is None:
            yield protocol.NODE_END_BYTES
            continue

        yield protocol.NODE_HEADER_STRUCT.build({"marker": protocol.NODE_START, "id": current.id})
        for attribute in current.attributes:
            yield protocol.ATTRIBUTE_HEADER_STRUCT.build(
                {"length": len(attribute.value) + protocol.ID_SIZE, "id": attribute.id}
            )
            if attribute.value:
                yield attribute.value

        pending.append(None)
        pending.extend(reversed(current.children))


def encode_node(node: Node) -> bytes:
    """Return the complete wire encoding of ``node``."""
    return b"".join(iter_node_records(node))


def send(node: Node, stream: WritableStream) -> None:
    """Write ``node`` to ``stream``.

    The caller flushes the stream once the message is complete.
    """
    if logger.isEnabledFor(logging.DEBUG):
        log_hexdump(logger, logging.DEBUG, f"TX node 0x{node.id:04X}", encode_node(node))
    for chunk in iter_node_records(node):
        stream.write(chunk)


def _read_exact(stream: ReadableStream, size: int) -> bytes:
    if size == 0:
        return b""
    parts: list[bytes] = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(min(remaining, _READ_CHUNK_SIZE))
        if not chunk:
            raise FramingError(f"End of stream: expected {remaining} more of {size} bytes")
        parts.append(chunk)
        remaining -= len(chunk)
    return b"".join(parts)


def _read_length(stream: ReadableStream) -> int:
    return protocol.LENGTH_STRUCT.parse(_read_exact(stream, protocol.LENGTH_SIZE))


def _read_id(stream: ReadableStream) -> int:
    return protocol.ID_STRUCT.parse(_read_exact(stream, protocol.ID_SIZE))


def _receive_node_body(stream: ReadableStream) -> Node:
    # Each stack entry holds (id, attributes, children) of an open node.
    stack: list[tuple[int, list[Attribute], list[Node]]] = [(_read_id(stream), [], [])]
    while True:
        length = _read_length(stream)
        if length == protocol.NODE_START:
            stack.append((_read_id(stream), [], []))
        elif length == protocol.NODE_END:
            node_id, attributes, children = stack.pop()
            node = Node(id=node_id, attributes=attributes, children=children)
            if not stack:
                return node
            stack[-1][2].append(node)
        elif length < protocol.ID_SIZE:
            raise FramingError(f"Attribute length {length} is shorter than its {protocol.ID_SIZE}-byte id")
        else:
            attribute_id = _read_id(stream)
            value = _read_exact(stream, length - protocol.ID_SIZE)
            stack[-1][1].append(Attribute(id=attribute_id, value=value))


def receive(stream: ReadableStream) -> Node:
    """Read exactly one message from ``stream`` and return its root node.

    Raises :class:`FramingError` when the stream does not start with a
    start-of-node marker, holds an attribute record shorter than its id, or
    ends before the root's end-of-node marker. Stream errors propagate as is.
    """
    marker = _read_length(stream)
    if marker != protocol.NODE_START:
        raise FramingError(f"Expected start-of-node marker, got 0x{marker:08X}")
    return _receive_node_body(stream)


def decode_node(data: bytes | bytearray | memoryview) -> Node:
    """Decode one complete message held in memory.

    Unlike :func:`receive`, bytes left over after the root's end marker are
    rejected.
    """
    raw = bytes(data)
    buffer = io.BytesIO(raw)
    node = receive(buffer)
    trailing = len(raw) - buffer.tell()
    if trailing:
        raise FramingError(f"{trailing} trailing bytes after end of message")
    return node


__all__ = [
    "ReadableStream",
    "WritableStream",
    "decode_node",
    "encode_node",
    "iter_node_records",
    "receive",
    "send",
]
