"""Shared mocks for zusiclient tests."""

from __future__ import annotations

import io
from dataclasses import dataclass, field

from zusiclient.protocol.frame import decode_node, encode_node
from zusiclient.protocol.structures import Node


@dataclass
class MockZusiStream:
    """In-memory duplex stream: reads come from ``incoming``, writes are recorded."""

    incoming: bytes = b""
    max_read: int | None = None
    written: bytearray = field(default_factory=bytearray)
    flush_count: int = 0
    write_error: OSError | None = None
    read_error: OSError | None = None

    def __post_init__(self) -> None:
        self._reader = io.BytesIO(self.incoming)

    @classmethod
    def replying(cls, *responses: Node, **kwargs: object) -> MockZusiStream:
        return cls(incoming=b"".join(encode_node(node) for node in responses), **kwargs)  # type: ignore[arg-type]

    def read(self, size: int = -1, /) -> bytes:
        if self.read_error is not None:
            raise self.read_error
        if self.max_read is not None and size > self.max_read:
            size = self.max_read
        return self._reader.read(size)

    def write(self, data: bytes, /) -> int:
        if self.write_error is not None:
            raise self.write_error
        self.written.extend(data)
        return len(data)

    def flush(self) -> None:
        self.flush_count += 1

    def sent_node(self) -> Node:
        return decode_node(bytes(self.written))
