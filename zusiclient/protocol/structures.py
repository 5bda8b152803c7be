"""Zusi message tree: attributes, nodes and path lookup.

A message is a tree of :class:`Node` objects. Each node carries an ordered
list of :class:`Attribute` leaves and an ordered list of child nodes. Ids are
16-bit tags and need not be unique among siblings; lookups always return the
first match of a depth-first, left-to-right walk.

Attribute payloads are opaque bytes. The ``from_*`` constructors and ``as_*``
accessors convert between payloads and Python values using the little-endian
layouts declared in :mod:`zusiclient.protocol.protocol`.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import msgspec
from construct import ConstructError  # type: ignore

from ..exceptions import AttributeDecodeError
from . import protocol

NodePredicate = Callable[["Node"], bool]


def _build_value(layout: Any, value: int | float, kind: str) -> bytes:
    try:
        return layout.build(value)
    except ConstructError as e:
        raise ValueError(f"Value {value!r} does not fit {kind}") from e


class Attribute(msgspec.Struct, frozen=True, kw_only=True):
    """An ``(id, value)`` leaf of a Zusi message.

    Attributes:
        id: 16-bit attribute tag.
        value: Raw payload bytes; interpretation is up to the caller.
    """

    id: int
    value: bytes = b""

    @classmethod
    def from_bytes(cls, id: int, value: bytes | bytearray | memoryview) -> Attribute:
        return cls(id=id, value=bytes(value))

    @classmethod
    def from_u8(cls, id: int, value: int) -> Attribute:
        return cls(id=id, value=_build_value(protocol.UINT8_STRUCT, value, "u8"))

    @classmethod
    def from_u16(cls, id: int, value: int) -> Attribute:
        return cls(id=id, value=_build_value(protocol.UINT16_STRUCT, value, "u16"))

    @classmethod
    def from_u32(cls, id: int, value: int) -> Attribute:
        return cls(id=id, value=_build_value(protocol.UINT32_STRUCT, value, "u32"))

    @classmethod
    def from_i16(cls, id: int, value: int) -> Attribute:
        return cls(id=id, value=_build_value(protocol.INT16_STRUCT, value, "i16"))

    @classmethod
    def from_f32(cls, id: int, value: float) -> Attribute:
        return cls(id=id, value=_build_value(protocol.FLOAT32_STRUCT, value, "f32"))

    @classmethod
    def from_str(cls, id: int, value: str) -> Attribute:
        """UTF-8 payload without terminator; the framing carries the length."""
        return cls(id=id, value=value.encode("utf-8"))

    def _parse(self, layout: Any, kind: str) -> Any:
        width = layout.sizeof()
        if len(self.value) < width:
            raise AttributeDecodeError(
                f"Attribute 0x{self.id:04X} payload has {len(self.value)} bytes, " f"{kind} needs {width}"
            )
        # Only the leading bytes are consumed; longer payloads are accepted.
        return layout.parse(self.value[:width])

    def as_u8(self) -> int:
        return self._parse(protocol.UINT8_STRUCT, "u8")

    def as_u16(self) -> int:
        return self._parse(protocol.UINT16_STRUCT, "u16")

    def as_u32(self) -> int:
        return self._parse(protocol.UINT32_STRUCT, "u32")

    def as_i16(self) -> int:
        return self._parse(protocol.INT16_STRUCT, "i16")

    def as_f32(self) -> float:
        return self._parse(protocol.FLOAT32_STRUCT, "f32")

    def to_str(self) -> str:
        try:
            return self.value.decode("utf-8")
        except UnicodeDecodeError as e:
            raise AttributeDecodeError(f"Attribute 0x{self.id:04X} payload is not valid UTF-8") from e


class Node(msgspec.Struct, frozen=True, kw_only=True):
    """A tagged element of a Zusi message holding attributes and child nodes."""

    id: int
    attributes: list[Attribute] = []
    children: list[Node] = []

    def find_node_excl(self, ids: Sequence[int], cond: NodePredicate | None = None) -> Node | None:
        """Return the first descendant reached by following ``ids`` from this node.

        ``ids[0]`` is matched against this node's children, ``ids[1]`` against
        their children and so on. The node at the end of the path must also
        satisfy ``cond``. An empty path yields this node itself.
        """
        if not ids:
            if cond is None or cond(self):
                return self
            return None
        head, rest = ids[0], ids[1:]
        for child in self.children:
            if child.id != head:
                continue
            found = child.find_node_excl(rest, cond)
            if found is not None:
                return found
        return None

    def find_node_excl_cond(self, ids: Sequence[int], cond: NodePredicate) -> Node | None:
        return self.find_node_excl(ids, cond)

    def find_node(self, ids: Sequence[int], cond: NodePredicate | None = None) -> Node | None:
        """Like :meth:`find_node_excl`, but ``ids[0]`` must equal this node's id.

        The path must contain at least one element.
        """
        assert len(ids) >= 1, "find_node requires a path of at least one id"
        if self.id != ids[0]:
            return None
        return self.find_node_excl(ids[1:], cond)

    def find_node_cond(self, ids: Sequence[int], cond: NodePredicate) -> Node | None:
        return self.find_node(ids, cond)

    def find_attribute_excl(self, ids: Sequence[int]) -> Attribute | None:
        """Return the first attribute reached by following ``ids`` from this node.

        All but the last id select child nodes; the last id selects an
        attribute. The path must contain at least one element.
        """
        assert len(ids) >= 1, "find_attribute_excl requires a path of at least one id"
        if len(ids) == 1:
            for attribute in self.attributes:
                if attribute.id == ids[0]:
                    return attribute
            return None
        for child in self.children:
            if child.id != ids[0]:
                continue
            found = child.find_attribute_excl(ids[1:])
            if found is not None:
                return found
        return None

    def find_attribute(self, ids: Sequence[int]) -> Attribute | None:
        """Like :meth:`find_attribute_excl`, but ``ids[0]`` must equal this node's id.

        The path must contain at least two elements.
        """
        assert len(ids) >= 2, "find_attribute requires a path of at least two ids"
        if self.id != ids[0]:
            return None
        return self.find_attribute_excl(ids[1:])

    def to_bytes(self) -> bytes:
        """Serialize the tree using :func:`zusiclient.protocol.frame.encode_node`."""
        from .frame import encode_node

        return encode_node(self)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> Node:
        """Parse one complete message using :func:`zusiclient.protocol.frame.decode_node`."""
        from .frame import decode_node

        return decode_node(data)


__all__ = ["Attribute", "Node", "NodePredicate"]
