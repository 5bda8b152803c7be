"""General-purpose utilities for zusiclient."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..exceptions import AttributeDecodeError

if TYPE_CHECKING:
    from ..protocol.structures import Attribute, Node

__all__ = [
    "format_attribute",
    "format_node",
    "log_hexdump",
    "log_node",
]

_INDENT = "  "


def log_hexdump(logger_instance: logging.Logger, level: int, label: str, data: bytes) -> None:
    """Log binary data in hexadecimal format.

    Format: [HEXDUMP] %s: %s
    """
    if not logger_instance.isEnabledFor(level):
        return

    hex_str = data.hex(" ").upper()
    logger_instance.log(level, "[HEXDUMP] %s: %s", label, hex_str)


def format_attribute(attribute: Attribute) -> str:
    """Describe an attribute with every interpretation its payload allows."""
    text = f"Attribute 0x{attribute.id:04X} = [{attribute.value.hex(' ').upper()}]"
    if len(attribute.value) == 2:
        text += f", as_u16 = {attribute.as_u16()}"
    if len(attribute.value) == 4:
        text += f", as_f32 = {attribute.as_f32()!r}"
    try:
        text += f", as_str = {attribute.to_str()!r}"
    except AttributeDecodeError:
        pass
    return text


def format_node(node: Node) -> str:
    """Render a message tree as indented text, one line per element."""
    lines: list[str] = []
    pending: list[tuple[Node, int]] = [(node, 0)]
    while pending:
        current, depth = pending.pop()
        lines.append(f"{_INDENT * depth}Node 0x{current.id:04X}")
        for attribute in current.attributes:
            lines.append(f"{_INDENT * (depth + 1)}{format_attribute(attribute)}")
        pending.extend((child, depth + 1) for child in reversed(current.children))
    return "\n".join(lines)


def log_node(logger_instance: logging.Logger, level: int, label: str, node: Node) -> None:
    """Log a rendered message tree, skipping the rendering when ``level`` is disabled."""
    if not logger_instance.isEnabledFor(level):
        return

    logger_instance.log(level, "%s:\n%s", label, format_node(node))
