"""Zusi message tree model and stream framing."""

from . import frame, protocol, structures
from .frame import decode_node, encode_node, iter_node_records, receive, send
from .structures import Attribute, Node, NodePredicate

__all__ = [
    "Attribute",
    "Node",
    "NodePredicate",
    "decode_node",
    "encode_node",
    "frame",
    "iter_node_records",
    "protocol",
    "receive",
    "send",
    "structures",
]
