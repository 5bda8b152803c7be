"""Tests for id-path lookups on message trees."""

from __future__ import annotations

import pytest

from zusiclient.protocol.structures import Attribute, Node
from tests.test_constants import TEST_ATTRIBUTE_ID, TEST_MISSING_ID


def _u16(attribute: Attribute | None) -> int:
    assert attribute is not None
    return attribute.as_u16()


def test_find_attribute_returns_first_match(nested_tree: Node) -> None:
    assert _u16(nested_tree.find_attribute([0x0001, TEST_ATTRIBUTE_ID])) == 1
    assert _u16(nested_tree.find_attribute_excl([TEST_ATTRIBUTE_ID])) == 1


def test_find_attribute_descends_into_children(nested_tree: Node) -> None:
    assert _u16(nested_tree.find_attribute([0x0001, 0x0001, TEST_ATTRIBUTE_ID])) == 3
    assert _u16(nested_tree.find_attribute_excl([0x0001, TEST_ATTRIBUTE_ID])) == 3


def test_find_attribute_misses(nested_tree: Node) -> None:
    assert nested_tree.find_attribute([0x0001, TEST_MISSING_ID]) is None
    assert nested_tree.find_attribute([TEST_MISSING_ID, TEST_ATTRIBUTE_ID]) is None
    assert nested_tree.find_attribute([0x0001, 0x0001, 0x0001, TEST_ATTRIBUTE_ID]) is None


def test_find_attribute_backtracks_across_siblings() -> None:
    root = Node(
        id=0x0001,
        children=[
            Node(id=0x0002),
            Node(id=0x0002, attributes=[Attribute.from_u16(TEST_ATTRIBUTE_ID, 9)]),
        ],
    )

    assert _u16(root.find_attribute([0x0001, 0x0002, TEST_ATTRIBUTE_ID])) == 9


def test_find_node_paths(nested_tree: Node) -> None:
    assert nested_tree.find_node([0x0001]) is nested_tree
    assert nested_tree.find_node([0x0001, 0x0001]) is nested_tree.children[0]
    assert nested_tree.find_node([TEST_MISSING_ID]) is None
    assert nested_tree.find_node_excl([]) is nested_tree
    assert nested_tree.find_node_excl([0x0001]) is nested_tree.children[0]
    assert nested_tree.find_node_excl([0x0001, 0x0001]) is None


def test_find_node_cond_selects_later_sibling() -> None:
    second = Node(
        id=0x0002,
        attributes=[Attribute.from_u8(0x0001, 1), Attribute.from_u8(0x0002, 2)],
    )
    root = Node(id=0x0001, children=[Node(id=0x0002), second])

    assert root.find_node([0x0001, 0x0002]) is root.children[0]
    assert root.find_node_cond([0x0001, 0x0002], lambda node: bool(node.attributes)) is second
    assert root.find_node_excl_cond([0x0002], lambda node: bool(node.attributes)) is second


def test_cond_applies_to_final_node_only() -> None:
    leaf = Node(id=0x0003, attributes=[Attribute.from_u8(0x0001, 1)])
    root = Node(
        id=0x0001,
        children=[
            Node(id=0x0002, children=[Node(id=0x0003)]),
            Node(id=0x0002, children=[leaf]),
        ],
    )

    found = root.find_node_cond([0x0001, 0x0002, 0x0003], lambda node: bool(node.attributes))

    assert found is leaf


def test_cond_on_empty_path() -> None:
    root = Node(id=0x0001)

    assert root.find_node_excl_cond([], lambda node: node.id == 0x0001) is root
    assert root.find_node_excl_cond([], lambda node: False) is None
    assert root.find_node_cond([0x0001], lambda node: False) is None


def test_cond_never_matching_returns_none(nested_tree: Node) -> None:
    assert nested_tree.find_node_cond([0x0001, 0x0001], lambda node: False) is None


def test_short_paths_are_programming_errors(nested_tree: Node) -> None:
    with pytest.raises(AssertionError):
        nested_tree.find_node([])
    with pytest.raises(AssertionError):
        nested_tree.find_attribute([0x0001])
    with pytest.raises(AssertionError):
        nested_tree.find_attribute_excl([])
