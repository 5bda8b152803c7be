"""Pytest configuration for zusiclient tests."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
if str(PACKAGE_ROOT) not in sys.path:
    sys.path.insert(0, str(PACKAGE_ROOT))

from zusiclient.protocol.structures import Attribute, Node  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "fuzz: seeded random-input resilience tests")


@pytest.fixture(autouse=True)
def reset_logging_handlers():
    """Close and remove all root logging handlers after each test."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        try:
            handler.close()
        except (OSError, RuntimeError):
            pass
        root.removeHandler(handler)


@pytest.fixture()
def nested_tree() -> Node:
    """Two levels sharing ids, each holding two attributes with the same id."""
    return Node(
        id=0x0001,
        attributes=[Attribute.from_u16(0x0042, 1), Attribute.from_u16(0x0042, 2)],
        children=[
            Node(
                id=0x0001,
                attributes=[Attribute.from_u16(0x0042, 3), Attribute.from_u16(0x0042, 4)],
            )
        ],
    )


@pytest.fixture()
def ack_hello_accepted() -> Node:
    return Node(
        id=0x0001,
        children=[Node(id=0x0002, attributes=[Attribute.from_bytes(0x0003, b"\x00")])],
    )


@pytest.fixture()
def ack_needed_data_accepted() -> Node:
    return Node(
        id=0x0002,
        children=[Node(id=0x0004, attributes=[Attribute.from_bytes(0x0001, b"\x00")])],
    )
