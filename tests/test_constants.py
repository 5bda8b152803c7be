"""Centralized constants for testing purposes.
Do not use in production code.
"""

from typing import Final

TEST_NODE_ID: Final[int] = 0x1234
TEST_ATTRIBUTE_ID: Final[int] = 0x0042
TEST_MISSING_ID: Final[int] = 0x0024
TEST_RANDOM_SEED: Final[int] = 3735928559
TEST_CLIENT_NAME: Final[str] = "client"
TEST_CLIENT_VERSION: Final[str] = "1.0"
