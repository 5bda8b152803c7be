"""Stream interface shared by transports and exchanges."""

from __future__ import annotations

from typing import Protocol


class ZusiStream(Protocol):
    """Blocking, ordered byte stream an exchange runs on."""

    def read(self, size: int = -1, /) -> bytes | None: ...

    def write(self, data: bytes, /) -> int | None: ...

    def flush(self) -> None: ...
