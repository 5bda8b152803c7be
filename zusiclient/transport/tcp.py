"""Blocking TCP transport for a single Zusi connection.

The connection is a thin file-like wrapper over a socket: reads and writes
block on the caller's thread, and timeouts come from the socket itself.
Reconnecting is left to the caller.
"""

from __future__ import annotations

import logging
import socket
from collections.abc import Sequence
from types import TracebackType
from typing import BinaryIO

from ..config.settings import ClientConfig
from ..protocol.frame import receive
from ..protocol.structures import Node

logger = logging.getLogger("zusiclient.transport.tcp")


class ZusiConnection:
    """Buffered byte stream over a connected socket."""

    def __init__(self, sock: socket.socket, config: ClientConfig | None = None) -> None:
        self._config = config or ClientConfig()
        self._sock: socket.socket | None = sock
        self._file: BinaryIO | None = sock.makefile("rwb")  # type: ignore[assignment]

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def closed(self) -> bool:
        return self._file is None

    def _require_file(self) -> BinaryIO:
        if self._file is None:
            raise OSError("Connection closed")
        return self._file

    def read(self, size: int = -1, /) -> bytes:
        return self._require_file().read(size)

    def write(self, data: bytes, /) -> int:
        return self._require_file().write(data)

    def flush(self) -> None:
        self._require_file().flush()

    def close(self) -> None:
        """Close the stream and the socket.

        The socket is closed even when flushing buffered output fails; that
        error is raised afterwards.
        """
        file, self._file = self._file, None
        sock, self._sock = self._sock, None
        try:
            if file is not None:
                file.close()
        finally:
            if sock is not None:
                sock.close()
                logger.debug("Connection to %s:%d closed", *self._config.address)

    def __enter__(self) -> ZusiConnection:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def send_hello(self, client_name: str | None = None, client_version: str | None = None) -> Node:
        """Run the HELLO handshake using the configured client identity by default."""
        from ..services.handshake import send_hello

        return send_hello(
            client_name if client_name is not None else self._config.client_name,
            client_version if client_version is not None else self._config.client_version,
            self,
        )

    def send_needed_data(
        self,
        cab_display_ids: Sequence[int] = (),
        program_data_ids: Sequence[int] = (),
        cab_operation: bool = False,
    ) -> Node:
        """Subscribe to cab displays, cab operation events and program data."""
        from ..services.needed_data import send_needed_data

        return send_needed_data(cab_display_ids, program_data_ids, cab_operation, self)

    def receive(self) -> Node:
        """Read the next message Zusi sends, e.g. a data update after subscribing."""
        return receive(self)


def open_connection(config: ClientConfig | None = None) -> ZusiConnection:
    """Connect to Zusi and return the stream wrapper.

    ``connect_timeout`` bounds the TCP connect; afterwards the socket uses
    ``read_timeout`` (``None`` blocks indefinitely). Connection errors are
    raised as ``OSError``.
    """
    config = config or ClientConfig()
    logger.info("Connecting to Zusi at %s:%d", config.host, config.port)
    sock = socket.create_connection(config.address, timeout=config.connect_timeout)
    sock.settimeout(config.read_timeout)
    sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
    return ZusiConnection(sock, config)


__all__ = ["ZusiConnection", "open_connection"]
