"""Shared socket fixtures."""

from __future__ import annotations

import socket
from collections.abc import Callable, Iterator

import pytest

HOST = "127.0.0.1"


@pytest.fixture
def hold_port() -> Iterator[Callable[..., socket.socket]]:
    """Factory that opens a listener on 127.0.0.1 (port 0 = ephemeral).

    Every listener it opens is closed at teardown.
    """
    socks: list[socket.socket] = []

    def hold(port: int = 0) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((HOST, port))
        except OSError:
            sock.close()
            raise
        sock.listen(1)
        socks.append(sock)
        return sock

    yield hold

    for sock in socks:
        sock.close()


@pytest.fixture
def held_port(hold_port) -> int:
    """A port with a live listener on 127.0.0.1 for the whole test."""
    return hold_port().getsockname()[1]


@pytest.fixture
def free_port() -> int:
    """A port that was free on 127.0.0.1 a moment ago."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind((HOST, 0))
    port = sock.getsockname()[1]
    sock.close()
    return port
