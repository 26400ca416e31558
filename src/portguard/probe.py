"""Atomic bind probes.

A probe asks the kernel for the port with one bind/listen call. There is
no "is it free?" check beforehand, so there is nothing for another process
to race against: the bind either succeeds or fails.

``probe_port`` releases the port again as soon as the bind succeeded, so
the port is only known to have been free at that instant. Callers that
need the port to stay theirs should use ``reserve_port``, which keeps the
listening socket open until the ``async with`` block exits.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from portguard.errors import BindError, ProbeTimeoutError
from portguard.ports import DEFAULT_HOST, validate_host, validate_port

logger = logging.getLogger(__name__)

__all__ = ["PROBE_TIMEOUT", "probe_port", "reserve_port"]

PROBE_TIMEOUT = 5.0  # seconds


async def _open_server(host: str, port: int) -> asyncio.AbstractServer:
    """Bind and listen on (host, port) with a single create_server call."""
    loop = asyncio.get_running_loop()
    # No SO_REUSEADDR: a port somebody else is listening on must fail here
    return await loop.create_server(
        asyncio.Protocol,
        host=host,
        port=port,
        reuse_address=False,
        start_serving=False,
    )


async def _bind_and_release(host: str, port: int) -> None:
    server = await _open_server(host, port)
    server.close()
    await server.wait_closed()


async def probe_port(port: int, host: str = DEFAULT_HOST, timeout: float = PROBE_TIMEOUT) -> None:
    """Bind (host, port) once and release it immediately.

    The arguments are not validated here; callers do that.

    Args:
        port: Port to bind
        host: Hostname or IP literal to bind on
        timeout: Deadline for the whole bind/close cycle, in seconds

    Raises:
        BindError: If the OS rejected the bind (in use, permission denied,
            bad address, name resolution failure)
        ProbeTimeoutError: If the cycle did not finish within ``timeout``
    """
    try:
        await asyncio.wait_for(_bind_and_release(host, port), timeout=timeout)
    except asyncio.TimeoutError as e:
        # Must come before OSError: the builtin TimeoutError subclasses it
        raise ProbeTimeoutError(port, host, timeout) from e
    except (OSError, ValueError) as e:
        # getaddrinfo raises UnicodeError or ValueError for hosts it cannot encode
        raise BindError(port, host, e) from e


@asynccontextmanager
async def reserve_port(
    port: int,
    host: str = DEFAULT_HOST,
    timeout: float = PROBE_TIMEOUT,
) -> AsyncIterator[asyncio.AbstractServer]:
    """Bind (host, port) and hold it until the block exits.

    Yields the listening (not yet serving) server. Use ``server.sockets``
    to hand the bound socket to whatever needs it, or call
    ``server.start_serving()`` after attaching a protocol.

    Raises:
        InvalidPortError: If the port is out of range
        BindError: If the OS rejected the bind
        ProbeTimeoutError: If the bind did not finish within ``timeout``
    """
    validate_port(port)
    validate_host(host)

    try:
        server = await asyncio.wait_for(_open_server(host, port), timeout=timeout)
    except asyncio.TimeoutError as e:
        raise ProbeTimeoutError(port, host, timeout) from e
    except (OSError, ValueError) as e:
        raise BindError(port, host, e) from e

    logger.debug(f"Reserved port {port} on {host}")
    try:
        yield server
    finally:
        server.close()
        await server.wait_closed()
        logger.debug(f"Released port {port} on {host}")
