"""Sequential scan for a bindable port."""

from __future__ import annotations

import logging

from portguard.binder import bind_port_with_retry
from portguard.config import BindPolicy
from portguard.errors import BindError, NoAvailablePortError, PortRangeExceededError, ProbeTimeoutError
from portguard.ports import DEFAULT_HOST, MAX_PORT, validate_host, validate_port

logger = logging.getLogger(__name__)

__all__ = ["DEFAULT_MAX_ATTEMPTS", "find_available_port"]

DEFAULT_MAX_ATTEMPTS = 10


async def find_available_port(
    start_port: int,
    host: str = DEFAULT_HOST,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    *,
    policy: BindPolicy | None = None,
) -> int:
    """Find the first bindable port in [start_port, start_port + max_attempts - 1].

    Every candidate gets exactly one atomic bind attempt, without backoff.
    The returned port was bindable when it was probed but has been
    released since; wrap the real bind in reserve_port() or be ready for
    it to fail.

    Args:
        start_port: First port to try
        host: Host to bind to (default: localhost)
        max_attempts: Number of consecutive ports to try (default: 10)
        policy: Timing policy (default: BindPolicy())

    Returns:
        The lowest port in range that could be bound

    Raises:
        InvalidPortError: If start_port is invalid
        ValueError: If max_attempts < 1 or the host is empty
        PortRangeExceededError: If the scan reaches a port above 65535
        NoAvailablePortError: If no port in range could be bound
    """
    validate_port(start_port, "start port")
    validate_host(host)
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    for offset in range(max_attempts):
        port = start_port + offset
        if port > MAX_PORT:
            raise PortRangeExceededError(port)

        try:
            await bind_port_with_retry(port, host, max_retries=1, policy=policy)
        except (BindError, ProbeTimeoutError) as e:
            logger.debug(f"Port {host}:{port} unavailable, trying next: {e}")
            continue

        logger.debug(f"Found available port {port} on {host}")
        return port

    raise NoAvailablePortError(start_port, start_port + max_attempts - 1, host)
