"""Retrying port binder."""

from __future__ import annotations

import asyncio
import logging

from portguard.backoff import JitterProvider, backoff_delay
from portguard.config import BindPolicy
from portguard.errors import BindError, PortGuardError, ProbeTimeoutError, UnknownBindError
from portguard.ports import DEFAULT_HOST, is_valid_port, validate_host, validate_port
from portguard.probe import probe_port

logger = logging.getLogger(__name__)

__all__ = ["DEFAULT_MAX_RETRIES", "bind_port_with_retry", "is_port_available"]

DEFAULT_MAX_RETRIES = 3


async def bind_port_with_retry(
    port: int,
    host: str = DEFAULT_HOST,
    max_retries: int = DEFAULT_MAX_RETRIES,
    *,
    policy: BindPolicy | None = None,
    jitter: JitterProvider | None = None,
) -> None:
    """Bind a port atomically, retrying with exponential backoff and jitter.

    Each attempt is a single probe_port() call, so there is no window
    between checking and binding. Between attempts the coroutine sleeps
    for backoff_delay(attempt).

    Note that the port is released again when this returns. Use
    reserve_port() to keep it.

    Args:
        port: Port number to bind to
        host: Host to bind to (default: localhost)
        max_retries: Maximum number of bind attempts (default: 3)
        policy: Timing policy (default: BindPolicy())
        jitter: Jitter provider, mostly for tests (default: random_jitter)

    Raises:
        InvalidPortError: If the port is invalid; raised before any attempt
        ValueError: If max_retries < 1 or the host is empty
        BindError: If the last attempt was rejected by the OS
        ProbeTimeoutError: If the last attempt timed out
    """
    validate_port(port)
    validate_host(host)
    if max_retries < 1:
        raise ValueError(f"max_retries must be >= 1, got {max_retries}")

    policy = policy or BindPolicy()
    last_error: PortGuardError | None = None
    attempt = 1

    while attempt <= max_retries:
        logger.debug(f"Binding {host}:{port} (attempt {attempt}/{max_retries})")
        try:
            await probe_port(port, host, timeout=policy.probe_timeout)
        except (BindError, ProbeTimeoutError) as e:
            last_error = e
        else:
            logger.debug(f"Successfully bound {host}:{port} on attempt {attempt}")
            return

        if attempt == max_retries:
            # Single-shot callers (the scanner) expect failures; keep them quiet
            level = logging.ERROR if max_retries > 1 else logging.DEBUG
            logger.log(
                level,
                f"Failed to bind {host}:{port} after {max_retries} attempt(s): {last_error}",
            )
            raise last_error

        delay = backoff_delay(attempt, policy, jitter)
        logger.debug(
            f"Bind {host}:{port} failed on attempt {attempt}, "
            f"retrying in {delay * 1000:.0f}ms: {last_error}"
        )
        await asyncio.sleep(delay)
        attempt += 1

    raise last_error or UnknownBindError(port, host)


async def is_port_available(
    port: int,
    host: str = DEFAULT_HOST,
    *,
    policy: BindPolicy | None = None,
) -> bool:
    """Check whether a single probe of the port currently succeeds.

    WARNING: the answer can be stale by the time the caller acts on it.
    Use it for logging and diagnostics only, never to decide whether to
    bind; bind_port_with_retry() and reserve_port() are the race-free
    paths.

    Never raises: invalid arguments, bind errors and timeouts all
    return False. The probe deadline comes from policy.probe_timeout.
    """
    if not is_valid_port(port) or not isinstance(host, str) or not host:
        return False

    policy = policy or BindPolicy()
    try:
        await probe_port(port, host, timeout=policy.probe_timeout)
    except (BindError, ProbeTimeoutError) as e:
        logger.debug(f"Port {host}:{port} unavailable: {e}")
        return False
    return True
