"""Port constants and argument validation."""

from __future__ import annotations

from typing import Any

from portguard.errors import InvalidPortError

__all__ = [
    "MIN_PORT",
    "MAX_PORT",
    "DEFAULT_HOST",
    "is_valid_port",
    "validate_port",
    "validate_host",
]

MIN_PORT = 1
MAX_PORT = 65535
DEFAULT_HOST = "localhost"


def is_valid_port(port: Any) -> bool:
    """Return True for an int (not bool) in [MIN_PORT, MAX_PORT]."""
    if isinstance(port, bool) or not isinstance(port, int):
        return False
    return MIN_PORT <= port <= MAX_PORT


def validate_port(port: Any, label: str = "port number") -> int:
    """Validate a port number.

    Args:
        port: Value to check
        label: Name used in the error message

    Returns:
        The port, unchanged

    Raises:
        InvalidPortError: If the port is not a whole number in 1-65535
    """
    if not is_valid_port(port):
        raise InvalidPortError(port, label)
    return port


def validate_host(host: str) -> str:
    # An empty host means "all interfaces" to the socket layer, which is
    # a different bind than the caller asked for.
    if not isinstance(host, str) or not host:
        raise ValueError(f"Host must be a non-empty string, got {host!r}")
    return host
