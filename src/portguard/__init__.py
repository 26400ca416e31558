"""portguard - race-free local TCP port claiming."""

from __future__ import annotations

from portguard.backoff import JitterProvider, backoff_delay, random_jitter
from portguard.binder import bind_port_with_retry, is_port_available
from portguard.config import BindPolicy, load_policy
from portguard.errors import (
    BindError,
    InvalidPortError,
    NoAvailablePortError,
    PortGuardError,
    PortRangeExceededError,
    ProbeTimeoutError,
    UnknownBindError,
)
from portguard.ports import DEFAULT_HOST, MAX_PORT, MIN_PORT, validate_port
from portguard.probe import PROBE_TIMEOUT, probe_port, reserve_port
from portguard.scanner import find_available_port

__all__ = [
    # Binding
    "bind_port_with_retry",
    "is_port_available",
    "find_available_port",
    "probe_port",
    "reserve_port",
    # Backoff
    "JitterProvider",
    "backoff_delay",
    "random_jitter",
    # Config
    "BindPolicy",
    "load_policy",
    # Ports
    "DEFAULT_HOST",
    "MIN_PORT",
    "MAX_PORT",
    "PROBE_TIMEOUT",
    "validate_port",
    # Errors
    "PortGuardError",
    "InvalidPortError",
    "BindError",
    "ProbeTimeoutError",
    "UnknownBindError",
    "PortRangeExceededError",
    "NoAvailablePortError",
]
