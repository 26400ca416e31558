"""Exponential backoff with jitter."""

from __future__ import annotations

import random
from collections.abc import Callable

from portguard.config import BindPolicy

__all__ = ["JitterProvider", "random_jitter", "base_delay", "backoff_delay"]

# Receives the exclusive upper bound, returns a value in [0, bound).
JitterProvider = Callable[[float], float]


def random_jitter(bound: float) -> float:
    """Uniform jitter in [0, bound)."""
    return random.random() * bound


def base_delay(attempt: int, policy: BindPolicy) -> float:
    """Deterministic part of the delay after a failed attempt (1-based)."""
    return min(policy.base_delay * 2 ** (attempt - 1), policy.max_delay)


def backoff_delay(
    attempt: int,
    policy: BindPolicy | None = None,
    jitter: JitterProvider | None = None,
) -> float:
    """Compute the sleep before the attempt after ``attempt``.

    With the default policy: attempt 1 -> 100-150ms, 2 -> 200-250ms,
    3 -> 400-450ms, and never more than 1000ms plus jitter.

    Args:
        attempt: Index of the attempt that just failed, starting at 1
        policy: Timing policy (default: BindPolicy())
        jitter: Jitter provider (default: random_jitter)

    Returns:
        Delay in seconds
    """
    policy = policy or BindPolicy()
    jitter = jitter or random_jitter
    return base_delay(attempt, policy) + jitter(policy.jitter_max)
