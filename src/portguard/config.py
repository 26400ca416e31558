"""Bind policy configuration."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

__all__ = ["BindPolicy", "load_policy"]


class BindPolicy(BaseModel):
    """Timing knobs for probing and retrying.

    All values are in seconds. The defaults give the standard schedule:
    a 5 second probe deadline and backoff of 100ms, 200ms, 400ms ...
    capped at 1s, plus up to 50ms of jitter.
    """

    probe_timeout: float = Field(default=5.0, gt=0)
    base_delay: float = Field(default=0.1, gt=0)
    max_delay: float = Field(default=1.0, gt=0)
    jitter_max: float = Field(default=0.05, ge=0)

    model_config = {"extra": "ignore"}


def load_policy(config_path: Path) -> BindPolicy:
    """Load a bind policy from a JSON file.

    Args:
        config_path: Path to a JSON object with BindPolicy fields

    Returns:
        BindPolicy built from the file

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file is not valid JSON
        UnicodeDecodeError: If the file is not UTF-8
        pydantic.ValidationError: If a field has an invalid value
    """
    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"Invalid JSON in policy file: {e}")
        raise

    try:
        policy = BindPolicy(**data)
    except Exception as e:
        logger.error(f"Invalid policy structure: {e}")
        raise

    logger.debug(f"Loaded bind policy from {config_path}")
    return policy
