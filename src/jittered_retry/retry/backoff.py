"""
Backoff calculation.
"""

import random

from .config import RetryConfig


def calculate_backoff(attempt: int, config: RetryConfig) -> float:
    """
    Calculate the full-jitter backoff delay following a failed attempt.

    The delay is drawn uniformly from ``[0, cap)`` where
    ``cap = min(max_timeout_ms, min_timeout_ms * multiplier ** attempt)``.

    Args:
        attempt: Zero-based index of the attempt that just failed
        config: Retry configuration

    Returns:
        Delay in milliseconds
    """
    try:
        cap = min(config.max_timeout_ms, config.min_timeout_ms * config.multiplier**attempt)
    except OverflowError:
        cap = config.max_timeout_ms if config.min_timeout_ms > 0 else 0.0

    return random.random() * cap
