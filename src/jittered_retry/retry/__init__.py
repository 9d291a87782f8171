"""
Jittered Retry - Retry Logic.

Bounded retries with exponential backoff and full jitter.
"""

from .config import RetryConfig
from .backoff import calculate_backoff
from .executor import (
    RetryExecutor,
    retry,
    retry_sync,
    with_retry,
    async_with_retry,
)

__all__ = [
    "RetryConfig",
    "RetryExecutor",
    "calculate_backoff",
    "retry",
    "retry_sync",
    "with_retry",
    "async_with_retry",
]
