"""
Jittered Retry - bounded retries with exponential backoff and full jitter.

Wraps any sync or async zero-argument operation and retries it until it
succeeds or the attempt budget runs out.
"""

from .exceptions import (
    RetryError,
    ConfigError,
    RetryExhaustedError,
    RetryCancelledError,
)
from .retry import (
    RetryConfig,
    RetryExecutor,
    calculate_backoff,
    retry,
    retry_sync,
    with_retry,
    async_with_retry,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "RetryError",
    "ConfigError",
    "RetryExhaustedError",
    "RetryCancelledError",
    # Retry
    "RetryConfig",
    "RetryExecutor",
    "calculate_backoff",
    "retry",
    "retry_sync",
    "with_retry",
    "async_with_retry",
]
