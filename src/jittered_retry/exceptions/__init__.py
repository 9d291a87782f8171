"""
Jittered Retry - Exception Hierarchy.

Errors surfaced by the retry executor.
"""

from .base import (
    RetryError,
    ConfigError,
    RetryExhaustedError,
    RetryCancelledError,
)

__all__ = [
    "RetryError",
    "ConfigError",
    "RetryExhaustedError",
    "RetryCancelledError",
]
