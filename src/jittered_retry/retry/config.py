"""
Retry configuration and presets.
"""

import math
from dataclasses import dataclass, fields
from typing import Any

from ..exceptions import ConfigError


@dataclass(frozen=True)
class RetryConfig:
    """
    Configuration for retry behavior.

    Attributes:
        multiplier: How much the backoff cap grows after each retry (default: 2)
        max_timeout_ms: Maximum milliseconds between retries (default: 60000)
        max_attempts: Total number of attempts before giving up (default: 5)
        min_timeout_ms: Initial and minimum milliseconds between retries (default: 1000)

    Raises:
        ConfigError: If the combination of values is invalid
    """

    multiplier: float = 2.0
    max_timeout_ms: float = 60000.0
    max_attempts: int = 5
    min_timeout_ms: float = 1000.0

    def __post_init__(self) -> None:
        for name in ("multiplier", "max_timeout_ms", "min_timeout_ms"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigError(f"{name} must be a finite number", field=name)
        if self.max_timeout_ms < 0:
            raise ConfigError("max_timeout_ms is less than 0", field="max_timeout_ms")
        if self.min_timeout_ms > self.max_timeout_ms:
            raise ConfigError(
                "min_timeout_ms is greater than max_timeout_ms", field="min_timeout_ms"
            )
        if self.min_timeout_ms < 0:
            raise ConfigError("min_timeout_ms is less than 0", field="min_timeout_ms")
        if self.multiplier <= 0:
            raise ConfigError("multiplier must be greater than 0", field="multiplier")
        if isinstance(self.max_attempts, bool) or not isinstance(self.max_attempts, int):
            raise ConfigError("max_attempts must be an integer", field="max_attempts")
        if self.max_attempts < 1:
            raise ConfigError("max_attempts must be at least 1", field="max_attempts")

    @classmethod
    def from_options(cls, **options: Any) -> "RetryConfig":
        """Build a config from partial options; omitted fields take defaults."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ConfigError(f"Unknown retry options: {', '.join(unknown)}")
        return cls(**options)

    @classmethod
    def aggressive(cls) -> "RetryConfig":
        """Preset for aggressive retry (more attempts, longer delays)."""
        return cls(
            max_attempts=10,
            min_timeout_ms=2000.0,
            max_timeout_ms=120000.0,
        )

    @classmethod
    def conservative(cls) -> "RetryConfig":
        """Preset for conservative retry (fewer attempts, shorter delays)."""
        return cls(
            max_attempts=3,
            min_timeout_ms=500.0,
            max_timeout_ms=10000.0,
        )

    @classmethod
    def no_retry(cls) -> "RetryConfig":
        """Preset for no retry (single attempt only)."""
        return cls(max_attempts=1)
