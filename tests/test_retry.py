"""Tests for retry configuration and backoff - behavior focused."""

import dataclasses

import pytest
from unittest.mock import patch

from jittered_retry.exceptions import ConfigError
from jittered_retry.retry import RetryConfig, calculate_backoff


class TestCalculateBackoff:
    """Test backoff calculation behavior."""

    def test_backoff_stays_below_growing_cap(self):
        """Delay for attempt i is within [0, min(max, min * multiplier**i))."""
        config = RetryConfig(min_timeout_ms=10, max_timeout_ms=1000, multiplier=2)

        for attempt in range(12):
            cap = min(1000, 10 * 2**attempt)
            for _ in range(50):
                delay = calculate_backoff(attempt, config)
                assert 0 <= delay < cap

    def test_backoff_respects_max_timeout(self):
        """Delay never exceeds max_timeout_ms, even at high attempt numbers."""
        config = RetryConfig(min_timeout_ms=100, max_timeout_ms=500)

        delays = [calculate_backoff(100, config) for _ in range(200)]

        assert max(delays) <= config.max_timeout_ms

    def test_backoff_is_full_jitter(self):
        """Delay is random() times the cap, not the cap plus noise."""
        config = RetryConfig(min_timeout_ms=10, max_timeout_ms=1000, multiplier=3)

        with patch("jittered_retry.retry.backoff.random.random", return_value=0.5):
            assert calculate_backoff(0, config) == 5.0
            assert calculate_backoff(2, config) == 45.0

    def test_backoff_with_zero_random_is_zero(self):
        """Lower bound of the jitter range is zero."""
        with patch("jittered_retry.retry.backoff.random.random", return_value=0.0):
            assert calculate_backoff(3, RetryConfig()) == 0.0

    def test_equal_min_and_max_collapses_to_capped_jitter(self):
        """With min == max, every attempt draws from the same range."""
        config = RetryConfig(min_timeout_ms=200, max_timeout_ms=200)

        with patch("jittered_retry.retry.backoff.random.random", return_value=0.25):
            assert calculate_backoff(0, config) == 50.0
            assert calculate_backoff(7, config) == 50.0

    def test_backoff_with_jitter_varies(self):
        """Delays should vary between draws (probabilistic)."""
        config = RetryConfig(min_timeout_ms=100, max_timeout_ms=10000)

        delays = {calculate_backoff(2, config) for _ in range(20)}

        assert len(delays) > 1

    def test_zero_min_timeout_stays_zero_after_overflow(self):
        """With min_timeout_ms=0 the cap is 0 at every attempt, overflowed or not."""
        config = RetryConfig(min_timeout_ms=0, max_timeout_ms=1000, multiplier=10.0)

        with patch("jittered_retry.retry.backoff.random.random", return_value=0.5):
            assert calculate_backoff(5, config) == 0.0
            assert calculate_backoff(400, config) == 0.0

    def test_huge_attempt_does_not_overflow(self):
        """Exponent overflow falls back to the max timeout cap."""
        config = RetryConfig(min_timeout_ms=1.5, max_timeout_ms=100, multiplier=10.0)

        delay = calculate_backoff(10_000, config)

        assert 0 <= delay < 100


class TestRetryConfig:
    """Test RetryConfig behavior."""

    def test_defaults(self):
        """Omitted fields take the documented defaults."""
        config = RetryConfig()

        assert config.multiplier == 2
        assert config.max_timeout_ms == 60000
        assert config.max_attempts == 5
        assert config.min_timeout_ms == 1000

    def test_config_is_immutable(self):
        """Config cannot be changed after construction."""
        config = RetryConfig()

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.max_attempts = 10

    def test_min_greater_than_max_rejected(self):
        """min_timeout_ms > max_timeout_ms fails fast."""
        with pytest.raises(ConfigError) as exc_info:
            RetryConfig(min_timeout_ms=100, max_timeout_ms=50)

        assert exc_info.value.field == "min_timeout_ms"

    def test_negative_max_timeout_rejected(self):
        """max_timeout_ms < 0 fails regardless of other fields."""
        with pytest.raises(ConfigError) as exc_info:
            RetryConfig(max_timeout_ms=-1, min_timeout_ms=-5)

        assert exc_info.value.field == "max_timeout_ms"

    @pytest.mark.parametrize(
        "options",
        [
            {"max_attempts": 0},
            {"max_attempts": 2.5},
            {"multiplier": 0},
            {"multiplier": -2},
            {"min_timeout_ms": -1},
            {"min_timeout_ms": float("nan"), "max_timeout_ms": 10},
            {"max_timeout_ms": float("nan")},
            {"multiplier": float("nan")},
            {"max_timeout_ms": float("inf")},
        ],
    )
    def test_out_of_range_values_rejected(self, options):
        """Values outside their documented ranges are ConfigErrors."""
        with pytest.raises(ConfigError):
            RetryConfig(**options)

    def test_non_finite_field_is_named(self):
        """NaN is rejected with the offending field, not passed to sleep."""
        with pytest.raises(ConfigError) as exc_info:
            RetryConfig(min_timeout_ms=float("nan"), max_timeout_ms=10)

        assert exc_info.value.field == "min_timeout_ms"

    def test_equal_min_and_max_is_valid(self):
        """min_timeout_ms == max_timeout_ms is an intentional configuration."""
        config = RetryConfig(min_timeout_ms=500, max_timeout_ms=500)
        assert config.min_timeout_ms == config.max_timeout_ms

    def test_multiplier_defaults_with_custom_timeouts(self):
        """Custom timeouts keep the default multiplier."""
        config = RetryConfig(min_timeout_ms=10, max_timeout_ms=100)
        assert config.multiplier == 2

    def test_from_options_fills_defaults(self):
        """Partial options merge over the defaults."""
        config = RetryConfig.from_options(max_attempts=2)

        assert config.max_attempts == 2
        assert config.min_timeout_ms == 1000

    def test_from_options_rejects_unknown_keys(self):
        """Misspelled options are not silently ignored."""
        with pytest.raises(ConfigError, match="max_timeout"):
            RetryConfig.from_options(max_timeout=10)

    def test_aggressive_preset_has_more_attempts(self):
        """Aggressive preset should have more attempts than default."""
        assert RetryConfig.aggressive().max_attempts > RetryConfig().max_attempts

    def test_conservative_preset_has_fewer_attempts(self):
        """Conservative preset should have fewer attempts than default."""
        assert RetryConfig.conservative().max_attempts < RetryConfig().max_attempts

    def test_no_retry_preset_has_single_attempt(self):
        """No retry preset tries exactly once."""
        assert RetryConfig.no_retry().max_attempts == 1
