"""
Base exception classes for retry execution.

Every error raised by the library itself derives from `RetryError`. Failures
raised by the retried operation are never replaced, only chained.
"""


class RetryError(Exception):
    """Base exception for all retry errors."""

    def __init__(self, message: str, *, attempts: int | None = None):
        super().__init__(message)
        self.message = message
        self.attempts = attempts

    def __str__(self) -> str:
        return self.message


class ConfigError(RetryError, ValueError):
    """Raised when a retry configuration is invalid. Never retried."""

    def __init__(self, message: str = "Invalid retry configuration", *, field: str | None = None):
        super().__init__(message)
        self.field = field

    def __str__(self) -> str:
        if self.field:
            return f"{self.message} (field: {self.field})"
        return self.message

    def __reduce__(self):
        return (type(self), (self.message,), {"field": self.field})


class RetryExhaustedError(RetryError):
    """Raised when every attempt in the budget has failed."""

    def __init__(self, cause: BaseException | None, attempts: int):
        super().__init__(f"Exceeded max retry count ({attempts})", attempts=attempts)
        self.cause = cause

    def __reduce__(self):
        return (type(self), (self.cause, self.attempts))


class RetryCancelledError(RetryError):
    """Raised when the wait between attempts is aborted by a cancel event."""

    def __init__(self, cause: BaseException | None = None, attempts: int = 0):
        super().__init__(f"Retry cancelled after {attempts} attempt(s)", attempts=attempts)
        self.cause = cause

    def __reduce__(self):
        return (type(self), (self.cause, self.attempts))
