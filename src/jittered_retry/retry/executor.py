"""
Retry executor and decorators.
"""

import asyncio
import functools
import inspect
import logging
import threading
import time
from typing import Any, Awaitable, Callable, Mapping, ParamSpec, TypeVar

from .backoff import calculate_backoff
from .config import RetryConfig
from ..exceptions import RetryCancelledError, RetryExhaustedError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

OnRetry = Callable[[int, Exception, float], None]
ConfigLike = RetryConfig | Mapping[str, Any] | None


def _resolve_config(config: ConfigLike) -> RetryConfig:
    if config is None:
        return RetryConfig()
    if isinstance(config, RetryConfig):
        return config
    return RetryConfig.from_options(**config)


def _describe(operation: Callable[..., Any]) -> str:
    # functools.partial has no __qualname__
    target = operation.func if isinstance(operation, functools.partial) else operation
    return getattr(target, "__qualname__", None) or repr(target)


async def _wait(delay_ms: float, cancel_event: asyncio.Event | None) -> bool:
    """Suspend for delay_ms. Returns True if the cancel event fired."""
    if cancel_event is None:
        await asyncio.sleep(delay_ms / 1000)
        return False
    if cancel_event.is_set():
        return True
    try:
        await asyncio.wait_for(cancel_event.wait(), timeout=delay_ms / 1000)
    except asyncio.TimeoutError:
        return False
    return True


def _wait_sync(delay_ms: float, cancel_event: threading.Event | None) -> bool:
    if cancel_event is None:
        time.sleep(delay_ms / 1000)
        return False
    return cancel_event.wait(delay_ms / 1000)


class RetryExecutor:
    """
    Runs an operation until it succeeds or the attempt budget is exhausted.

    The first attempt is immediate. After a failure the executor waits the
    current timeout (starting at ``min_timeout_ms``) and then draws the next
    timeout with full jitter. No wait follows the final attempt, so
    ``max_attempts`` tries yield at most ``max_attempts - 1`` waits.

    All attempt state is local to a single call, so one executor can serve
    any number of concurrent calls.
    """

    def __init__(
        self,
        config: ConfigLike = None,
        on_retry: OnRetry | None = None,
    ):
        """
        Initialize the executor.

        Args:
            config: Retry configuration, or a mapping of options (default: RetryConfig())
            on_retry: Optional callback(attempt, exception, delay_ms) called before each wait

        Raises:
            ConfigError: If the configuration is invalid
        """
        self.config = _resolve_config(config)
        self.on_retry = on_retry

    def _before_wait(
        self, operation: Callable[..., Any], attempt: int, error: Exception, delay_ms: float
    ) -> None:
        if self.on_retry:
            self.on_retry(attempt, error, delay_ms)
        else:
            logger.warning(
                f"Retry {attempt + 1}/{self.config.max_attempts - 1} of {_describe(operation)}: "
                f"{error!r}, waiting {delay_ms / 1000:.3f}s"
            )

    def _exhausted(self, operation: Callable[..., Any], error: Exception | None) -> RetryExhaustedError:
        logger.error(
            f"{_describe(operation)} failed after {self.config.max_attempts} attempts: {error!r}"
        )
        return RetryExhaustedError(error, self.config.max_attempts)

    async def execute(
        self,
        operation: Callable[[], Awaitable[T] | T],
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> T:
        """
        Invoke ``operation`` with retries, awaiting its result if it is awaitable.

        Args:
            operation: Zero-argument callable, sync or async
            cancel_event: Optional event that aborts the wait between attempts

        Returns:
            The result of the first successful attempt

        Raises:
            RetryExhaustedError: If every attempt failed
            RetryCancelledError: If cancel_event was set while waiting
        """
        timeout = self.config.min_timeout_ms
        last_exception: Exception | None = None

        for attempt in range(self.config.max_attempts):
            try:
                result = operation()
                if inspect.isawaitable(result):
                    result = await result
                return result
            except Exception as e:
                last_exception = e

            if attempt + 1 >= self.config.max_attempts:
                break

            self._before_wait(operation, attempt, last_exception, timeout)
            if await _wait(timeout, cancel_event):
                logger.info(f"Retry of {_describe(operation)} cancelled after {attempt + 1} attempt(s)")
                raise RetryCancelledError(last_exception, attempt + 1) from last_exception

            timeout = calculate_backoff(attempt, self.config)

        raise self._exhausted(operation, last_exception) from last_exception

    def execute_sync(
        self,
        operation: Callable[[], T],
        *,
        cancel_event: threading.Event | None = None,
    ) -> T:
        """
        Invoke a synchronous ``operation`` with retries.

        The wait between attempts blocks only the calling thread.

        Raises:
            TypeError: If operation returns an awaitable (use execute instead)
            RetryExhaustedError: If every attempt failed
            RetryCancelledError: If cancel_event was set while waiting
        """
        timeout = self.config.min_timeout_ms
        last_exception: Exception | None = None

        for attempt in range(self.config.max_attempts):
            try:
                result = operation()
            except Exception as e:
                last_exception = e
            else:
                if inspect.isawaitable(result):
                    if inspect.iscoroutine(result):
                        result.close()
                    raise TypeError(
                        f"{_describe(operation)} returned an awaitable; use RetryExecutor.execute"
                    )
                return result

            if attempt + 1 >= self.config.max_attempts:
                break

            self._before_wait(operation, attempt, last_exception, timeout)
            if _wait_sync(timeout, cancel_event):
                logger.info(f"Retry of {_describe(operation)} cancelled after {attempt + 1} attempt(s)")
                raise RetryCancelledError(last_exception, attempt + 1) from last_exception

            timeout = calculate_backoff(attempt, self.config)

        raise self._exhausted(operation, last_exception) from last_exception


async def retry(
    operation: Callable[[], Awaitable[T] | T],
    config: ConfigLike = None,
    *,
    on_retry: OnRetry | None = None,
    cancel_event: asyncio.Event | None = None,
) -> T:
    """
    Retry ``operation`` with exponential backoff and full jitter.

    Example:
        result = await retry(fetch, {"max_attempts": 3, "min_timeout_ms": 100})
    """
    executor = RetryExecutor(config, on_retry)
    return await executor.execute(operation, cancel_event=cancel_event)


def retry_sync(
    operation: Callable[[], T],
    config: ConfigLike = None,
    *,
    on_retry: OnRetry | None = None,
    cancel_event: threading.Event | None = None,
) -> T:
    """Blocking counterpart of `retry` for synchronous operations."""
    executor = RetryExecutor(config, on_retry)
    return executor.execute_sync(operation, cancel_event=cancel_event)


def with_retry(
    config: ConfigLike = None,
    on_retry: OnRetry | None = None,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Decorator for synchronous functions with retry logic.

    Args:
        config: Retry configuration (default: RetryConfig())
        on_retry: Optional callback(attempt, exception, delay_ms) called before each retry

    Returns:
        Decorated function with retry behavior
    """
    executor = RetryExecutor(config, on_retry)

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return executor.execute_sync(functools.partial(func, *args, **kwargs))

        return wrapper

    return decorator


def async_with_retry(
    config: ConfigLike = None,
    on_retry: OnRetry | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Decorator for async functions with retry logic.

    Args:
        config: Retry configuration (default: RetryConfig())
        on_retry: Optional callback(attempt, exception, delay_ms) called before each retry

    Returns:
        Decorated async function with retry behavior
    """
    executor = RetryExecutor(config, on_retry)

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return await executor.execute(functools.partial(func, *args, **kwargs))

        return wrapper

    return decorator
