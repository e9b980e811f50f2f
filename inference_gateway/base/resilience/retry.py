"""Retry policy for idempotent gateway requests.

Only ``GatewayError`` failures whose code is listed in
``RetryConfig.retryable_codes`` are retried; everything else propagates on the
first attempt. Streams and POST requests are never wrapped.
"""
from __future__ import annotations

import functools
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, TypeVar

from ..errors import ErrorCode, GatewayError, RETRYABLE_CODES

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: Optional[float],
        error: Optional[GatewayError],
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    """``max_attempts`` includes the first call; the n-th wait is ``delay_base ** n`` seconds."""

    max_attempts: int = 3
    delay_base: float = 2.0
    retryable_codes: tuple[ErrorCode, ...] = RETRYABLE_CODES
    attempt_logger: Optional[AttemptLogger] = None

    def backoff(self) -> List[float]:
        return [self.delay_base**n for n in range(max(self.max_attempts, 1) - 1)]


DEFAULT_RETRY_CONFIG = RetryConfig()
NO_RETRY = RetryConfig(max_attempts=1)


def retry(config: RetryConfig = DEFAULT_RETRY_CONFIG):
    """Decorate ``func`` so retryable ``GatewayError`` failures are re-attempted.

    The attempt logger, when set, is told about every attempt: failures carry
    the error and the upcoming delay (``None`` when no retry follows), and the
    successful attempt is reported with ``error=None``.
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            waits = config.backoff()
            attempt = 0
            while True:
                try:
                    result = func(*args, **kwargs)
                except GatewayError as exc:
                    wait = waits[attempt] if attempt < len(waits) else None
                    if exc.code not in config.retryable_codes:
                        wait = None
                    _report(config, attempt, wait, exc)
                    if wait is None:
                        raise
                    time.sleep(wait)
                    attempt += 1
                    continue
                _report(config, attempt, None, None)
                return result

        return wrapper

    return decorator


def _report(config: RetryConfig, attempt: int, delay: Optional[float], error: Optional[GatewayError]) -> None:
    if config.attempt_logger is not None:
        config.attempt_logger(
            attempt=attempt, max_attempts=config.max_attempts, delay=delay, error=error
        )


__all__ = [
    "AttemptLogger",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "NO_RETRY",
    "retry",
]
