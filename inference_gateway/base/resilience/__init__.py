"""Resilience helpers (retry policy)."""

from .retry import DEFAULT_RETRY_CONFIG, NO_RETRY, RetryConfig, retry

__all__ = ["RetryConfig", "DEFAULT_RETRY_CONFIG", "NO_RETRY", "retry"]
