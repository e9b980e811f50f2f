"""
Structured gateway error exception type.

Wraps transport, HTTP-status and stream failures with a normalized
`ErrorCode` so callers can branch on the category instead of parsing text.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class GatewayError(Exception):
    """Represents a structured gateway error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message (the gateway's ``error`` field
            when it supplied one).
        status_code: HTTP status when the failure came from a response.
        retryable: Hint for upstream retry logic (not authoritative).
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    status_code: Optional[int] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


__all__ = ["GatewayError"]
