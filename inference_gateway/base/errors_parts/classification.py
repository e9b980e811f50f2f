"""Map exceptions and HTTP statuses onto :class:`ErrorCode`.

Order of precedence in :func:`classify_exception`:

1. ``GatewayError`` keeps its own code.
2. Timeouts (``TimeoutError`` and ``httpx.TimeoutException``).
3. An HTTP status found on the exception or its ``response``.
4. ``httpx`` transport failures (connect refused vs. other transport faults).
5. Keywords in the message.
6. ``unknown``.
"""
from __future__ import annotations

from typing import Dict, Optional, Tuple

import httpx

from .error_code import ErrorCode
from .gateway_error import GatewayError

_STATUS_CODES: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

# (code, every keyword must appear)
_MESSAGE_KEYWORDS: Tuple[Tuple[ErrorCode, Tuple[str, ...]], ...] = (
    (ErrorCode.RATE_LIMIT, ("rate", "limit")),
    (ErrorCode.TIMEOUT, ("timeout",)),
    (ErrorCode.TIMEOUT, ("timed out",)),
    (ErrorCode.AUTH, ("unauthorized",)),
    (ErrorCode.AUTH, ("api key",)),
    (ErrorCode.NOT_FOUND, ("not found",)),
    (ErrorCode.UNAVAILABLE, ("connection refused",)),
    (ErrorCode.UNAVAILABLE, ("unavailable",)),
    (ErrorCode.SERVER_ERROR, ("server error",)),
)


def code_for_status(status: int) -> ErrorCode:
    """Return the code for an HTTP status; unmapped 5xx are ``server_error``."""
    code = _STATUS_CODES.get(status)
    if code is not None:
        return code
    return ErrorCode.SERVER_ERROR if status >= 500 else ErrorCode.UNKNOWN


def status_of(exc: object) -> Optional[int]:
    """Find an HTTP status on ``exc`` (``status_code``, ``status`` or ``response.status_code``)."""
    candidates = (
        getattr(exc, "status_code", None),
        getattr(exc, "status", None),
        getattr(getattr(exc, "response", None), "status_code", None),
    )
    for value in candidates:
        if isinstance(value, int) and 100 <= value < 600:
            return value
    return None


def _code_from_message(message: str) -> Optional[ErrorCode]:
    text = message.lower()
    for code, keywords in _MESSAGE_KEYWORDS:
        if all(k in text for k in keywords):
            return code
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    if isinstance(exc, GatewayError):
        return exc.code
    if isinstance(exc, (TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    status = status_of(exc)
    if status is not None:
        return code_for_status(status)
    if isinstance(exc, httpx.ConnectError):
        return ErrorCode.UNAVAILABLE
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.TRANSIENT
    return _code_from_message(str(exc)) or ErrorCode.UNKNOWN


__all__ = ["classify_exception", "code_for_status", "status_of"]
