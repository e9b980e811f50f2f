"""Error codes shared by HTTP failures, transport failures and stream error events."""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    # HTTP status derived
    AUTH = "auth"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    RATE_LIMIT = "rate_limit"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    # transport and lifecycle
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    CANCELLED = "cancelled"
    # stream content
    DECODE = "decode"
    UPSTREAM = "upstream"
    INTERNAL = "internal"
    UNKNOWN = "unknown"


#: Codes a caller may reasonably retry; also the default retry policy filter.
RETRYABLE_CODES = (ErrorCode.TRANSIENT, ErrorCode.RATE_LIMIT, ErrorCode.TIMEOUT)


__all__ = ["ErrorCode", "RETRYABLE_CODES"]
