"""Unified gateway error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``inference_gateway.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode, RETRYABLE_CODES
from .errors_parts.gateway_error import GatewayError
from .errors_parts.stream_error import StreamError
from .errors_parts.classification import classify_exception, code_for_status

__all__ = [
    "ErrorCode",
    "RETRYABLE_CODES",
    "GatewayError",
    "StreamError",
    "classify_exception",
    "code_for_status",
]
