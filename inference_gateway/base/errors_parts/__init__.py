"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `inference_gateway.base.errors` for the stable surface.
"""

from .error_code import ErrorCode, RETRYABLE_CODES
from .gateway_error import GatewayError
from .stream_error import StreamError
from .classification import classify_exception, code_for_status

__all__ = [
    "ErrorCode",
    "RETRYABLE_CODES",
    "GatewayError",
    "StreamError",
    "classify_exception",
    "code_for_status",
]
