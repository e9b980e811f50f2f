"""Cancellation surface used by streaming calls.

``CancellationToken`` is what callers hold and cancel. ``CancellationBridge``
is created per stream and folds the caller's token together with the call's
deadline; the orchestrator reads ``timed_out`` to tell the two apart.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken
from .cancellation_parts.cancellation_bridge import (
    CancellationBridge,
    EXTERNAL_REASON,
    TIMEOUT_REASON,
)

__all__ = [
    "CancellationToken",
    "CancelledError",
    "CancellationBridge",
    "EXTERNAL_REASON",
    "TIMEOUT_REASON",
]
