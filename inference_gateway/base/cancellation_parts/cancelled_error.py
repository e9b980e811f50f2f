"""Cancellation error type.

Defines the public ``CancelledError`` used to signal cooperative cancellation
of a streaming call.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    ``reason`` carries the string supplied to ``CancellationToken.cancel`` so
    the orchestrator can tell an elapsed deadline from a caller abort.
    """

    def __init__(self, reason: str = "operation cancelled") -> None:
        super().__init__(reason)
        self.reason = reason


__all__ = ["CancelledError"]
