"""Merge a caller's cancellation token with a per-call deadline.

The bridge owns a child token linked to the (optional) external token and a
``threading.Timer`` that cancels the child when the deadline elapses. The
effective token therefore fires when either source fires. One bridge is
created per streaming call and never shared.
"""

from __future__ import annotations

import threading
from typing import Callable, Optional

from .cancellation_token import CancellationToken

TIMEOUT_REASON = "timeout"
EXTERNAL_REASON = "cancelled by caller"


class CancellationBridge:
    """Effective cancellation token for exactly one streaming call.

    Parameters:
        external: Caller-supplied token; cancelling it cancels the bridge.
        timeout_seconds: Deadline measured from :meth:`start`. ``None`` or a
            non-positive value disables the internal timer.
    """

    def __init__(
        self,
        external: Optional[CancellationToken] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self._external = external
        self._timeout_seconds = timeout_seconds
        self._timer: Optional[threading.Timer] = None
        self.token = CancellationToken()
        if external is not None:
            external.link_child(self.token)
        self._timed_out = False

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    @property
    def timed_out(self) -> bool:
        """True when the internal deadline (not the caller) fired the token."""
        return self._timed_out

    @property
    def reason(self) -> str | None:
        return self.token.reason

    def start(self) -> "CancellationBridge":
        """Start the deadline timer; call when the request is issued."""
        if self._timeout_seconds is not None and self._timeout_seconds > 0 and self._timer is None:
            self._timer = threading.Timer(self._timeout_seconds, self._expire)
            self._timer.daemon = True
            self._timer.start()
        return self

    def on_cancel(self, callback: Callable[[], None]) -> None:
        """Register a callback used to unblock an in-flight read."""
        self.token.add_callback(callback)

    def raise_if_cancelled(self) -> None:
        self.token.raise_if_cancelled()

    def close(self) -> None:
        """Stop the timer and detach from the external token."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._external is not None:
            self._external.unlink_child(self.token)

    def _expire(self) -> None:  # pragma: no cover - timing sensitive
        if self.token.cancelled:
            return
        self._timed_out = True
        self.token.cancel(TIMEOUT_REASON)

    def __enter__(self) -> "CancellationBridge":
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = ["CancellationBridge", "TIMEOUT_REASON", "EXTERNAL_REASON"]
