"""Thread-safe cancellation token shared between a caller and a running stream."""

from __future__ import annotations

import threading
from typing import Callable, List, Optional

from .cancelled_error import CancelledError


class CancellationToken:
    """Cancellation flag with a reason, cancel callbacks and child tokens.

    ``cancel`` may be called from any thread. It is idempotent: the first
    reason wins, callbacks run exactly once on the cancelling thread, and the
    cancellation then cascades to every linked child. A child cancelled on its
    own never affects its parent.
    """

    def __init__(self, *, parent: Optional["CancellationToken"] = None) -> None:
        self._lock = threading.Lock()
        self._cancelled = False
        self._reason: Optional[str] = None
        self._children: List["CancellationToken"] = []
        self._callbacks: List[Callable[[], None]] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            self._reason = reason
            callbacks, self._callbacks = self._callbacks, []
            children = list(self._children)
        for callback in callbacks:
            try:
                callback()
            except Exception:  # noqa: BLE001 - one broken callback must not block the rest
                continue
        for child in children:
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Cascade future cancellation to ``token``; cancels it now if already cancelled."""
        with self._lock:
            self._children.append(token)
            cancelled, reason = self._cancelled, self._reason
        if cancelled:
            token.cancel(reason)
        return token

    def unlink_child(self, token: "CancellationToken") -> None:
        with self._lock:
            if token in self._children:
                self._children.remove(token)

    def child(self) -> "CancellationToken":
        return CancellationToken(parent=self)

    def add_callback(self, callback: Callable[[], None]) -> None:
        """Register ``callback`` for cancellation; runs immediately if already cancelled."""
        with self._lock:
            if not self._cancelled:
                self._callbacks.append(callback)
                return
        callback()

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise CancelledError(self._reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover
        return f"CancellationToken(cancelled={self._cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken"]
