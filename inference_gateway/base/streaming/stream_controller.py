"""Cancellable iterator facade over :class:`StreamOrchestrator`.

The controller owns a token of its own (a child of the caller's token when one
is supplied), so ``cancel`` aborts this stream without touching a token the
caller may share with other work.
"""
from __future__ import annotations

from typing import Iterator, Optional

from ..cancellation import CancellationToken, EXTERNAL_REASON
from ..errors import GatewayError
from .stream_events import StreamEvent
from .stream_orchestrator import StreamOrchestrator
from .streaming_metrics import StreamMetrics


class StreamController:
    """Iterate stream events; cancel cooperatively; inspect the outcome.

    Iteration is single-pass. After the terminal event, ``terminal_event``,
    ``failure`` and ``metrics`` describe how the stream ended.
    """

    def __init__(
        self,
        orchestrator: StreamOrchestrator,
        token: CancellationToken,
        *,
        parent: Optional[CancellationToken] = None,
    ) -> None:
        self._orchestrator = orchestrator
        self._token = token
        self._parent = parent
        self._events: Optional[Iterator[StreamEvent]] = None
        self._terminal_event: Optional[StreamEvent] = None

    def __iter__(self) -> Iterator[StreamEvent]:
        if self._events is None:
            self._events = self._orchestrator.run()
        try:
            for evt in self._events:
                if evt.is_terminal:
                    self._terminal_event = evt
                yield evt
        finally:
            if self._parent is not None:
                self._parent.unlink_child(self._token)

    def __enter__(self) -> "StreamController":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # API -----------------------------------------------------------------
    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation; safe to call repeatedly or after completion."""
        self._token.cancel(reason or EXTERNAL_REASON)

    def close(self) -> None:
        """Release the underlying response if iteration stopped early."""
        if self._events is not None:
            self._events.close()

    def raise_for_failure(self) -> None:
        if self.failure is not None:
            raise self.failure

    @property
    def finished(self) -> bool:
        return self._terminal_event is not None

    @property
    def terminal_event(self) -> Optional[StreamEvent]:
        return self._terminal_event

    @property
    def failure(self) -> Optional[GatewayError]:
        return self._orchestrator.failure

    @property
    def metrics(self) -> StreamMetrics:
        return self._orchestrator.metrics


__all__ = ["StreamController"]
