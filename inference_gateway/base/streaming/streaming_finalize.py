"""Terminal event creation plus the consolidated end-of-stream log line."""
from __future__ import annotations

import logging
from typing import Optional

from ..errors import StreamError
from ..log_support.logging_context import LogContext
from ..logging import normalized_log_event
from ..models import FinishReason
from .stream_events import StreamEvent, StreamEventType
from .streaming_metrics import StreamMetrics


def finalize_stream(
    *,
    logger: logging.Logger,
    ctx: LogContext,
    metrics: StreamMetrics,
    finish_reason: Optional[FinishReason] = None,
    error: Optional[StreamError] = None,
) -> StreamEvent:
    """Log ``stream.end`` or ``stream.error`` and return the terminal event."""
    normalized_log_event(
        logger,
        "stream.end" if error is None else "stream.error",
        ctx,
        phase="finalize",
        level=logging.INFO if error is None else logging.WARNING,
        error_code=error.code.value if error is not None else None,
        emitted=metrics.emitted > 0,
        tokens=metrics.tokens,
        finish_reason=finish_reason.value if finish_reason is not None else None,
        error=error.message if error is not None else None,
        **metrics.to_dict(),
    )
    if error is not None:
        return StreamEvent(StreamEventType.ERROR, error=error)
    return StreamEvent(StreamEventType.FINISH, finish_reason=finish_reason)


__all__ = ["finalize_stream"]
