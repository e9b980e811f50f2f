"""Drive one streaming chat-completion call from request to terminal event.

``StreamOrchestrator.run`` is a generator of :class:`StreamEvent` objects and
walks the states ``idle -> opened -> reading -> finalizing -> done|failed``:

* ``open`` is emitted once, after a success status and before any chunk.
* Frames are decoded in order; a malformed frame or an embedded upstream
  fault yields a non-fatal ``error`` event and reading continues.
* Tool calls are finalized on the ``tool_calls`` finish marker, on the
  terminator sentinel, and at end of body, then routed by name.
* Exactly one terminal event is produced: ``finish`` on success, or a fatal
  ``error`` for an HTTP status failure, a transport failure, an elapsed
  deadline, or a caller cancellation. Nothing follows it.

Failures never escape ``run``; the reported :class:`GatewayError` is kept on
``failure`` so callers can re-raise it after delivering the terminal event.
"""
from __future__ import annotations

import functools
import logging
import time
from contextlib import ExitStack
from enum import Enum
from typing import Callable, ContextManager, Iterable, Iterator, Optional

import httpx

from ..cancellation import CancellationBridge, CancellationToken, CancelledError
from ..errors import ErrorCode, GatewayError, RETRYABLE_CODES, StreamError, classify_exception
from ..http.responses import interrupt_response, raise_for_gateway_status
from ..log_support.logging_context import LogContext
from ..logging import get_logger, log_event
from ..models import FinishReason
from .event_decoder import FrameDecodeError, decode_payload, is_done_sentinel
from .frame_buffer import FrameBuffer
from .stream_events import StreamEvent, StreamEventType
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics, apply_token_usage
from .tool_call_assembler import ToolCallAssembler
from .tool_classifier import ToolClassifier, ToolOrigin

StreamOpener = Callable[[], ContextManager[httpx.Response]]


class StreamState(str, Enum):
    IDLE = "idle"
    OPENED = "opened"
    READING = "reading"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"


class StreamOrchestrator:
    """Single-use state machine over one streamed response.

    Parameters:
        open_stream: Zero-argument callable returning the response context
            manager (typically ``functools.partial(client.stream, ...)``).
        declared_tool_names: Names of the tools declared on the request.
        cancellation_token: Optional caller token; cancelling it aborts the
            stream with ``cancelled``.
        timeout_seconds: Optional deadline for the whole call; expiry aborts
            the stream with ``timeout``.
        logger: Logger for structured stream events.
        ctx: Logging context (base URL, provider, model); the response id is
            filled in from the first chunk.
    """

    def __init__(
        self,
        open_stream: StreamOpener,
        *,
        declared_tool_names: Iterable[str] = (),
        cancellation_token: Optional[CancellationToken] = None,
        timeout_seconds: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._open_stream = open_stream
        self._classifier = ToolClassifier(declared_tool_names)
        self._token = cancellation_token
        self._timeout_seconds = timeout_seconds
        self._logger = logger or get_logger("inference_gateway.stream")
        self._ctx = ctx or LogContext()
        self._buffer = FrameBuffer()
        self._assembler = ToolCallAssembler()
        self._finish_reason: Optional[FinishReason] = None
        self._t0 = 0.0
        self.state = StreamState.IDLE
        self.metrics = StreamMetrics()
        self.failure: Optional[GatewayError] = None

    @property
    def finished(self) -> bool:
        return self.state in (StreamState.DONE, StreamState.FAILED)

    def run(self) -> Iterator[StreamEvent]:
        if self.state is not StreamState.IDLE:
            raise RuntimeError("stream orchestrator is single-use")
        self._t0 = time.perf_counter()
        bridge = CancellationBridge(self._token, self._timeout_seconds)
        log_event(
            self._logger,
            "stream.start",
            self._ctx,
            timeout_seconds=self._timeout_seconds,
            declared_tools=len(self._classifier.declared_names),
        )
        with ExitStack() as stack:
            stack.callback(bridge.close)
            bridge.start()
            try:
                bridge.raise_if_cancelled()
                response = stack.enter_context(self._open_stream())
                bridge.on_cancel(functools.partial(interrupt_response, response))
                bridge.raise_if_cancelled()
                raise_for_gateway_status(response)
                self.state = StreamState.OPENED
                log_event(self._logger, "stream.open", self._ctx, status=response.status_code)
                yield StreamEvent(StreamEventType.OPEN)

                self.state = StreamState.READING
                yield from self._read(response, bridge)
                if self.state is StreamState.READING:
                    bridge.raise_if_cancelled()
                    for payload in self._buffer.flush():
                        yield from self._handle_payload(payload)
                        if self.state is not StreamState.READING:
                            break
                if self.state is StreamState.READING:
                    yield from self._complete()
            except GatewayError as exc:
                yield from self._fail(exc)
            except Exception as exc:  # noqa: BLE001 - any read failure ends the stream
                yield from self._fail(self._failure_for(exc, bridge))

    # Reading ---------------------------------------------------------------
    def _read(self, response: httpx.Response, bridge: CancellationBridge) -> Iterator[StreamEvent]:
        for data in response.iter_bytes():
            bridge.raise_if_cancelled()
            for payload in self._buffer.feed(data):
                bridge.raise_if_cancelled()
                yield from self._handle_payload(payload)
                if self.state is not StreamState.READING:
                    return
        bridge.raise_if_cancelled()

    def _handle_payload(self, payload: str) -> Iterator[StreamEvent]:
        if is_done_sentinel(payload):
            yield from self._complete()
            return
        try:
            chunk = decode_payload(payload)
        except FrameDecodeError as exc:
            self.metrics.decode_errors += 1
            log_event(
                self._logger,
                "stream.decode_error",
                self._ctx,
                level=logging.WARNING,
                error=exc.message,
                raw=exc.raw,
            )
            yield StreamEvent(
                StreamEventType.ERROR,
                error=StreamError(exc.message, code=ErrorCode.DECODE, raw=exc.raw),
            )
            return

        self.metrics.chunks += 1
        if self._ctx.response_id is None and chunk.raw.id:
            self._ctx.response_id = chunk.raw.id
        yield StreamEvent(StreamEventType.CHUNK, raw=chunk.raw)

        if chunk.error:
            log_event(
                self._logger, "stream.upstream_error", self._ctx, level=logging.WARNING, error=chunk.error
            )
            yield StreamEvent(
                StreamEventType.ERROR, error=StreamError(chunk.error, code=ErrorCode.UPSTREAM)
            )
        if chunk.reasoning:
            self._mark_emitted()
            yield StreamEvent(StreamEventType.REASONING, text=chunk.reasoning)
        if chunk.content:
            self._mark_emitted()
            yield StreamEvent(StreamEventType.CONTENT, text=chunk.content)
        self._assembler.merge_all(chunk.tool_call_fragments)
        if chunk.usage is not None:
            apply_token_usage(self.metrics, chunk.usage)
            yield StreamEvent(StreamEventType.USAGE, usage=chunk.usage)
        if chunk.finish_reason is not None:
            self._finish_reason = chunk.finish_reason
            if chunk.finish_reason is FinishReason.TOOL_CALLS:
                yield from self._emit_tool_calls()

    def _mark_emitted(self) -> None:
        if self.metrics.time_to_first_token_ms is None:
            self.metrics.time_to_first_token_ms = (time.perf_counter() - self._t0) * 1000.0
        self.metrics.emitted += 1

    def _emit_tool_calls(self) -> Iterator[StreamEvent]:
        for call in self._assembler.finalize_all():
            self.metrics.emitted += 1
            if self._classifier.classify(call) is ToolOrigin.LOCAL:
                self.metrics.tool_calls += 1
                yield StreamEvent(StreamEventType.TOOL_CALL, tool_call=call)
            else:
                self.metrics.mcp_tool_calls += 1
                yield StreamEvent(StreamEventType.MCP_TOOL_CALL, tool_call=call)

    # Terminal paths ----------------------------------------------------------
    def _complete(self) -> Iterator[StreamEvent]:
        self.state = StreamState.FINALIZING
        yield from self._emit_tool_calls()
        self.metrics.total_duration_ms = (time.perf_counter() - self._t0) * 1000.0
        event = finalize_stream(
            logger=self._logger, ctx=self._ctx, metrics=self.metrics, finish_reason=self._finish_reason
        )
        self.state = StreamState.DONE
        yield event

    def _fail(self, err: GatewayError) -> Iterator[StreamEvent]:
        self.state = StreamState.FINALIZING
        yield from self._emit_tool_calls()
        self.failure = err
        self.metrics.total_duration_ms = (time.perf_counter() - self._t0) * 1000.0
        event = finalize_stream(
            logger=self._logger,
            ctx=self._ctx,
            metrics=self.metrics,
            error=StreamError(err.message, code=err.code, fatal=True),
        )
        self.state = StreamState.FAILED
        yield event

    def _failure_for(self, exc: Exception, bridge: CancellationBridge) -> GatewayError:
        if bridge.cancelled or isinstance(exc, CancelledError):
            if bridge.timed_out:
                return GatewayError(
                    code=ErrorCode.TIMEOUT,
                    message=f"stream timed out after {self._timeout_seconds}s",
                    retryable=True,
                    raw=exc,
                )
            return GatewayError(
                code=ErrorCode.CANCELLED,
                message=bridge.reason or "operation cancelled",
                raw=exc,
            )
        code = classify_exception(exc)
        return GatewayError(
            code=code,
            message=str(exc) or exc.__class__.__name__,
            retryable=code in RETRYABLE_CODES,
            raw=exc,
        )


__all__ = ["StreamOrchestrator", "StreamState", "StreamOpener"]
