"""Streaming decode pipeline: framing, decoding, tool-call assembly, orchestration."""

from .event_decoder import (
    FrameDecodeError,
    decode_payload,
    embedded_error_message,
    extract_error_message,
    is_done_sentinel,
)
from .frame_buffer import FrameBuffer
from .stream_callbacks import StreamCallbacks
from .stream_controller import StreamController
from .stream_events import StreamEvent, StreamEventType
from .stream_orchestrator import StreamOpener, StreamOrchestrator, StreamState
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics, apply_token_usage, build_token_usage
from .tool_call_assembler import ToolCallAssembler
from .tool_classifier import ToolClassifier, ToolOrigin

__all__ = [
    "FrameBuffer",
    "FrameDecodeError",
    "decode_payload",
    "embedded_error_message",
    "extract_error_message",
    "is_done_sentinel",
    "StreamCallbacks",
    "StreamController",
    "StreamEvent",
    "StreamEventType",
    "StreamOpener",
    "StreamOrchestrator",
    "StreamState",
    "finalize_stream",
    "StreamMetrics",
    "apply_token_usage",
    "build_token_usage",
    "ToolCallAssembler",
    "ToolClassifier",
    "ToolOrigin",
]
