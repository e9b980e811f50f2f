"""
Gateway Base Package

Transport-agnostic building blocks used by the client layer:
- DTOs: pydantic models for the gateway's wire format
- Models: decoded-stream dataclasses and shared enums
- Errors, cancellation, timeouts, logging and retry policy
- Streaming: frame buffer, event decoder, tool-call assembly, orchestration
"""

from .cancellation import CancellationBridge, CancellationToken, CancelledError
from .errors import ErrorCode, GatewayError, StreamError, classify_exception
from .models import (
    CompletedToolCall,
    FinishReason,
    MessageRole,
    Provider,
    StreamChunk,
    ToolCallAccumulator,
    ToolCallFragment,
    UsageSummary,
)
from .timeouts import TimeoutConfig, get_timeout_config
from .streaming import (
    StreamCallbacks,
    StreamController,
    StreamEvent,
    StreamEventType,
    StreamMetrics,
    StreamOrchestrator,
)

__all__ = [
    "CancellationBridge",
    "CancellationToken",
    "CancelledError",
    "ErrorCode",
    "GatewayError",
    "StreamError",
    "classify_exception",
    "CompletedToolCall",
    "FinishReason",
    "MessageRole",
    "Provider",
    "StreamChunk",
    "ToolCallAccumulator",
    "ToolCallFragment",
    "UsageSummary",
    "TimeoutConfig",
    "get_timeout_config",
    "StreamCallbacks",
    "StreamController",
    "StreamEvent",
    "StreamEventType",
    "StreamMetrics",
    "StreamOrchestrator",
]
