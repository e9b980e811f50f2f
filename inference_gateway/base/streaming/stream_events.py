"""Typed events emitted by the stream orchestrator."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..dto.stream_response import ChatCompletionStreamResponse
from ..errors import StreamError
from ..models import CompletedToolCall, FinishReason, UsageSummary


class StreamEventType(str, Enum):
    OPEN = "open"
    CHUNK = "chunk"
    CONTENT = "content"
    REASONING = "reasoning"
    TOOL_CALL = "tool_call"
    MCP_TOOL_CALL = "mcp_tool_call"
    USAGE = "usage"
    FINISH = "finish"
    ERROR = "error"


@dataclass(frozen=True)
class StreamEvent:
    """One event on a chat-completion stream.

    Only the attribute matching ``type`` is populated: ``text`` for content and
    reasoning, ``raw`` for chunk, ``tool_call`` for both tool channels,
    ``usage``, ``error``, and ``finish_reason`` on finish (the last marker seen,
    if any).
    """

    type: StreamEventType
    text: Optional[str] = None
    raw: Optional[ChatCompletionStreamResponse] = None
    tool_call: Optional[CompletedToolCall] = None
    usage: Optional[UsageSummary] = None
    error: Optional[StreamError] = None
    finish_reason: Optional[FinishReason] = None

    @property
    def is_terminal(self) -> bool:
        if self.type is StreamEventType.FINISH:
            return True
        return self.type is StreamEventType.ERROR and self.error is not None and self.error.fatal


__all__ = ["StreamEventType", "StreamEvent"]
