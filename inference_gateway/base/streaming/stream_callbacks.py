"""Callback sink for stream events.

Every hook is optional; an event whose hook is unset is simply not delivered.
Hooks run synchronously on the consuming thread, in emission order.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ..dto.stream_response import ChatCompletionStreamResponse
from ..errors import StreamError
from ..models import CompletedToolCall, FinishReason, UsageSummary
from .stream_events import StreamEvent, StreamEventType


@dataclass
class StreamCallbacks:
    on_open: Optional[Callable[[], None]] = None
    on_chunk: Optional[Callable[[ChatCompletionStreamResponse], None]] = None
    on_content: Optional[Callable[[str], None]] = None
    on_reasoning: Optional[Callable[[str], None]] = None
    on_tool: Optional[Callable[[CompletedToolCall], None]] = None
    on_mcp_tool: Optional[Callable[[CompletedToolCall], None]] = None
    on_usage: Optional[Callable[[UsageSummary], None]] = None
    on_finish: Optional[Callable[[Optional[FinishReason]], None]] = None
    on_error: Optional[Callable[[StreamError], None]] = None

    def dispatch(self, event: StreamEvent) -> None:
        """Deliver ``event`` to the hook registered for its type."""
        t = event.type
        if t is StreamEventType.OPEN:
            if self.on_open:
                self.on_open()
        elif t is StreamEventType.CHUNK:
            if self.on_chunk:
                self.on_chunk(event.raw)
        elif t is StreamEventType.CONTENT:
            if self.on_content:
                self.on_content(event.text)
        elif t is StreamEventType.REASONING:
            if self.on_reasoning:
                self.on_reasoning(event.text)
        elif t is StreamEventType.TOOL_CALL:
            if self.on_tool:
                self.on_tool(event.tool_call)
        elif t is StreamEventType.MCP_TOOL_CALL:
            if self.on_mcp_tool:
                self.on_mcp_tool(event.tool_call)
        elif t is StreamEventType.USAGE:
            if self.on_usage:
                self.on_usage(event.usage)
        elif t is StreamEventType.FINISH:
            if self.on_finish:
                self.on_finish(event.finish_reason)
        elif t is StreamEventType.ERROR:
            if self.on_error:
                self.on_error(event.error)


__all__ = ["StreamCallbacks"]
