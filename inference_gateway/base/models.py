"""Domain models facade.

Re-exports the decoded-stream dataclasses and shared enums from
``models_parts`` under a single import path.
"""

from .models_parts.enums import FinishReason, MessageRole, Provider
from .models_parts.completed_tool_call import CompletedToolCall
from .models_parts.stream_chunk import StreamChunk
from .models_parts.tool_call_accumulator import ToolCallAccumulator
from .models_parts.tool_call_fragment import ToolCallFragment
from .models_parts.usage_summary import UsageSummary

__all__ = [
    "FinishReason",
    "MessageRole",
    "Provider",
    "CompletedToolCall",
    "StreamChunk",
    "ToolCallAccumulator",
    "ToolCallFragment",
    "UsageSummary",
]
