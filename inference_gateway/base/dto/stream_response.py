"""
Pydantic DTOs for one streamed chat-completion frame.

Every field is optional and unknown fields are kept: the stream decoder must
accept whatever an upstream provider forwards through the gateway, so only
structurally impossible payloads (for example ``choices`` that is not a list)
fail validation.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .usage import CompletionUsage


class ToolCallChunkFunction(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    arguments: Optional[str] = None


class ToolCallChunk(BaseModel):
    """A fragment of one tool call, addressed by ``index`` (the slot)."""

    model_config = ConfigDict(extra="allow")

    index: int
    id: Optional[str] = None
    type: Optional[str] = None
    function: Optional[ToolCallChunkFunction] = None


class StreamDelta(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: Optional[str] = None
    content: Optional[str] = None
    reasoning_content: Optional[str] = None
    reasoning: Optional[str] = None
    refusal: Optional[str] = None
    tool_calls: Optional[List[ToolCallChunk]] = None


class StreamChoice(BaseModel):
    model_config = ConfigDict(extra="allow")

    index: int = 0
    delta: StreamDelta = Field(default_factory=StreamDelta)
    finish_reason: Optional[str] = None

    @field_validator("delta", mode="before")
    @classmethod
    def _null_delta(cls, value: Any) -> Any:
        return {} if value is None else value


class ChatCompletionStreamResponse(BaseModel):
    """One ``chat.completion.chunk`` frame.

    ``error`` carries a fault raised by an upstream provider mid-stream, either
    as a plain string or as an object with a ``message``.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    object: Optional[str] = None
    created: Optional[int] = None
    model: Optional[str] = None
    system_fingerprint: Optional[str] = None
    choices: List[StreamChoice] = Field(default_factory=list)
    usage: Optional[CompletionUsage] = None
    error: Optional[Union[str, Dict[str, Any]]] = None

    @field_validator("choices", mode="before")
    @classmethod
    def _null_choices(cls, value: Any) -> Any:
        return [] if value is None else value


__all__ = [
    "ToolCallChunkFunction",
    "ToolCallChunk",
    "StreamDelta",
    "StreamChoice",
    "ChatCompletionStreamResponse",
]
