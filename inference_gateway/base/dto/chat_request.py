"""
Pydantic DTOs for outbound chat-completion requests.

Purpose
-------
Validate request payloads before they reach the wire and expose the set of
tool names the caller declared up front (the seed of the stream's tool
classifier).

Unknown top-level fields (``temperature``, ``top_p``, provider-specific knobs)
are preserved so the gateway receives them unchanged.
"""

from __future__ import annotations

from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..constants import DEFAULT_TOOL_TYPE


class MessageToolCallFunction(BaseModel):
    """Function name and JSON-encoded argument text of an assistant tool call."""

    name: str
    arguments: str = ""


class MessageToolCall(BaseModel):
    """A tool call attached to an assistant message in the history."""

    id: str
    type: str = DEFAULT_TOOL_TYPE
    function: MessageToolCallFunction


class Message(BaseModel):
    """One conversation message.

    ``tool_call_id`` is set on ``tool`` role messages that answer a call;
    ``tool_calls`` on assistant messages that requested them.
    """

    model_config = ConfigDict(extra="allow")

    role: str
    content: Optional[str] = ""
    tool_calls: Optional[List[MessageToolCall]] = None
    tool_call_id: Optional[str] = None
    reasoning: Optional[str] = None
    reasoning_content: Optional[str] = None


class FunctionObject(BaseModel):
    """Declared function: name, description and JSON-schema parameters."""

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None
    strict: Optional[bool] = None


class ChatCompletionTool(BaseModel):
    """A tool the caller declares (and will execute) for this request."""

    type: str = DEFAULT_TOOL_TYPE
    function: FunctionObject


class StreamOptions(BaseModel):
    include_usage: bool = True


class CreateChatCompletionRequest(BaseModel):
    """Chat-completion request body.

    Parameters:
        model: Target model identifier, usually ``provider/model``.
        messages: Ordered conversation history (non-empty).
        max_tokens: Optional generation cap.
        stream: Overwritten by the client depending on the call used.
        stream_options: Overwritten by the streaming call.
        tools: Locally declared tools.
    """

    model_config = ConfigDict(extra="allow")

    model: str = Field(..., min_length=1)
    messages: List[Message] = Field(..., min_length=1)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    stream: bool = False
    stream_options: Optional[StreamOptions] = None
    tools: Optional[List[ChatCompletionTool]] = None

    def declared_tool_names(self) -> FrozenSet[str]:
        """Return the names of all tools declared in this request."""
        return frozenset(tool.function.name for tool in self.tools or ())

    def to_payload(self, *, stream: bool) -> Dict[str, Any]:
        """Serialize for the wire with the streaming flags forced."""
        payload = self.model_dump(exclude_none=True)
        payload["stream"] = stream
        if stream:
            payload["stream_options"] = StreamOptions(include_usage=True).model_dump()
        else:
            payload.pop("stream_options", None)
        return payload


__all__ = [
    "MessageToolCallFunction",
    "MessageToolCall",
    "Message",
    "FunctionObject",
    "ChatCompletionTool",
    "StreamOptions",
    "CreateChatCompletionRequest",
]
