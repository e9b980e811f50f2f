"""Pydantic wire DTOs for the gateway API."""

from .chat_request import (
    ChatCompletionTool,
    CreateChatCompletionRequest,
    FunctionObject,
    Message,
    MessageToolCall,
    MessageToolCallFunction,
    StreamOptions,
)
from .chat_response import ChatCompletionChoice, ChatCompletionResponse
from .listing import ListModelsResponse, ListToolsResponse, MCPTool, Model
from .stream_response import (
    ChatCompletionStreamResponse,
    StreamChoice,
    StreamDelta,
    ToolCallChunk,
    ToolCallChunkFunction,
)
from .usage import CompletionUsage

__all__ = [
    "ChatCompletionTool",
    "CreateChatCompletionRequest",
    "FunctionObject",
    "Message",
    "MessageToolCall",
    "MessageToolCallFunction",
    "StreamOptions",
    "ChatCompletionChoice",
    "ChatCompletionResponse",
    "ListModelsResponse",
    "ListToolsResponse",
    "MCPTool",
    "Model",
    "ChatCompletionStreamResponse",
    "StreamChoice",
    "StreamDelta",
    "ToolCallChunk",
    "ToolCallChunkFunction",
    "CompletionUsage",
]
