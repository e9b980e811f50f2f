"""inference_gateway package

Python client for an OpenAI-compatible inference gateway, centred on a
streaming chat-completion decoder.

Public API (re-exported):
    - Version: ``__version__``
    - Client: :class:`InferenceGatewayClient`
    - Streaming: :class:`StreamCallbacks`, :class:`StreamEvent`,
      :class:`StreamEventType`, :class:`StreamController`
    - Cancellation: :class:`CancellationToken`
    - Exceptions: :class:`GatewayError`, :class:`ErrorCode`
    - Wire types: :class:`CreateChatCompletionRequest`, :class:`Message`,
      :class:`ChatCompletionTool`, :class:`FunctionObject`
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.dto import (
    ChatCompletionResponse,
    ChatCompletionStreamResponse,
    ChatCompletionTool,
    CreateChatCompletionRequest,
    FunctionObject,
    ListModelsResponse,
    ListToolsResponse,
    Message,
)
from .base.errors import ErrorCode, GatewayError, StreamError
from .base.models import CompletedToolCall, FinishReason, MessageRole, Provider, UsageSummary
from .base.streaming import StreamCallbacks, StreamController, StreamEvent, StreamEventType
from .gateway import InferenceGatewayClient

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "InferenceGatewayClient",
    "CancellationToken",
    "CancelledError",
    "ChatCompletionResponse",
    "ChatCompletionStreamResponse",
    "ChatCompletionTool",
    "CreateChatCompletionRequest",
    "FunctionObject",
    "ListModelsResponse",
    "ListToolsResponse",
    "Message",
    "ErrorCode",
    "GatewayError",
    "StreamError",
    "CompletedToolCall",
    "FinishReason",
    "MessageRole",
    "Provider",
    "UsageSummary",
    "StreamCallbacks",
    "StreamController",
    "StreamEvent",
    "StreamEventType",
]
