"""Pydantic DTOs for non-streaming chat-completion responses."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .chat_request import Message
from .usage import CompletionUsage


class ChatCompletionChoice(BaseModel):
    model_config = ConfigDict(extra="allow")

    index: int = 0
    message: Message
    finish_reason: Optional[str] = None


class ChatCompletionResponse(BaseModel):
    """A complete (non-chunked) chat completion."""

    model_config = ConfigDict(extra="allow")

    id: str = ""
    object: str = "chat.completion"
    created: int = 0
    model: str = ""
    choices: List[ChatCompletionChoice] = Field(default_factory=list)
    usage: Optional[CompletionUsage] = None

    @property
    def content(self) -> Optional[str]:
        """Text of the first choice, when present."""
        return self.choices[0].message.content if self.choices else None


__all__ = ["ChatCompletionChoice", "ChatCompletionResponse"]
