"""Enumerations shared by requests and stream decoding."""
from __future__ import annotations

from enum import Enum
from typing import Optional


class Provider(str, Enum):
    """Upstream providers the gateway can route to."""

    OLLAMA = "ollama"
    GROQ = "groq"
    OPENAI = "openai"
    CLOUDFLARE = "cloudflare"
    COHERE = "cohere"
    ANTHROPIC = "anthropic"
    DEEPSEEK = "deepseek"


class MessageRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class FinishReason(str, Enum):
    """Why the model stopped generating for a choice."""

    STOP = "stop"
    LENGTH = "length"
    TOOL_CALLS = "tool_calls"
    CONTENT_FILTER = "content_filter"
    FUNCTION_CALL = "function_call"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["FinishReason"]:
        """Return the member for ``value``; ``None`` for missing or unknown markers."""
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


__all__ = ["Provider", "MessageRole", "FinishReason"]
