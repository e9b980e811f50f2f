"""Wire DTO for token usage totals."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CompletionUsage(BaseModel):
    """Token usage reported by the gateway (streaming and non-streaming)."""

    model_config = ConfigDict(extra="allow")

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


__all__ = ["CompletionUsage"]
