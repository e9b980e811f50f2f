"""Token usage totals as delivered on the stream's usage channel."""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Dict

from ..dto.usage import CompletionUsage


@dataclass(frozen=True)
class UsageSummary:
    """Prompt, completion and total token counts, passed through unchanged."""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int

    @classmethod
    def from_dto(cls, usage: CompletionUsage) -> "UsageSummary":
        return cls(
            prompt_tokens=usage.prompt_tokens,
            completion_tokens=usage.completion_tokens,
            total_tokens=usage.total_tokens,
        )

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


__all__ = ["UsageSummary"]
