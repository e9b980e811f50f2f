"""Per-stream metrics collected by the orchestrator and logged at finalize."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..models import UsageSummary


@dataclass
class StreamMetrics:
    """Collected metrics for a single streaming call.

    ``emitted`` counts content, reasoning and tool events delivered to the
    caller. ``time_to_first_token_ms`` is measured from request start to the
    first content or reasoning fragment.
    """

    emitted: int = 0
    chunks: int = 0
    decode_errors: int = 0
    tool_calls: int = 0
    mcp_tool_calls: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None

    @property
    def tokens(self) -> Dict[str, Optional[int]]:
        return build_token_usage(self.prompt_tokens, self.completion_tokens, self.total_tokens)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "emitted_count": self.emitted,
            "chunks": self.chunks,
            "decode_errors": self.decode_errors,
            "tool_calls": self.tool_calls,
            "mcp_tool_calls": self.mcp_tool_calls,
            "time_to_first_token_ms": self.time_to_first_token_ms,
            "total_duration_ms": self.total_duration_ms,
        }


def build_token_usage(
    prompt: Optional[int], completion: Optional[int], total: Optional[int] = None
) -> Dict[str, Optional[int]]:
    """Return a canonical token usage mapping."""
    derived_total = total
    if derived_total is None and (prompt is not None and completion is not None):
        derived_total = prompt + completion
    return {"prompt": prompt, "completion": completion, "total": derived_total}


def apply_token_usage(metrics: StreamMetrics, usage: UsageSummary) -> None:
    """Record the stream's reported usage on ``metrics``."""
    metrics.prompt_tokens = usage.prompt_tokens
    metrics.completion_tokens = usage.completion_tokens
    metrics.total_tokens = usage.total_tokens


__all__ = ["StreamMetrics", "apply_token_usage", "build_token_usage"]
