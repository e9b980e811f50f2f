"""One decoded transport event of a chat-completion stream."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..dto.stream_response import ChatCompletionStreamResponse
from .enums import FinishReason
from .tool_call_fragment import ToolCallFragment
from .usage_summary import UsageSummary


@dataclass(frozen=True)
class StreamChunk:
    """Normalized view of one ``chat.completion.chunk`` frame.

    Attributes:
        content: Text increment of the first choice.
        reasoning: Reasoning increment (``reasoning_content`` or ``reasoning``).
        tool_call_fragments: Fragments to fold into the tool-call assembler.
        finish_reason: Parsed finish marker of the first choice.
        usage: Usage totals (often on a trailing chunk with no choices).
        error: Message of an embedded upstream fault.
        raw: The validated wire DTO, forwarded on the ``chunk`` channel.
    """

    raw: ChatCompletionStreamResponse
    content: Optional[str] = None
    reasoning: Optional[str] = None
    tool_call_fragments: Tuple[ToolCallFragment, ...] = ()
    finish_reason: Optional[FinishReason] = None
    usage: Optional[UsageSummary] = None
    error: Optional[str] = None


__all__ = ["StreamChunk"]
