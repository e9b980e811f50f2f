"""Per-slot accumulator that folds fragments into one tool call."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..constants import DEFAULT_TOOL_TYPE
from .completed_tool_call import CompletedToolCall
from .tool_call_fragment import ToolCallFragment


@dataclass
class ToolCallAccumulator:
    """Mutable state of one in-flight tool call.

    Identity fields (``id``, ``type``, ``name``) are overwritten only by
    non-empty values; ``arguments`` is strictly appended in arrival order.
    """

    index: int
    id: str = ""
    type: str = DEFAULT_TOOL_TYPE
    name: str = ""
    arguments: str = ""

    @classmethod
    def from_fragment(cls, fragment: ToolCallFragment) -> "ToolCallAccumulator":
        return cls(index=fragment.index).merge(fragment)

    def merge(self, fragment: ToolCallFragment) -> "ToolCallAccumulator":
        """Fold ``fragment`` into this accumulator and return it."""
        if fragment.id:
            self.id = fragment.id
        if fragment.type:
            self.type = fragment.type
        if fragment.name:
            self.name = fragment.name
        if fragment.arguments:
            self.arguments += fragment.arguments
        return self

    @property
    def is_complete(self) -> bool:
        return bool(self.id) and bool(self.name)

    def finalize(self) -> Optional[CompletedToolCall]:
        """Return the completed call, or ``None`` while id or name is missing."""
        if not self.is_complete:
            return None
        return CompletedToolCall(id=self.id, name=self.name, arguments=self.arguments, type=self.type)


__all__ = ["ToolCallAccumulator"]
