"""A partial update to one in-flight tool call."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..dto.stream_response import ToolCallChunk


@dataclass(frozen=True)
class ToolCallFragment:
    """Fragment addressed by ``index`` (the slot). No single fragment is complete."""

    index: int
    id: Optional[str] = None
    type: Optional[str] = None
    name: Optional[str] = None
    arguments: Optional[str] = None

    @classmethod
    def from_dto(cls, chunk: ToolCallChunk) -> "ToolCallFragment":
        fn = chunk.function
        return cls(
            index=chunk.index,
            id=chunk.id,
            type=chunk.type,
            name=fn.name if fn is not None else None,
            arguments=fn.arguments if fn is not None else None,
        )


__all__ = ["ToolCallFragment"]
