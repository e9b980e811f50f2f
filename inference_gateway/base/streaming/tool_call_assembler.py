"""Reassemble tool calls whose fields arrive split across stream chunks.

Fragments are addressed by their slot ``index``. The first fragment for a slot
seeds an accumulator; later fragments overwrite identity fields only with
non-empty values and append argument text.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from ..logging import get_logger, log_event
from ..models import CompletedToolCall, ToolCallAccumulator, ToolCallFragment

logger = get_logger("inference_gateway.stream")


class ToolCallAssembler:
    """Slot-keyed set of in-flight tool calls for a single stream."""

    def __init__(self) -> None:
        self._slots: Dict[int, ToolCallAccumulator] = {}

    def __len__(self) -> int:
        return len(self._slots)

    @property
    def open_slots(self) -> List[int]:
        return sorted(self._slots)

    def merge(self, fragment: ToolCallFragment) -> ToolCallAccumulator:
        acc = self._slots.get(fragment.index)
        if acc is None:
            acc = self._slots[fragment.index] = ToolCallAccumulator.from_fragment(fragment)
            return acc
        return acc.merge(fragment)

    def merge_all(self, fragments: Iterable[ToolCallFragment]) -> None:
        for fragment in fragments:
            self.merge(fragment)

    def finalize_all(self) -> List[CompletedToolCall]:
        """Emit every complete call in ascending slot order and clear all slots.

        Slots still lacking an id or a name are dropped (logged at debug).
        """
        completed: List[CompletedToolCall] = []
        for index in sorted(self._slots):
            acc = self._slots[index]
            call = acc.finalize()
            if call is None:
                log_event(
                    logger,
                    "stream.tool_call.dropped",
                    level=logging.DEBUG,
                    keep_none=True,
                    slot=index,
                    id=acc.id or None,
                    name=acc.name or None,
                )
                continue
            completed.append(call)
        self._slots.clear()
        return completed


__all__ = ["ToolCallAssembler"]
