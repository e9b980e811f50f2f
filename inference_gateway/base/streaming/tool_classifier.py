"""Route finalized tool calls to the local or remote tool channel."""
from __future__ import annotations

from enum import Enum
from typing import Iterable

from ..models import CompletedToolCall


class ToolOrigin(str, Enum):
    LOCAL = "local"
    REMOTE = "remote"


class ToolClassifier:
    """Classify calls against the tool names declared on the request.

    A call whose name is not an exact, case-sensitive member of the declared
    set (including an empty or non-string name) is treated as a remote tool
    discovered through the gateway.
    """

    def __init__(self, declared_names: Iterable[str] = ()) -> None:
        self._declared = frozenset(n for n in declared_names if isinstance(n, str) and n)

    @property
    def declared_names(self) -> frozenset:
        return self._declared

    def origin_of(self, name: object) -> ToolOrigin:
        if isinstance(name, str) and name in self._declared:
            return ToolOrigin.LOCAL
        return ToolOrigin.REMOTE

    def classify(self, call: CompletedToolCall) -> ToolOrigin:
        return self.origin_of(call.name)


__all__ = ["ToolClassifier", "ToolOrigin"]
