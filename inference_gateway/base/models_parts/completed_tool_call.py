"""Finalized, dispatch-ready tool call."""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict

from ..constants import DEFAULT_TOOL_TYPE


@dataclass(frozen=True)
class CompletedToolCall:
    """A tool call whose identifier and function name are both known.

    ``arguments`` is the concatenated argument text exactly as streamed; it is
    usually, but not necessarily, a JSON document.
    """

    id: str
    name: str
    arguments: str = ""
    type: str = DEFAULT_TOOL_TYPE

    def parsed_arguments(self) -> Any:
        """Decode ``arguments`` as JSON (empty text decodes to ``{}``).

        Raises:
            json.JSONDecodeError: When the streamed text is not valid JSON.
        """
        return json.loads(self.arguments) if self.arguments.strip() else {}

    def to_dict(self) -> Dict[str, Any]:
        """Return the gateway's ``ChatCompletionMessageToolCall`` shape."""
        return {
            "id": self.id,
            "type": self.type,
            "function": {"name": self.name, "arguments": self.arguments},
        }


__all__ = ["CompletedToolCall"]
