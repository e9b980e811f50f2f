"""Error-channel payload for streaming calls."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .error_code import ErrorCode


@dataclass(frozen=True)
class StreamError:
    """One report on the stream's error channel.

    ``fatal`` is ``False`` for per-frame faults (malformed frame, embedded
    upstream fault) after which reading continues, and ``True`` for the single
    report that ends the stream (transport failure, HTTP status, cancellation).
    """

    message: str
    code: ErrorCode = ErrorCode.UNKNOWN
    fatal: bool = False
    raw: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the gateway's ``{"error": ...}`` shape plus diagnostics."""
        data: Dict[str, Any] = {"error": self.message, "code": self.code.value, "fatal": self.fatal}
        if self.raw is not None:
            data["raw"] = self.raw
        return data


__all__ = ["StreamError"]
