"""Per-call fields attached to every structured log record."""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Identifies the gateway call a log record belongs to.

    ``response_id`` is filled in by the stream orchestrator from the first
    decoded chunk. ``extra`` carries caller-specific keys (tenant, trace id).
    """

    base_url: Optional[str] = None
    provider: Optional[str] = None
    model: Optional[str] = None
    request_id: Optional[str] = None
    response_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into log fields, skipping unset values."""
        out = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "extra"}
        out.update(self.extra or {})
        return {k: v for k, v in out.items() if v is not None}


__all__ = ["LogContext"]
