"""One-JSON-object-per-line formatter for the ``inference_gateway`` logger."""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

# Attributes every LogRecord carries; anything else was passed via ``extra=``.
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render records as JSON with ``ts``, ``level`` and ``logger`` keys.

    Messages produced by ``log_event`` are already JSON objects; their keys
    are merged into the top level instead of being nested under ``msg``.
    Plain-text messages keep ``msg``. ``extra=`` attributes are appended
    without overriding existing keys.
    """

    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - trivial formatting
        out: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        text = record.getMessage()
        decoded = _as_object(text)
        if decoded is None:
            out["msg"] = text
        else:
            out.update(decoded)
        if record.exc_info:
            out["exc"] = self.formatException(record.exc_info)
        for key, value in vars(record).items():
            if key.startswith("_") or key in _STANDARD_ATTRS:
                continue
            out.setdefault(key, value)
        return json.dumps(out, ensure_ascii=False, default=str)


def _as_object(text: str) -> Dict[str, Any] | None:
    if not text.startswith("{"):
        return None
    try:
        value = json.loads(text)
    except ValueError:
        return None
    return value if isinstance(value, dict) else None


__all__ = ["JsonFormatter", "ISO"]
