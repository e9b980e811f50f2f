"""Built-in client defaults (lowest-precedence configuration source)."""

from __future__ import annotations

from ..base.constants import DEFAULT_BASE_URL

GATEWAY_DEFAULT_BASE_URL = DEFAULT_BASE_URL

__all__ = ["GATEWAY_DEFAULT_BASE_URL"]
