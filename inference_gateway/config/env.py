"""Environment variable names read by the configuration layer."""

from __future__ import annotations

import os
from typing import Dict, Optional

CONFIG_FILE_ENV = "INFERENCE_GATEWAY_CONFIG_FILE"

# config field -> environment variable
ENV_FIELD_MAP: Dict[str, str] = {
    "base_url": "INFERENCE_GATEWAY_URL",
    "api_key": "INFERENCE_GATEWAY_API_KEY",  # pragma: allowlist secret - env var name
    "timeout": "INFERENCE_GATEWAY_TIMEOUT",
}

_PLACEHOLDER_MARKERS = ("placeholder", "changeme", "your_api_key")


def is_placeholder(val: Optional[str]) -> bool:
    """Return True for blank or obviously-template values (case-insensitive)."""
    if val is None:
        return True
    s = val.strip().lower()
    return not s or any(m in s for m in _PLACEHOLDER_MARKERS)


def env_value(field: str) -> Optional[str]:
    """Return the environment value for a config field, ignoring placeholders."""
    name = ENV_FIELD_MAP.get(field)
    if name is None:
        return None
    val = os.getenv(name)
    return None if is_placeholder(val) else val.strip()


__all__ = ["CONFIG_FILE_ENV", "ENV_FIELD_MAP", "is_placeholder", "env_value"]
