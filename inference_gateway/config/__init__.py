"""Configuration layer for the gateway client.

Sources are merged in a predictable order (later wins):

1. Built-in defaults (``config.defaults``)
2. Optional JSON or YAML file named by ``INFERENCE_GATEWAY_CONFIG_FILE``
3. Environment variables ``INFERENCE_GATEWAY_URL``,
   ``INFERENCE_GATEWAY_API_KEY`` and ``INFERENCE_GATEWAY_TIMEOUT``
4. In-code overrides (``None`` values are ignored)

External config file example::

    base_url: https://gateway.internal/v1
    api_key: ${INFERENCE_GATEWAY_API_KEY}
    timeout: 45
    default_headers:
      X-Team: research

Public API
----------
* get_client_config(overrides: dict | None = None) -> dict
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import GATEWAY_DEFAULT_BASE_URL
from .env import CONFIG_FILE_ENV, ENV_FIELD_MAP, env_value, is_placeholder

# timeout is left unset so callers can fall back to the process TimeoutConfig
DEFAULTS: Dict[str, Any] = {
    "base_url": GATEWAY_DEFAULT_BASE_URL,
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


def _expand(value: Any) -> Any:
    """Expand ``${VAR}`` references in string values from the environment."""
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, dict):
        return {k: _expand(v) for k, v in value.items()}
    return value


def _load_external_config() -> Dict[str, Any]:
    """Read the optional config file (JSON first, then YAML); cached per path."""
    global _FILE_CACHE, _FILE_CACHE_PATH  # noqa: PLW0603 - module cache
    path = os.getenv(CONFIG_FILE_ENV)
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    data: Any = {}
    if path and Path(path).is_file():
        text = Path(path).read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except ValueError:
            try:
                data = yaml.safe_load(text) or {}
            except yaml.YAMLError:
                data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE = _expand(data)
    _FILE_CACHE_PATH = path
    return _FILE_CACHE


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field in ENV_FIELD_MAP:
        val = env_value(field)
        if val is not None:
            out[field] = val
    return out


def _coerce(cfg: Dict[str, Any]) -> Dict[str, Any]:
    timeout = cfg.get("timeout")
    if timeout is not None:
        try:
            value = float(timeout)
        except (TypeError, ValueError):
            value = 0.0
        if value > 0:
            cfg["timeout"] = value
        else:
            cfg.pop("timeout")
    if isinstance(cfg.get("base_url"), str):
        cfg["base_url"] = cfg["base_url"].rstrip("/")
    if "api_key" in cfg and (not isinstance(cfg["api_key"], str) or is_placeholder(cfg["api_key"])):
        cfg.pop("api_key")
    return cfg


def get_client_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged client configuration.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= _load_external_config()
    cfg |= _env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return _coerce(cfg)


def reset_config_cache() -> None:
    """Forget the cached config file contents (tests, reloads)."""
    global _FILE_CACHE, _FILE_CACHE_PATH  # noqa: PLW0603 - module cache
    _FILE_CACHE = None
    _FILE_CACHE_PATH = None


__all__ = ["get_client_config", "reset_config_cache", "DEFAULTS"]
