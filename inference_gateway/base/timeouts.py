"""Timeout defaults for gateway calls.

Three values are involved:

* ``http_timeout_seconds``: connect/write/pool timeout, and the read timeout
  of non-streaming requests.
* ``stream_timeout_seconds``: the longest wait for the next chunk of an open
  stream.
* ``overall_timeout_seconds``: default end-to-end deadline of a streaming
  call, enforced by its cancellation bridge.

Each can be overridden through ``IG_TIMEOUT_HTTP_SECONDS``,
``IG_TIMEOUT_STREAM_SECONDS`` and ``IG_TIMEOUT_OVERALL_SECONDS``. Values that
are missing, non-numeric or not positive fall back to the defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import httpx

from .constants import DEFAULT_TIMEOUT_SECONDS

HTTP_TIMEOUT_ENV = "IG_TIMEOUT_HTTP_SECONDS"
STREAM_TIMEOUT_ENV = "IG_TIMEOUT_STREAM_SECONDS"
OVERALL_TIMEOUT_ENV = "IG_TIMEOUT_OVERALL_SECONDS"


@dataclass(frozen=True)
class TimeoutConfig:
    http_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    stream_timeout_seconds: float = 60.0
    overall_timeout_seconds: Optional[float] = DEFAULT_TIMEOUT_SECONDS


# keyed by the raw env values so edits to the environment are picked up
_cache: Dict[Tuple[Optional[str], ...], TimeoutConfig] = {}


def _positive(raw: Optional[str], fallback: Optional[float]) -> Optional[float]:
    try:
        value = float(raw) if raw else None
    except ValueError:
        value = None
    return value if value is not None and value > 0 else fallback


def get_timeout_config() -> TimeoutConfig:
    raw = tuple(os.getenv(name) for name in (HTTP_TIMEOUT_ENV, STREAM_TIMEOUT_ENV, OVERALL_TIMEOUT_ENV))
    cfg = _cache.get(raw)
    if cfg is None:
        d = TimeoutConfig()
        cfg = TimeoutConfig(
            http_timeout_seconds=_positive(raw[0], d.http_timeout_seconds),
            stream_timeout_seconds=_positive(raw[1], d.stream_timeout_seconds),
            overall_timeout_seconds=_positive(raw[2], d.overall_timeout_seconds),
        )
        _cache.clear()
        _cache[raw] = cfg
    return cfg


def build_httpx_timeout(
    cfg: TimeoutConfig, *, streaming: bool = False, http_seconds: Optional[float] = None
) -> httpx.Timeout:
    """``httpx.Timeout`` for one request; streams read with the idle timeout.

    ``http_seconds`` replaces ``cfg.http_timeout_seconds`` (a client-level timeout).
    """
    base = http_seconds or cfg.http_timeout_seconds
    read = cfg.stream_timeout_seconds if streaming else base
    return httpx.Timeout(base, read=read)


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "build_httpx_timeout",
    "HTTP_TIMEOUT_ENV",
    "STREAM_TIMEOUT_ENV",
    "OVERALL_TIMEOUT_ENV",
]
