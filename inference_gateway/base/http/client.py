"""Shared HTTP client pool for the gateway client.

Purpose:
    Provide a thread-safe pool of reusable ``httpx.Client`` instances so
    repeated client construction (``with_options`` and friends) does not pay
    for new connection pools. Timeouts are applied per request from
    :func:`get_timeout_config`; the pooled client's own timeout only bounds
    requests issued without one.

Lifecycle & cleanup:
    - Clients are cached by ``(base_url, purpose)``.
    - All clients are closed at interpreter exit via ``atexit``. Tests may
      call :func:`close_all_clients` explicitly.

Per-call state (cancellation, frame buffers, tool-call accumulators) never
lives on a pooled client; sharing one across concurrent streams is safe.
"""

from __future__ import annotations

import atexit
import threading
from contextlib import suppress
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import build_httpx_timeout, get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: Optional base URL set on the client. ``None`` groups clients
            under a shared key (callers then pass absolute URLs).
        purpose: A short string discriminating separate pools (e.g.,
            "gateway", "health"). Keep stable to maximize reuse.

    Returns:
        A reusable ``httpx.Client`` instance.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        timeout = build_httpx_timeout(get_timeout_config())
        client = httpx.Client(base_url=base_url, timeout=timeout) if base_url else httpx.Client(timeout=timeout)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            # teardown failures are non-actionable
            with suppress(Exception):
                c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
