"""Translate non-success gateway responses into :class:`GatewayError`.

The gateway reports failures as ``{"error": "..."}``; when the body carries
no usable message the error text falls back to ``HTTP error! status: N``.
"""
from __future__ import annotations

import contextlib
import socket
from typing import Any, Optional

import httpx

from ..errors import GatewayError, RETRYABLE_CODES, code_for_status


def _error_text(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    err = body.get("error")
    if isinstance(err, str) and err:
        return err
    if isinstance(err, dict):
        message = err.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def gateway_error_from_response(response: httpx.Response) -> GatewayError:
    """Build a :class:`GatewayError` from an already-read error response."""
    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = None
    message = _error_text(body) or f"HTTP error! status: {status}"
    code = code_for_status(status)
    return GatewayError(
        code=code,
        message=message,
        status_code=status,
        retryable=code in RETRYABLE_CODES,
    )


def raise_for_gateway_status(response: httpx.Response) -> None:
    """Raise a :class:`GatewayError` unless ``response`` is a success status."""
    if response.is_success:
        return
    response.read()
    raise gateway_error_from_response(response)


def interrupt_response(response: httpx.Response) -> None:
    """Unblock a thread waiting in ``response.iter_bytes()``.

    Safe to call from another thread. When the transport exposes its socket
    (``network_stream`` extension of the default httpx transport) the socket is
    shut down so the pending ``recv`` returns at once; otherwise the response
    is closed.
    """
    network_stream = response.extensions.get("network_stream")
    sock = network_stream.get_extra_info("socket") if network_stream is not None else None
    if sock is None:
        response.close()
        return
    # OSError: the peer already closed the connection
    with contextlib.suppress(OSError):
        sock.shutdown(socket.SHUT_RDWR)


__all__ = ["gateway_error_from_response", "raise_for_gateway_status", "interrupt_response"]
