"""HTTP utilities package.

Exposes pooled httpx clients and gateway error-response translation.
"""

from .client import get_httpx_client, close_all_clients
from .responses import gateway_error_from_response, interrupt_response, raise_for_gateway_status

__all__ = [
    "get_httpx_client",
    "close_all_clients",
    "gateway_error_from_response",
    "raise_for_gateway_status",
    "interrupt_response",
]
