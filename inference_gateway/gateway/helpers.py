"""Request-building helpers shared by the gateway client.

Notes:
    Consumers must define ``_base_url``, ``_api_key``, ``_default_headers``
    and ``_default_query``.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from ..base.constants import HEALTH_PATH
from ..base.dto import CreateChatCompletionRequest
from ..base.errors import ErrorCode, GatewayError
from ..base.models import Provider

ChatRequestLike = Union[CreateChatCompletionRequest, Mapping[str, Any]]


class GatewayCommonMixin:
    """Mixin offering URL, header, query and request builders."""

    def _build_url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    def _health_url(self) -> str:
        """Health lives beside the versioned API root, not under it."""
        return f"{self._base_url.replace('/v1', '')}{HEALTH_PATH}"

    def _build_headers(self, extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """Build HTTP headers including authorization when available.

        Returns:
            Mapping of headers; includes ``Authorization`` if an API key is set.
        """
        headers: Dict[str, str] = {"Content-Type": "application/json"}
        headers.update(self._default_headers)
        if extra:
            headers.update(extra)
        api_key: Optional[str] = getattr(self, "_api_key", None)
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        return headers

    def _build_query(self, provider: Union[Provider, str, None] = None) -> Dict[str, str]:
        query: Dict[str, str] = dict(self._default_query)
        if provider:
            query["provider"] = provider.value if isinstance(provider, Provider) else str(provider)
        return query

    @staticmethod
    def _coerce_request(request: ChatRequestLike) -> CreateChatCompletionRequest:
        """Accept a request DTO or a plain mapping validated into one."""
        if isinstance(request, CreateChatCompletionRequest):
            return request
        try:
            return CreateChatCompletionRequest.model_validate(request)
        except ValidationError as exc:
            raise GatewayError(code=ErrorCode.VALIDATION, message=str(exc), raw=exc) from exc


__all__ = ["GatewayCommonMixin", "ChatRequestLike"]
