"""Inference Gateway client.

Summary:
- Model and MCP tool listing via ``httpx`` with retry on transient failures
- Non-stream chat completion (``stream`` forced off)
- Streaming chat completion through ``StreamOrchestrator``: callbacks
  (``stream_chat_completion``) or a cancellable iterator
  (``iter_chat_completion_stream``)
- Provider proxy passthrough and health check

Timeouts & Retries:
- Request timeouts come from the client ``timeout`` or ``get_timeout_config()``
- Streams get an overall deadline plus an idle read timeout; they are never
  retried, and neither is any POST

Errors & Observability:
- Failures surface as ``GatewayError`` with a normalized ``ErrorCode``
- Every request emits a normalized ``gateway.request`` log event
"""

from __future__ import annotations

import functools
import logging
import time
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from ..base.cancellation import CancellationToken
from ..base.constants import (
    CHAT_COMPLETIONS_PATH,
    MCP_TOOLS_PATH,
    MODELS_PATH,
    PROXY_PATH_TEMPLATE,
)
from ..base.dto import ChatCompletionResponse, ListModelsResponse, ListToolsResponse
from ..base.errors import ErrorCode, GatewayError, RETRYABLE_CODES, classify_exception
from ..base.http import gateway_error_from_response, get_httpx_client
from ..base.log_support.logging_context import LogContext
from ..base.logging import get_logger, log_event, normalized_log_event
from ..base.models import Provider
from ..base.resilience import RetryConfig, retry
from ..base.streaming import StreamCallbacks, StreamController, StreamOrchestrator
from ..base.timeouts import build_httpx_timeout, get_timeout_config
from ..config import get_client_config
from .helpers import ChatRequestLike, GatewayCommonMixin

M = TypeVar("M", bound=BaseModel)
ProviderLike = Union[Provider, str, None]


class InferenceGatewayClient(GatewayCommonMixin):
    """Client for an OpenAI-compatible inference gateway.

    Parameters:
        base_url: Gateway API root (default ``http://localhost:8080/v1``).
        api_key: Sent as ``Authorization: Bearer <key>`` when set.
        default_headers: Headers added to every request.
        default_query: Query parameters added to every request.
        timeout: Request timeout in seconds; also the default overall
            deadline of streaming calls.
        http_client: Injected ``httpx.Client``; defaults to a pooled client.
        retry_config: Retry policy for idempotent GET requests.

    Unset options are resolved through ``get_client_config`` (config file and
    ``INFERENCE_GATEWAY_*`` environment variables).
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        default_headers: Optional[Mapping[str, str]] = None,
        default_query: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
        retry_config: Optional[RetryConfig] = None,
    ) -> None:
        cfg = get_client_config({"base_url": base_url, "api_key": api_key, "timeout": timeout})
        self._base_url: str = cfg["base_url"]
        self._api_key: Optional[str] = cfg.get("api_key")
        self._default_headers: Dict[str, str] = {
            **dict(cfg.get("default_headers") or {}),
            **dict(default_headers or {}),
        }
        self._default_query: Dict[str, str] = {
            **dict(cfg.get("default_query") or {}),
            **dict(default_query or {}),
        }
        self._timeout: Optional[float] = cfg.get("timeout")
        self._http_client = http_client
        self._retry_config = retry_config or RetryConfig(attempt_logger=self._log_attempt)
        self._logger = get_logger("inference_gateway.client")

    @property
    def base_url(self) -> str:
        return self._base_url

    def with_options(
        self,
        *,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        default_headers: Optional[Mapping[str, str]] = None,
        default_query: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
        retry_config: Optional[RetryConfig] = None,
    ) -> "InferenceGatewayClient":
        """Return a new client; headers and query merge, other options replace."""
        return InferenceGatewayClient(
            base_url=base_url or self._base_url,
            api_key=api_key or self._api_key,
            default_headers={**self._default_headers, **dict(default_headers or {})},
            default_query={**self._default_query, **dict(default_query or {})},
            timeout=timeout or self._timeout,
            http_client=http_client or self._http_client,
            retry_config=retry_config or self._retry_config,
        )

    # ---- Listing ----
    def list_models(self, provider: ProviderLike = None) -> ListModelsResponse:
        """List models, optionally restricted to one provider."""
        call = retry(self._retry_config)(self._get)
        resp = call(MODELS_PATH, params=self._build_query(provider), ctx=self._ctx(provider))
        return self._parse(resp, ListModelsResponse)

    def list_tools(self) -> ListToolsResponse:
        """List the MCP tools the gateway has discovered."""
        call = retry(self._retry_config)(self._get)
        resp = call(MCP_TOOLS_PATH, params=self._build_query(), ctx=self._ctx())
        return self._parse(resp, ListToolsResponse)

    # ---- Chat ----
    def create_chat_completion(
        self, request: ChatRequestLike, provider: ProviderLike = None
    ) -> ChatCompletionResponse:
        """Perform a non-streaming chat completion."""
        req = self._coerce_request(request)
        resp = self._request(
            "POST",
            self._build_url(CHAT_COMPLETIONS_PATH),
            params=self._build_query(provider),
            json=req.to_payload(stream=False),
            ctx=self._ctx(provider, req.model),
        )
        return self._parse(resp, ChatCompletionResponse)

    def stream_chat_completion(
        self,
        request: ChatRequestLike,
        callbacks: Optional[StreamCallbacks] = None,
        provider: ProviderLike = None,
        *,
        cancellation_token: Optional[CancellationToken] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """Stream a chat completion into ``callbacks``.

        Every event is delivered in order on the calling thread. A fatal
        failure is first reported through ``on_error`` and then raised.

        Raises:
            GatewayError: HTTP status, transport, timeout (``timeout``) or
                caller cancellation (``cancelled``) failures.
        """
        sink = callbacks or StreamCallbacks()
        with self.iter_chat_completion_stream(
            request, provider, cancellation_token=cancellation_token, timeout=timeout
        ) as controller:
            for event in controller:
                sink.dispatch(event)
        controller.raise_for_failure()

    def iter_chat_completion_stream(
        self,
        request: ChatRequestLike,
        provider: ProviderLike = None,
        *,
        cancellation_token: Optional[CancellationToken] = None,
        timeout: Optional[float] = None,
    ) -> StreamController:
        """Return a cancellable iterator over the stream's events.

        The request is only sent once iteration starts.
        """
        req = self._coerce_request(request)
        tcfg = get_timeout_config()
        http_timeout = build_httpx_timeout(tcfg, streaming=True, http_seconds=self._timeout)
        opener = functools.partial(
            self._client().stream,
            "POST",
            self._build_url(CHAT_COMPLETIONS_PATH),
            params=self._build_query(provider),
            json=req.to_payload(stream=True),
            headers=self._build_headers({"Accept": "text/event-stream"}),
            timeout=http_timeout,
        )
        token = cancellation_token.child() if cancellation_token is not None else CancellationToken()
        orchestrator = StreamOrchestrator(
            opener,
            declared_tool_names=req.declared_tool_names(),
            cancellation_token=token,
            timeout_seconds=timeout or self._timeout or tcfg.overall_timeout_seconds,
            logger=get_logger("inference_gateway.stream"),
            ctx=self._ctx(provider, req.model),
        )
        return StreamController(orchestrator, token, parent=cancellation_token)

    # ---- Passthrough ----
    def proxy(
        self,
        provider: Union[Provider, str],
        path: str,
        method: str = "GET",
        json: Any = None,
    ) -> Any:
        """Forward a raw request to ``/proxy/{provider}/{path}`` and return its JSON."""
        name = provider.value if isinstance(provider, Provider) else str(provider)
        url = self._build_url(PROXY_PATH_TEMPLATE.format(provider=name, path=path.lstrip("/")))
        resp = self._request(
            method.upper(),
            url,
            params=self._build_query(),
            json=json,
            ctx=self._ctx(name),
        )
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise GatewayError(code=ErrorCode.DECODE, message=f"invalid JSON body: {exc}", raw=exc) from exc

    def health_check(self) -> bool:
        """Return True when the health endpoint answers at all, whatever the status."""
        try:
            resp = self._client().get(
                self._health_url(), headers=self._build_headers(), timeout=self._http_timeout()
            )
        except Exception as exc:  # noqa: BLE001 - any failure means unhealthy
            log_event(self._logger, "gateway.health.error", self._ctx(), level=logging.DEBUG, error=str(exc))
            return False
        log_event(self._logger, "gateway.health", self._ctx(), level=logging.DEBUG, status=resp.status_code)
        return True

    # ---- Internals ----
    def _client(self) -> httpx.Client:
        if self._http_client is not None:
            return self._http_client
        return get_httpx_client(None, "gateway")

    def _http_timeout(self) -> float:
        return self._timeout or get_timeout_config().http_timeout_seconds

    def _ctx(self, provider: ProviderLike = None, model: Optional[str] = None) -> LogContext:
        name = provider.value if isinstance(provider, Provider) else provider
        return LogContext(base_url=self._base_url, provider=name or None, model=model)

    def _get(self, path: str, *, params: Dict[str, str], ctx: LogContext) -> httpx.Response:
        return self._request("GET", self._build_url(path), params=params, ctx=ctx)

    def _request(
        self,
        method: str,
        url: str,
        *,
        params: Dict[str, str],
        ctx: LogContext,
        json: Any = None,
    ) -> httpx.Response:
        """Issue one request; transport and status failures become ``GatewayError``."""
        t0 = time.perf_counter()
        kwargs: Dict[str, Any] = {"params": params, "headers": self._build_headers(), "timeout": self._http_timeout()}
        if json is not None:
            kwargs["json"] = json
        try:
            resp = self._client().request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            code = classify_exception(exc)
            err = GatewayError(
                code=code,
                message=str(exc) or exc.__class__.__name__,
                retryable=code in RETRYABLE_CODES,
                raw=exc,
            )
            self._log_request(ctx, method, url, t0, error=err)
            raise err from exc
        if not resp.is_success:
            err = gateway_error_from_response(resp)
            self._log_request(ctx, method, url, t0, status=resp.status_code, error=err)
            raise err
        self._log_request(ctx, method, url, t0, status=resp.status_code)
        return resp

    @staticmethod
    def _parse(resp: httpx.Response, model: Type[M]) -> M:
        try:
            return model.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise GatewayError(
                code=ErrorCode.DECODE,
                message=f"unexpected {model.__name__} body: {exc}",
                status_code=resp.status_code,
                raw=exc,
            ) from exc

    def _log_request(
        self,
        ctx: LogContext,
        method: str,
        url: str,
        t0: float,
        *,
        status: Optional[int] = None,
        error: Optional[GatewayError] = None,
    ) -> None:
        normalized_log_event(
            self._logger,
            "gateway.request",
            ctx,
            phase="end",
            level=logging.INFO if error is None else logging.WARNING,
            error_code=error.code.value if error is not None else None,
            method=method,
            url=url,
            status=status,
            latency_ms=round((time.perf_counter() - t0) * 1000.0, 2),
            error=error.message if error is not None else None,
        )

    def _log_attempt(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: Optional[float],
        error: Optional[GatewayError],
    ) -> None:
        if error is None:
            return
        normalized_log_event(
            self._logger,
            "gateway.retry",
            LogContext(base_url=self._base_url),
            phase="retry",
            level=logging.WARNING,
            attempt=attempt + 1,
            error_code=error.code.value,
            max_attempts=max_attempts,
            delay=delay,
        )


__all__ = ["InferenceGatewayClient"]
