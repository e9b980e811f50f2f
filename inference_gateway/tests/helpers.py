"""Shared builders for gateway client tests.

Frames are built as plain dicts and encoded into SSE ``data:`` lines; the
client is wired to an ``httpx.MockTransport`` so no network is involved.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

import httpx

from inference_gateway import InferenceGatewayClient, StreamCallbacks
from inference_gateway.base.resilience import NO_RETRY

BASE_URL = "http://gateway.test/v1"


def frame(obj: Any, *, ensure_ascii: bool = True) -> bytes:
    body = obj if isinstance(obj, str) else json.dumps(obj, ensure_ascii=ensure_ascii)
    return f"data: {body}\n\n".encode("utf-8")


def done() -> bytes:
    return b"data: [DONE]\n\n"


def content_chunk(text: str, *, finish: Optional[str] = None, cid: str = "chatcmpl-1") -> Dict[str, Any]:
    return {
        "id": cid,
        "object": "chat.completion.chunk",
        "model": "openai/gpt-4o",
        "choices": [{"index": 0, "delta": {"content": text}, "finish_reason": finish}],
    }


def tool_chunk(
    index: int,
    *,
    id: Optional[str] = None,
    name: Optional[str] = None,
    arguments: Optional[str] = None,
    finish: Optional[str] = None,
) -> Dict[str, Any]:
    fn: Dict[str, Any] = {}
    if name is not None:
        fn["name"] = name
    if arguments is not None:
        fn["arguments"] = arguments
    call: Dict[str, Any] = {"index": index}
    if id is not None:
        call["id"] = id
        call["type"] = "function"
    if fn:
        call["function"] = fn
    return {
        "id": "chatcmpl-1",
        "choices": [{"index": 0, "delta": {"tool_calls": [call]}, "finish_reason": finish}],
    }


def finish_chunk(reason: str) -> Dict[str, Any]:
    return {"id": "chatcmpl-1", "choices": [{"index": 0, "delta": {}, "finish_reason": reason}]}


def usage_chunk(prompt: int, completion: int, total: int) -> Dict[str, Any]:
    return {
        "id": "chatcmpl-1",
        "choices": [],
        "usage": {"prompt_tokens": prompt, "completion_tokens": completion, "total_tokens": total},
    }


def sse_response(parts: Iterable[bytes], status: int = 200) -> httpx.Response:
    """Response whose body is delivered one transport chunk per ``parts`` item."""
    return httpx.Response(status, headers={"content-type": "text/event-stream"}, content=iter(parts))


def make_client(handler: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> InferenceGatewayClient:
    kwargs.setdefault("retry_config", NO_RETRY)
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return InferenceGatewayClient(base_url=BASE_URL, http_client=http_client, **kwargs)


def chat_request(tools: Iterable[str] = ()) -> Dict[str, Any]:
    req: Dict[str, Any] = {
        "model": "openai/gpt-4o",
        "messages": [{"role": "user", "content": "hi"}],
    }
    names = list(tools)
    if names:
        req["tools"] = [
            {"type": "function", "function": {"name": n, "parameters": {"type": "object"}}} for n in names
        ]
    return req


@dataclass
class Recorder:
    """Collects every callback invocation as ``(channel, payload)`` pairs."""

    calls: List[tuple] = field(default_factory=list)

    def callbacks(self, **overrides: Callable[..., None]) -> StreamCallbacks:
        def rec(channel: str) -> Callable[..., None]:
            def _inner(*args: Any) -> None:
                self.calls.append((channel, args[0] if args else None))
                hook = overrides.get(channel)
                if hook is not None:
                    hook(*args)

            return _inner

        return StreamCallbacks(
            on_open=rec("open"),
            on_chunk=rec("chunk"),
            on_content=rec("content"),
            on_reasoning=rec("reasoning"),
            on_tool=rec("tool"),
            on_mcp_tool=rec("mcp_tool"),
            on_usage=rec("usage"),
            on_finish=rec("finish"),
            on_error=rec("error"),
        )

    def of(self, channel: str) -> List[Any]:
        return [payload for name, payload in self.calls if name == channel]

    def channels(self) -> List[str]:
        return [name for name, _ in self.calls]
