"""Request serialization, wire DTO leniency and callback routing."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from inference_gateway import (
    ChatCompletionStreamResponse,
    ChatCompletionTool,
    CreateChatCompletionRequest,
    FunctionObject,
    Message,
    StreamCallbacks,
    StreamEvent,
    StreamEventType,
)
from inference_gateway.base.models import FinishReason


def _request(**kw) -> CreateChatCompletionRequest:
    return CreateChatCompletionRequest(
        model="groq/llama-3.3-70b",
        messages=[Message(role="system", content="be brief"), Message(role="user", content="hi")],
        **kw,
    )


def test_streaming_payload_forces_flags_and_drops_nones():
    payload = _request(max_tokens=64).to_payload(stream=True)
    assert payload["stream"] is True  # nosec B101
    assert payload["stream_options"] == {"include_usage": True}  # nosec B101
    assert payload["max_tokens"] == 64 and "tools" not in payload  # nosec B101
    assert payload["messages"][0] == {"role": "system", "content": "be brief"}  # nosec B101


def test_declared_tool_names():
    req = _request(
        tools=[
            ChatCompletionTool(function=FunctionObject(name="get_weather", parameters={"type": "object"})),
            ChatCompletionTool(function=FunctionObject(name="get_time")),
        ]
    )
    assert req.declared_tool_names() == frozenset({"get_weather", "get_time"})  # nosec B101
    assert req.to_payload(stream=False)["tools"][0]["type"] == "function"  # nosec B101


def test_request_validation():
    with pytest.raises(ValidationError):
        CreateChatCompletionRequest(model="m", messages=[])
    with pytest.raises(ValidationError):
        _request(max_tokens=0)


def test_stream_response_keeps_unknown_fields():
    chunk = ChatCompletionStreamResponse.model_validate(
        {"id": "x", "choices": [{"delta": {"content": "a", "audio": {"id": "1"}}}], "x_gateway": 1}
    )
    assert chunk.choices[0].delta.content == "a"  # nosec B101
    assert chunk.model_extra == {"x_gateway": 1}  # nosec B101


def test_finish_reason_parse():
    assert FinishReason.parse("tool_calls") is FinishReason.TOOL_CALLS  # nosec B101
    assert FinishReason.parse(None) is None and FinishReason.parse("eos") is None  # nosec B101


def test_callbacks_dispatch_routes_and_tolerates_missing_hooks():
    got = []
    sink = StreamCallbacks(on_content=got.append, on_finish=lambda reason: got.append(("finish", reason)))
    sink.dispatch(StreamEvent(StreamEventType.OPEN))
    sink.dispatch(StreamEvent(StreamEventType.CONTENT, text="hey"))
    sink.dispatch(StreamEvent(StreamEventType.USAGE))
    sink.dispatch(StreamEvent(StreamEventType.FINISH, finish_reason=FinishReason.STOP))
    assert got == ["hey", ("finish", FinishReason.STOP)]  # nosec B101


def test_terminal_events():
    assert StreamEvent(StreamEventType.FINISH).is_terminal  # nosec B101
    assert not StreamEvent(StreamEventType.CONTENT, text="x").is_terminal  # nosec B101
