"""Unit tests for single-frame decoding and best-effort error extraction."""
from __future__ import annotations

import json

import pytest

from inference_gateway.base.models import FinishReason
from inference_gateway.base.streaming import (
    FrameDecodeError,
    decode_payload,
    embedded_error_message,
    extract_error_message,
    is_done_sentinel,
)


def _dump(obj) -> str:
    return json.dumps(obj)


def test_done_sentinel_is_recognized_exactly():
    assert is_done_sentinel("[DONE]")  # nosec B101
    assert not is_done_sentinel("[done]")  # nosec B101
    assert not is_done_sentinel('{"choices": []}')  # nosec B101


def test_content_chunk_is_normalized():
    chunk = decode_payload(
        _dump({"id": "c1", "choices": [{"index": 0, "delta": {"content": "Hel"}, "finish_reason": None}]})
    )
    assert chunk.content == "Hel"  # nosec B101
    assert chunk.reasoning is None  # nosec B101
    assert chunk.finish_reason is None  # nosec B101
    assert chunk.raw.id == "c1"  # nosec B101


def test_empty_content_is_treated_as_absent():
    chunk = decode_payload(_dump({"choices": [{"delta": {"role": "assistant", "content": ""}}]}))
    assert chunk.content is None  # nosec B101


@pytest.mark.parametrize("field", ["reasoning_content", "reasoning"])
def test_both_reasoning_field_names_map_to_reasoning(field):
    chunk = decode_payload(_dump({"choices": [{"delta": {field: "thinking"}}]}))
    assert chunk.reasoning == "thinking"  # nosec B101


def test_reasoning_wins_when_both_fields_present():
    chunk = decode_payload(
        _dump({"choices": [{"delta": {"reasoning_content": "old", "reasoning": "new"}}]})
    )
    assert chunk.reasoning == "new"  # nosec B101


def test_tool_call_fragments_and_finish_marker():
    chunk = decode_payload(
        _dump(
            {
                "choices": [
                    {
                        "delta": {
                            "tool_calls": [
                                {"index": 1, "id": "call_9", "type": "function", "function": {"name": "f"}},
                                {"index": 0, "function": {"arguments": '{"a"'}},
                            ]
                        },
                        "finish_reason": "tool_calls",
                    }
                ]
            }
        )
    )
    assert [f.index for f in chunk.tool_call_fragments] == [1, 0]  # nosec B101
    assert chunk.tool_call_fragments[0].name == "f"  # nosec B101
    assert chunk.tool_call_fragments[1].arguments == '{"a"'  # nosec B101
    assert chunk.finish_reason is FinishReason.TOOL_CALLS  # nosec B101


def test_unknown_finish_marker_is_ignored():
    chunk = decode_payload(_dump({"choices": [{"delta": {}, "finish_reason": "something_new"}]}))
    assert chunk.finish_reason is None  # nosec B101


def test_usage_only_chunk():
    chunk = decode_payload(
        _dump({"choices": [], "usage": {"prompt_tokens": 3, "completion_tokens": 4, "total_tokens": 7}})
    )
    assert chunk.usage is not None  # nosec B101
    assert (chunk.usage.prompt_tokens, chunk.usage.completion_tokens, chunk.usage.total_tokens) == (3, 4, 7)  # nosec B101
    assert chunk.content is None and chunk.tool_call_fragments == ()  # nosec B101


def test_null_delta_and_choices_keep_finish_and_usage():
    finished = decode_payload(_dump({"choices": [{"index": 0, "delta": None, "finish_reason": "stop"}]}))
    assert finished.finish_reason is FinishReason.STOP and finished.content is None  # nosec B101

    usage_only = decode_payload(
        _dump({"choices": None, "usage": {"prompt_tokens": 1, "completion_tokens": 2, "total_tokens": 3}})
    )
    assert usage_only.usage is not None and usage_only.usage.total_tokens == 3  # nosec B101
    assert usage_only.finish_reason is None  # nosec B101


def test_embedded_error_object_and_string():
    chunk = decode_payload(_dump({"error": {"message": "provider overloaded", "code": 529}}))
    assert chunk.error == "provider overloaded"  # nosec B101
    chunk = decode_payload(_dump({"error": "plain failure", "choices": []}))
    assert chunk.error == "plain failure"  # nosec B101


def test_embedded_error_message_nested_and_opaque():
    assert embedded_error_message({"error": {"message": "deep"}}) == "deep"  # nosec B101
    assert embedded_error_message({"type": "server"}) == '{"type": "server"}'  # nosec B101
    assert embedded_error_message(None) is None  # nosec B101


def test_malformed_json_raises_with_generic_message():
    with pytest.raises(FrameDecodeError) as info:
        decode_payload("{not json")
    assert info.value.message.startswith("Failed to parse stream frame")  # nosec B101
    assert info.value.raw == "{not json"  # nosec B101


def test_malformed_json_prefers_top_level_message():
    raw = '{"error": {"message": "nested one"}, "message": "top level", '
    with pytest.raises(FrameDecodeError) as info:
        decode_payload(raw)
    assert info.value.message == "top level"  # nosec B101


def test_malformed_json_falls_back_to_nested_message():
    raw = '{"error": {"message": "rate limited \\"hard\\"", "code": 4'
    assert extract_error_message(raw) == 'rate limited "hard"'  # nosec B101


def test_extract_error_message_ignores_braces_inside_strings():
    raw = '{"note": "{{{", "message": "outer"'
    assert extract_error_message(raw) == "outer"  # nosec B101


def test_structurally_invalid_chunk_is_a_decode_error():
    with pytest.raises(FrameDecodeError):
        decode_payload(_dump({"choices": "not-a-list"}))


def test_raw_text_is_truncated():
    raw = "{" + "x" * 1000
    with pytest.raises(FrameDecodeError) as info:
        decode_payload(raw)
    assert len(info.value.raw) == 260  # nosec B101
