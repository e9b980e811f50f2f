"""Decode one SSE ``data:`` payload into a :class:`StreamChunk`.

Three outcomes are possible for a payload:

* the terminator sentinel (``is_done_sentinel``), which ends the stream;
* a chunk, possibly carrying an embedded upstream fault in ``error``;
* a :class:`FrameDecodeError`, carrying a best-effort message recovered from
  the raw text. The orchestrator reports it and keeps reading.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Optional

from pydantic import ValidationError

from ..constants import MAX_ERROR_RAW_CHARS, SSE_DONE_SENTINEL
from ..dto.stream_response import ChatCompletionStreamResponse, StreamDelta
from ..logging import get_logger, log_event
from ..models import FinishReason, StreamChunk, ToolCallFragment, UsageSummary

logger = get_logger("inference_gateway.stream")

_MESSAGE_RE = re.compile(r'"message"\s*:\s*"((?:[^"\\]|\\.)*)"')
_ERROR_STRING_RE = re.compile(r'"error"\s*:\s*"((?:[^"\\]|\\.)*)"')


class FrameDecodeError(ValueError):
    """A data frame that is not a valid chunk document."""

    def __init__(self, message: str, raw: str) -> None:
        super().__init__(message)
        self.message = message
        self.raw = raw[:MAX_ERROR_RAW_CHARS]


def is_done_sentinel(payload: str) -> bool:
    return payload == SSE_DONE_SENTINEL


def decode_payload(payload: str) -> StreamChunk:
    """Parse and normalize one frame payload.

    Raises:
        FrameDecodeError: On malformed JSON or a structurally invalid chunk.
    """
    try:
        data = json.loads(payload)
        raw = ChatCompletionStreamResponse.model_validate(data)
    except (ValueError, ValidationError) as exc:
        # json.JSONDecodeError is a ValueError
        message = extract_error_message(payload) or f"Failed to parse stream frame: {exc}"
        raise FrameDecodeError(message, payload) from exc

    usage = UsageSummary.from_dto(raw.usage) if raw.usage is not None else None
    error = embedded_error_message(raw.error)
    if not raw.choices:
        return StreamChunk(raw=raw, usage=usage, error=error)

    choice = raw.choices[0]
    delta = choice.delta
    return StreamChunk(
        raw=raw,
        content=delta.content or None,
        reasoning=_reasoning_of(delta),
        tool_call_fragments=tuple(ToolCallFragment.from_dto(tc) for tc in delta.tool_calls or ()),
        finish_reason=FinishReason.parse(choice.finish_reason),
        usage=usage,
        error=error,
    )


def _reasoning_of(delta: StreamDelta) -> Optional[str]:
    """Merge the two reasoning field names; ``reasoning`` wins when both are set."""
    if delta.reasoning_content and delta.reasoning and delta.reasoning_content != delta.reasoning:
        log_event(logger, "stream.reasoning_conflict", level=logging.DEBUG, kept="reasoning")
    return delta.reasoning or delta.reasoning_content or None


def embedded_error_message(error: Any) -> Optional[str]:
    """Return the message of a chunk's ``error`` field (string or object)."""
    if error is None:
        return None
    if isinstance(error, str):
        return error or None
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message
        nested = error.get("error")
        if nested is not None and nested is not error:
            return embedded_error_message(nested)
        return json.dumps(error, ensure_ascii=False)[:MAX_ERROR_RAW_CHARS]
    return str(error)


def extract_error_message(raw: str) -> Optional[str]:
    """Scan undecodable frame text for a plausible embedded message.

    A ``"message"`` field at the top level of the (broken) document is
    preferred, then a nested one, then a top-level ``"error"`` string.
    """
    matches: List[re.Match] = list(_MESSAGE_RE.finditer(raw))
    for match in matches:
        if _depth_at(raw, match.start()) <= 1:
            return _unescape(match.group(1))
    if matches:
        return _unescape(matches[0].group(1))
    match = _ERROR_STRING_RE.search(raw)
    if match:
        return _unescape(match.group(1))
    return None


def _depth_at(text: str, pos: int) -> int:
    """Object nesting depth at ``pos``, ignoring braces inside strings."""
    depth = 0
    in_str = False
    escaped = False
    for ch in text[:pos]:
        if in_str:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_str = False
            continue
        if ch == '"':
            in_str = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
    return depth


def _unescape(value: str) -> str:
    try:
        return json.loads(f'"{value}"')
    except ValueError:
        return value


__all__ = [
    "FrameDecodeError",
    "decode_payload",
    "embedded_error_message",
    "extract_error_message",
    "is_done_sentinel",
]
