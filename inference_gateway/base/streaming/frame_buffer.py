"""Incremental Server-Sent-Events line framing.

Transport chunks never align with logical lines (or even with UTF-8 code
points), so bytes are decoded incrementally and the trailing partial line is
carried forward to the next ``feed``.
"""
from __future__ import annotations

import codecs
from typing import List

from ..constants import SSE_DATA_PREFIX


class FrameBuffer:
    """Accumulates response bytes and yields complete ``data:`` payloads.

    Lines without the data prefix (blank keep-alives, ``:`` comments,
    ``event:``/``id:`` fields) are ignored.
    """

    def __init__(self, encoding: str = "utf-8", prefix: str = SSE_DATA_PREFIX) -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._prefix = prefix
        self._carry = ""

    @property
    def pending(self) -> str:
        """Undelivered partial line (for diagnostics)."""
        return self._carry

    def feed(self, data: bytes) -> List[str]:
        """Append ``data`` and return the payloads of all newly completed lines."""
        self._carry += self._decoder.decode(data)
        *lines, self._carry = self._carry.split("\n")
        return self._payloads(lines)

    def flush(self) -> List[str]:
        """Drain the decoder at end of body; a final unterminated line counts."""
        self._carry += self._decoder.decode(b"", final=True)
        line, self._carry = self._carry, ""
        return self._payloads([line]) if line else []

    def _payloads(self, lines: List[str]) -> List[str]:
        out: List[str] = []
        for line in lines:
            line = line.rstrip("\r")
            if line.startswith(self._prefix):
                out.append(line[len(self._prefix):].strip())
        return out


__all__ = ["FrameBuffer"]
