"""Incremental ``text/event-stream`` frame decoder.

Purpose
-------
Turn an arbitrary chunking of the response body into complete SSE frames and
pull the JSON payload out of each ``data:`` frame.

State machine
-------------
``ACCUMULATING``
    Each ``feed`` appends to the buffer, splits on the blank-line delimiter,
    returns every complete frame in order and keeps the trailing (possibly
    partial) fragment as the new buffer.
``DRAINED``
    Entered by ``finish``: a non-empty trailing fragment is returned verbatim
    as one last frame. Feeding afterwards is a programming error.

Byte chunks are decoded with an incremental UTF-8 decoder, so a multi-byte
character split across two chunks decodes exactly as if it had arrived in
one piece. Invalid sequences are replaced rather than raised.

Payload rules (``extract_payload``)
-----------------------------------
Blank frames, frames not starting with ``data:`` (other SSE fields are not
used by this protocol) and the ``[DONE]`` sentinel yield ``None``.
"""

from __future__ import annotations

import codecs
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

from ..constants import SSE_DATA_PREFIX, SSE_DONE_SENTINEL, SSE_FRAME_DELIMITER

Chunk = Union[str, bytes, bytearray, memoryview]


class DecoderState(str, Enum):
    ACCUMULATING = "accumulating"
    DRAINED = "drained"


def split_frames(buffer: str) -> Tuple[List[str], str]:
    """Split ``buffer`` into complete frames and the undelimited remainder.

    ``SSE_FRAME_DELIMITER.join(frames + [remainder]) == buffer`` always holds.
    """
    pieces = buffer.split(SSE_FRAME_DELIMITER)
    return pieces[:-1], pieces[-1]


def extract_payload(frame: str) -> Optional[str]:
    """Return the trimmed ``data:`` payload of a frame, or ``None`` to skip it."""
    stripped = frame.lstrip()
    if not stripped or not stripped.startswith(SSE_DATA_PREFIX):
        return None
    payload = stripped[len(SSE_DATA_PREFIX):].strip()
    if not payload or payload == SSE_DONE_SENTINEL:
        return None
    return payload


class SseFrameDecoder:
    """Stateful splitter retaining partial frames across chunk boundaries."""

    def __init__(self) -> None:
        self._buffer = ""
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self.state = DecoderState.ACCUMULATING

    @property
    def pending(self) -> str:
        """Undelimited text retained from previous chunks."""
        return self._buffer

    def _to_text(self, chunk: Chunk, final: bool = False) -> str:
        if isinstance(chunk, str):
            return chunk
        return self._utf8.decode(bytes(chunk), final)

    def feed(self, chunk: Chunk) -> List[str]:
        """Append a chunk and return the frames it completed, in order."""
        if self.state is DecoderState.DRAINED:
            raise RuntimeError("decoder already drained")
        self._buffer += self._to_text(chunk)
        frames, self._buffer = split_frames(self._buffer)
        return frames

    def finish(self) -> List[str]:
        """Flush the trailing fragment (if any) and move to ``DRAINED``."""
        if self.state is DecoderState.DRAINED:
            return []
        tail = self._buffer + self._utf8.decode(b"", True)
        self._buffer = ""
        self.state = DecoderState.DRAINED
        return [tail] if tail else []


def iter_payloads(text: str) -> Iterator[str]:
    """Yield the payloads of a complete, already buffered stream body."""
    decoder = SseFrameDecoder()
    for frame in decoder.feed(text) + decoder.finish():
        payload = extract_payload(frame)
        if payload is not None:
            yield payload


__all__ = [
    "Chunk",
    "DecoderState",
    "SseFrameDecoder",
    "split_frames",
    "extract_payload",
    "iter_payloads",
]
