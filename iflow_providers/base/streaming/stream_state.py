"""Per-request stream state owned by one adapter run.

Shared between the push-source callbacks (which may run on the source's
own thread) and the consuming generator, so every field except the decoder
is read and written under ``condition``.
"""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional

from .sse_decoder import SseFrameDecoder


@dataclass
class StreamState:
    """Decode buffer, frame queue and terminal flags of one in-flight request.

    Attributes:
        decoder: Frame decoder holding the undelimited tail of the body.
        frames: Complete frames waiting to be interpreted, in arrival order.
        ended: Source signalled end (or error); no more frames will arrive.
        error: Terminal error reported by the source, raised once ``frames``
            is drained.
        cancelled: Cancellation has been observed by the consumer.
        condition: Guards the fields above and wakes the consumer.
    """

    decoder: SseFrameDecoder = field(default_factory=SseFrameDecoder)
    frames: Deque[str] = field(default_factory=deque)
    ended: bool = False
    error: Optional[BaseException] = None
    cancelled: bool = False
    condition: threading.Condition = field(default_factory=threading.Condition)

    def push_chunk(self, chunk) -> None:
        """Decode a chunk and queue the frames it completed."""
        with self.condition:
            if self.ended:
                return
            self.frames.extend(self.decoder.feed(chunk))
            self.condition.notify_all()

    def mark_ended(self, error: Optional[BaseException] = None) -> None:
        """Record end of stream; the trailing fragment is flushed on a clean end."""
        with self.condition:
            if self.ended:
                return
            if error is None:
                self.frames.extend(self.decoder.finish())
            self.error = error
            self.ended = True
            self.condition.notify_all()

    def wake(self) -> None:
        with self.condition:
            self.condition.notify_all()


__all__ = ["StreamState"]
