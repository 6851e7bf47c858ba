"""Bounded frame channel between the audio thread and the event loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)

_CLOSED = object()


class FrameChannel:
    """Drop-oldest queue of encoded frames.

    Producers on foreign threads call `publish_threadsafe`; everything else
    runs on the loop that created the channel.
    """

    def __init__(self, *, maxsize: int, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._maxsize = max(1, int(maxsize))
        # One spare slot so the close marker never displaces a frame.
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=self._maxsize + 1)
        self._loop = loop or asyncio.get_running_loop()
        self._closed = False
        self.dropped = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def publish(self, frame: str) -> None:
        if self._closed:
            return
        if self._queue.qsize() >= self._maxsize:
            self._queue.get_nowait()
            self.dropped += 1
            logger.warning("audio frame channel full; dropped oldest frame (total dropped=%d)", self.dropped)
        self._queue.put_nowait(frame)

    def publish_threadsafe(self, frame: str) -> None:
        if self._closed or self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self.publish, frame)

    async def get(self) -> str | None:
        """Next frame, or None once the channel is closed and drained."""
        if self._closed and self._queue.empty():
            return None
        item = await self._queue.get()
        if item is _CLOSED:
            return None
        return item

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)

    async def __aiter__(self) -> AsyncIterator[str]:
        while True:
            frame = await self.get()
            if frame is None:
                return
            yield frame


__all__ = ["FrameChannel"]
