"""Strict-FIFO playback of received audio frames."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from collections import deque

from chief_relay.config.audio import DEFAULT_AUDIO_SAMPLE_RATE_HZ

from .player import Player
from .codec import pcm16_to_wav, decode_pcm16_b64

logger = logging.getLogger(__name__)


class PlaybackQueue:
    """Plays one frame at a time, in arrival order.

    `is_playing` stays true from the first enqueue until the queue drains
    or `clear()` is called.
    """

    def __init__(self, player: Player, *, sample_rate_hz: int = DEFAULT_AUDIO_SAMPLE_RATE_HZ) -> None:
        self._player = player
        self._sample_rate_hz = sample_rate_hz
        self._pending: deque[str] = deque()
        self._playing = False
        self._task: asyncio.Task | None = None
        self.skipped = 0

    @property
    def is_playing(self) -> bool:
        return self._playing

    def __len__(self) -> int:
        return len(self._pending)

    def enqueue(self, frame_b64: str) -> None:
        self._pending.append(frame_b64)
        if self._playing:
            return
        self._playing = True
        self._task = asyncio.create_task(self._drain(), name="audio-playback")

    async def _drain(self) -> None:
        while self._pending:
            frame = self._pending.popleft()
            try:
                clip = pcm16_to_wav(decode_pcm16_b64(frame), sample_rate_hz=self._sample_rate_hz)
                await self._player.play(clip)
            except asyncio.CancelledError:
                raise
            except Exception:
                self.skipped += 1
                logger.warning("skipping audio frame that failed to play", exc_info=True)
        self._playing = False
        self._task = None

    def clear(self) -> None:
        self._pending.clear()
        self._playing = False
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
        self._player.stop()

    async def wait_idle(self) -> None:
        """Wait until every queued frame has played (or been cleared)."""
        while self._task is not None:
            task = self._task
            with contextlib.suppress(asyncio.CancelledError):
                await task
            if self._task is task:
                break


__all__ = ["PlaybackQueue"]
