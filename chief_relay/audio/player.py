"""Speaker output for single WAV clips."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

import numpy as np

from chief_relay.audio.codec import wav_to_pcm16
from chief_relay.audio.taps.base import import_sounddevice

logger = logging.getLogger(__name__)


class Player(Protocol):
    async def play(self, clip: bytes) -> None:
        """Play one clip to completion."""

    def stop(self) -> None:
        """Abort the clip currently playing, if any."""


class SoundDevicePlayer:
    def __init__(self, *, device: int | str | None = None, sd: Any = None) -> None:
        self._device = device
        self._sd = sd or import_sounddevice()

    async def play(self, clip: bytes) -> None:
        pcm, rate, channels = wav_to_pcm16(clip)
        frame_bytes = 2 * max(1, channels)
        usable = len(pcm) - (len(pcm) % frame_bytes)
        data = np.frombuffer(pcm[:usable], dtype="<i2").reshape(-1, max(1, channels))
        if data.size == 0:
            return
        sd = self._sd

        def _play() -> None:
            sd.play(data, samplerate=rate, device=self._device)
            sd.wait()

        await asyncio.get_running_loop().run_in_executor(None, _play)

    def stop(self) -> None:
        try:
            self._sd.stop()
        except Exception:
            logger.debug("speaker stop failed", exc_info=True)


__all__ = ["Player", "SoundDevicePlayer"]
