"""PortAudio pushes blocks to us from its own audio thread."""

from __future__ import annotations

import logging
import contextlib
from typing import Any

from chief_relay.config.audio import AUDIO_CHANNELS
from chief_relay.state.settings import AudioSettings

from .base import BlockFn, import_sounddevice

logger = logging.getLogger(__name__)


class CallbackTap:
    name = "callback"

    def __init__(self, settings: AudioSettings, on_block: BlockFn, *, sd: Any = None) -> None:
        self._settings = settings
        self._on_block = on_block
        self._sd = sd or import_sounddevice()
        self._stream: Any = None

    def _callback(self, indata: Any, frames: int, time_info: Any, status: Any) -> None:
        if status:
            logger.warning("mic status: %s", status)
        try:
            self._on_block(indata[:, 0].copy())
        except Exception:
            logger.exception("mic block handler failed")

    def open(self) -> None:
        stream = self._sd.InputStream(
            samplerate=self._settings.sample_rate_hz,
            blocksize=self._settings.block_samples,
            channels=AUDIO_CHANNELS,
            dtype="float32",
            device=self._settings.input_device,
            callback=self._callback,
        )
        try:
            stream.start()
        except Exception:
            with contextlib.suppress(Exception):
                stream.close()
            raise
        self._stream = stream

    def close(self) -> None:
        stream, self._stream = self._stream, None
        if stream is None:
            return
        try:
            stream.stop()
        except Exception:
            logger.warning("error stopping mic stream", exc_info=True)
        finally:
            with contextlib.suppress(Exception):
                stream.close()


__all__ = ["CallbackTap"]
