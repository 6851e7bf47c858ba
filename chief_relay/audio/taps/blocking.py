"""A reader thread pulls blocks with blocking reads.

Used when the host API refuses callback streams.
"""

from __future__ import annotations

import logging
import threading
import contextlib
from typing import Any

from chief_relay.config.audio import AUDIO_CHANNELS
from chief_relay.state.settings import AudioSettings

from .base import BlockFn, import_sounddevice

logger = logging.getLogger(__name__)


class BlockingTap:
    name = "blocking"

    def __init__(self, settings: AudioSettings, on_block: BlockFn, *, sd: Any = None) -> None:
        self._settings = settings
        self._on_block = on_block
        self._sd = sd or import_sounddevice()
        self._stream: Any = None
        self._thread: threading.Thread | None = None
        self._stop = threading.Event()

    def open(self) -> None:
        stream = self._sd.InputStream(
            samplerate=self._settings.sample_rate_hz,
            blocksize=self._settings.block_samples,
            channels=AUDIO_CHANNELS,
            dtype="float32",
            device=self._settings.input_device,
        )
        try:
            stream.start()
        except Exception:
            with contextlib.suppress(Exception):
                stream.close()
            raise
        self._stream = stream
        self._stop.clear()
        self._thread = threading.Thread(target=self._read_loop, args=(stream,), name="mic-reader", daemon=True)
        self._thread.start()

    def _read_loop(self, stream: Any) -> None:
        while not self._stop.is_set():
            try:
                data, overflowed = stream.read(self._settings.block_samples)
            except Exception:
                if not self._stop.is_set():
                    logger.exception("mic read failed; stopping reader")
                return
            if self._stop.is_set():
                return
            if overflowed:
                logger.warning("mic input overflowed")
            try:
                self._on_block(data[:, 0].copy())
            except Exception:
                logger.exception("mic block handler failed")

    def close(self) -> None:
        self._stop.set()
        stream, self._stream = self._stream, None
        thread, self._thread = self._thread, None
        if stream is not None:
            try:
                stream.stop()
            except Exception:
                logger.warning("error stopping mic stream", exc_info=True)
            finally:
                with contextlib.suppress(Exception):
                    stream.close()
        # Not joined: close runs on the event loop. The daemon reader exits
        # once its pending read returns or fails after stream.stop().
        if thread is not None and thread.is_alive():
            logger.debug("mic reader still finishing its last read")


__all__ = ["BlockingTap"]
