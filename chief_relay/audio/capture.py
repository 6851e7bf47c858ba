"""Microphone capture: device blocks in, base64 PCM16 frames out."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from collections.abc import Callable, Sequence

from chief_relay.errors import AudioDeviceError
from chief_relay.state.settings import AudioSettings

from .codec import encode_audio_frame
from .channel import FrameChannel
from .taps import DEFAULT_TAPS, MicTap, import_sounddevice
from .taps.base import device_hints

logger = logging.getLogger(__name__)

FrameFn = Callable[[str], None]


class AudioCapture:
    """Opens the first tap that works and publishes encoded frames.

    Frames go to `channel` (thread-safe, drop-oldest) and, if given, to
    `on_frame` on the event loop. Neither is ever called on the audio thread.
    """

    def __init__(
        self,
        settings: AudioSettings,
        *,
        channel: FrameChannel | None = None,
        on_frame: FrameFn | None = None,
        taps: Sequence[type[MicTap]] = DEFAULT_TAPS,
        sd: Any = None,
    ) -> None:
        self._settings = settings
        self._channel = channel
        self._on_frame = on_frame
        self._tap_types = tuple(taps)
        self._sd = sd
        self._tap: MicTap | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def active(self) -> bool:
        return self._tap is not None

    @property
    def strategy(self) -> str | None:
        """Name of the open tap, for logging only."""
        return self._tap.name if self._tap is not None else None

    def start(self) -> None:
        if self._tap is not None:
            return
        try:
            self._loop = asyncio.get_running_loop()
        except RuntimeError:
            self._loop = None

        sd = self._sd or import_sounddevice()
        failures: list[str] = []
        for tap_type in self._tap_types:
            tap = tap_type(self._settings, self._handle_block, sd=sd)
            try:
                tap.open()
            except Exception as exc:
                logger.info("mic tap %s unavailable: %s", tap_type.name, exc)
                failures.append(f"{tap_type.name}: {exc}")
                continue
            self._tap = tap
            logger.info(
                "mic capture started: tap=%s rate=%d block=%d hints=%s",
                tap.name,
                self._settings.sample_rate_hz,
                self._settings.block_samples,
                device_hints(self._settings),
            )
            return

        raise AudioDeviceError("could not open microphone (" + "; ".join(failures or ["no taps configured"]) + ")")

    def _handle_block(self, block: Any) -> None:
        # Audio thread.
        frame = encode_audio_frame(block)
        if self._channel is not None:
            self._channel.publish_threadsafe(frame)
        if self._on_frame is None:
            return
        loop = self._loop
        if loop is not None and not loop.is_closed():
            loop.call_soon_threadsafe(self._on_frame, frame)
        else:
            self._on_frame(frame)

    def stop(self) -> None:
        tap, self._tap = self._tap, None
        if tap is None:
            return
        try:
            tap.close()
        except Exception:
            logger.warning("error closing mic tap %s", tap.name, exc_info=True)
        logger.info("mic capture stopped")


__all__ = ["AudioCapture"]
