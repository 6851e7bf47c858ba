"""Voice session against the relay: mic in, speaker out, transcripts kept."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable

import orjson
import websockets
from websockets.exceptions import ConnectionClosed

from chief_relay.errors import ClientNotConnectedError
from chief_relay.audio.codec import build_append_event
from chief_relay.audio.channel import FrameChannel
from chief_relay.audio.capture import AudioCapture
from chief_relay.audio.playback import PlaybackQueue
from chief_relay.state.settings import AudioSettings
from chief_relay.audio.player import Player, SoundDevicePlayer

from .events import ROLE_USER, handle_event
from .state import VoiceState, ConnectionState, VoiceClientState

logger = logging.getLogger(__name__)

CLIENT_MAX_MESSAGE_BYTES = 16 * 1024 * 1024
WS_CLOSE_NORMAL_CODE = 1000

UpdateFn = Callable[[dict[str, Any], VoiceClientState], None]


class VoiceClient:
    def __init__(
        self,
        url: str,
        *,
        audio_settings: AudioSettings,
        connect_fn: Callable[..., Any] | None = None,
        capture_factory: Callable[..., AudioCapture] = AudioCapture,
        player: Player | None = None,
        on_update: UpdateFn | None = None,
    ) -> None:
        self.url = url
        self.state = VoiceClientState()
        self._audio_settings = audio_settings
        self._connect_fn = connect_fn or websockets.connect
        self._capture_factory = capture_factory
        self._player = player
        self._on_update = on_update
        self._ws: Any = None
        self._capture: AudioCapture | None = None
        self._channel: FrameChannel | None = None
        self._playback: PlaybackQueue | None = None
        self._recv_task: asyncio.Task | None = None
        self._pump_task: asyncio.Task | None = None

    @property
    def connected(self) -> bool:
        return self.state.connection is ConnectionState.CONNECTED and self._ws is not None

    async def connect(self) -> None:
        if self.state.connection in (ConnectionState.CONNECTED, ConnectionState.CONNECTING):
            logger.info("already connected or connecting; ignoring connect()")
            return

        self.state.connection = ConnectionState.CONNECTING
        self.state.voice = VoiceState.PROCESSING
        try:
            player = self._player or SoundDevicePlayer(device=self._audio_settings.output_device)
            self._playback = PlaybackQueue(player, sample_rate_hz=self._audio_settings.sample_rate_hz)

            self._ws = await self._connect_fn(self.url, max_size=CLIENT_MAX_MESSAGE_BYTES)
            self.state.connection = ConnectionState.CONNECTED
            self.state.voice = VoiceState.IDLE
            logger.info("connected to relay")
            self._recv_task = asyncio.create_task(self._recv_loop(), name="voice-recv")

            self._channel = FrameChannel(maxsize=self._audio_settings.frame_queue_max)
            self._capture = self._capture_factory(self._audio_settings, channel=self._channel)
            self._capture.start()
            logger.info("microphone open (tap=%s)", self._capture.strategy)
            self._pump_task = asyncio.create_task(self._pump_frames(), name="voice-mic-pump")
        except Exception as exc:
            logger.error("voice connect failed: %s", exc)
            await self._cleanup()
            self.state.connection = ConnectionState.ERROR
            self.state.voice = VoiceState.IDLE
            self.state.last_error = str(exc) or type(exc).__name__
            raise

    async def send_text(self, text: str) -> None:
        if not self.connected:
            raise ClientNotConnectedError("connect before sending messages")
        item = {
            "type": "conversation.item.create",
            "item": {
                "type": "message",
                "role": ROLE_USER,
                "content": [{"type": "input_text", "text": text}],
            },
        }
        await self._ws.send(orjson.dumps(item).decode("utf-8"))
        await self._ws.send(orjson.dumps({"type": "response.create"}).decode("utf-8"))
        self.state.add_message(text, ROLE_USER)

    async def disconnect(self) -> None:
        await self._cleanup()
        self.state.reset()

    async def wait_closed(self) -> None:
        task = self._recv_task
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    def _enqueue_audio(self, frame_b64: str) -> None:
        if self._playback is not None:
            self._playback.enqueue(frame_b64)

    async def _recv_loop(self) -> None:
        ws = self._ws
        close_code: int | None = None
        try:
            async for raw in ws:
                try:
                    event = orjson.loads(raw)
                except orjson.JSONDecodeError:
                    logger.warning("dropping unparseable relay message")
                    continue
                if not isinstance(event, dict):
                    continue
                handle_event(self.state, event, self._enqueue_audio)
                if self._on_update is not None:
                    self._on_update(event, self.state)
            close_code = getattr(ws, "close_code", None)
        except ConnectionClosed as exc:
            frame = exc.rcvd or exc.sent
            close_code = frame.code if frame is not None else None

        logger.info("relay connection closed (code=%s)", close_code)
        if close_code not in (None, WS_CLOSE_NORMAL_CODE):
            self.state.last_error = self.state.last_error or "Voice connection was lost"
        self.state.connection = ConnectionState.DISCONNECTED
        self.state.voice = VoiceState.IDLE
        await self._cleanup()

    async def _pump_frames(self) -> None:
        channel = self._channel
        if channel is None:
            return
        async for frame in channel:
            ws = self._ws
            if ws is None:
                return
            try:
                await ws.send(build_append_event(frame))
            except ConnectionClosed:
                return

    async def _cleanup(self) -> None:
        capture, self._capture = self._capture, None
        if capture is not None:
            capture.stop()

        channel, self._channel = self._channel, None
        if channel is not None:
            channel.close()

        playback = self._playback
        if playback is not None:
            playback.clear()

        ws, self._ws = self._ws, None
        if ws is not None:
            with contextlib.suppress(Exception):
                await ws.close()

        current = asyncio.current_task()
        for attr in ("_pump_task", "_recv_task"):
            task = getattr(self, attr)
            setattr(self, attr, None)
            if task is None or task is current:
                continue
            if not task.done():
                task.cancel()
            with contextlib.suppress(BaseException):
                await task


__all__ = ["VoiceClient"]
