"""The one-time `session.update` sent upstream after `session.created`."""

from __future__ import annotations

from typing import Any

import orjson

from chief_relay.state.settings import SessionSettings
from chief_relay.config.websocket import WS_TYPE_SESSION_UPDATE


def build_session_update(settings: SessionSettings) -> dict[str, Any]:
    vad = settings.turn_detection
    return {
        "type": WS_TYPE_SESSION_UPDATE,
        "session": {
            "modalities": list(settings.modalities),
            "instructions": settings.instructions,
            "voice": settings.voice,
            "input_audio_format": settings.input_audio_format,
            "output_audio_format": settings.output_audio_format,
            "input_audio_transcription": {"model": settings.transcription_model},
            "turn_detection": {
                "type": vad.type,
                "threshold": vad.threshold,
                "prefix_padding_ms": vad.prefix_padding_ms,
                "silence_duration_ms": vad.silence_duration_ms,
            },
            "temperature": settings.temperature,
            "max_response_output_tokens": settings.max_response_output_tokens,
        },
    }


def encode_session_update(settings: SessionSettings) -> str:
    return orjson.dumps(build_session_update(settings)).decode("utf-8")


__all__ = ["build_session_update", "encode_session_update"]
