"""Handlers for events arriving from the relay."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Callable

from .state import VoiceState, ConnectionState, VoiceClientState

logger = logging.getLogger(__name__)

EnqueueFn = Callable[[str], None]
HandlerFn = Callable[[VoiceClientState, dict[str, Any], EnqueueFn], None]

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"


def _text(event: dict[str, Any], key: str) -> str:
    value = event.get(key)
    return value if isinstance(value, str) else ""


def _handle_connection_established(state: VoiceClientState, _event: dict[str, Any], _enqueue: EnqueueFn) -> None:
    state.connection = ConnectionState.CONNECTED
    state.voice = VoiceState.IDLE


def _handle_speech_started(state: VoiceClientState, _event: dict[str, Any], _enqueue: EnqueueFn) -> None:
    state.voice = VoiceState.LISTENING


def _handle_speech_stopped(state: VoiceClientState, _event: dict[str, Any], _enqueue: EnqueueFn) -> None:
    state.voice = VoiceState.PROCESSING


def _handle_response_created(state: VoiceClientState, _event: dict[str, Any], _enqueue: EnqueueFn) -> None:
    state.current_transcript = ""


def _handle_audio_delta(state: VoiceClientState, event: dict[str, Any], enqueue: EnqueueFn) -> None:
    state.voice = VoiceState.SPEAKING
    delta = _text(event, "delta")
    if delta:
        enqueue(delta)


def _handle_transcript_delta(state: VoiceClientState, event: dict[str, Any], _enqueue: EnqueueFn) -> None:
    state.current_transcript += _text(event, "delta")


def _handle_transcript_done(state: VoiceClientState, event: dict[str, Any], _enqueue: EnqueueFn) -> None:
    transcript = _text(event, "transcript")
    if transcript:
        state.add_message(transcript, ROLE_ASSISTANT)
        state.current_transcript = ""


def _handle_audio_done(state: VoiceClientState, _event: dict[str, Any], _enqueue: EnqueueFn) -> None:
    state.voice = VoiceState.IDLE


def _handle_user_transcript(state: VoiceClientState, event: dict[str, Any], _enqueue: EnqueueFn) -> None:
    transcript = _text(event, "transcript")
    if transcript:
        state.add_message(transcript, ROLE_USER)


def _handle_error(state: VoiceClientState, event: dict[str, Any], _enqueue: EnqueueFn) -> None:
    err = event.get("error")
    message = err.get("message") if isinstance(err, dict) else None
    state.last_error = message or _text(event, "message") or "An error occurred"
    logger.error("relay error: %s", state.last_error)


HANDLERS: dict[str, HandlerFn] = {
    "connection_established": _handle_connection_established,
    "input_audio_buffer.speech_started": _handle_speech_started,
    "input_audio_buffer.speech_stopped": _handle_speech_stopped,
    "response.created": _handle_response_created,
    "response.audio.delta": _handle_audio_delta,
    "response.audio_transcript.delta": _handle_transcript_delta,
    "response.audio_transcript.done": _handle_transcript_done,
    "response.audio.done": _handle_audio_done,
    "conversation.item.input_audio_transcription.completed": _handle_user_transcript,
    "error": _handle_error,
}


def handle_event(state: VoiceClientState, event: dict[str, Any], enqueue_audio: EnqueueFn) -> bool:
    """Apply one relay event to `state`. Returns False for unhandled types."""
    msg_type = event.get("type")
    handler = HANDLERS.get(msg_type) if isinstance(msg_type, str) else None
    if handler is None:
        logger.debug("unhandled event type: %s", msg_type)
        return False
    handler(state, event, enqueue_audio)
    return True


__all__ = ["HANDLERS", "ROLE_ASSISTANT", "ROLE_USER", "handle_event"]
