from __future__ import annotations

from chief_relay.client.events import handle_event
from chief_relay.client.state import VoiceState, ConnectionState, VoiceClientState


def _apply(state: VoiceClientState, *events: dict) -> list[str]:
    audio: list[str] = []
    for ev in events:
        handle_event(state, ev, audio.append)
    return audio


def test_turn_flow_updates_voice_state_and_transcripts() -> None:
    state = VoiceClientState(connection=ConnectionState.CONNECTING)
    audio = _apply(
        state,
        {"type": "connection_established", "message": "Connected to OpenAI"},
        {"type": "input_audio_buffer.speech_started"},
    )
    assert state.connection is ConnectionState.CONNECTED
    assert state.voice is VoiceState.LISTENING

    _apply(state, {"type": "input_audio_buffer.speech_stopped"})
    assert state.voice is VoiceState.PROCESSING

    audio = _apply(
        state,
        {"type": "conversation.item.input_audio_transcription.completed", "transcript": "what's on today?"},
        {"type": "response.created"},
        {"type": "response.audio.delta", "delta": "AAAA"},
        {"type": "response.audio_transcript.delta", "delta": "You have "},
        {"type": "response.audio_transcript.delta", "delta": "two meetings."},
    )
    assert audio == ["AAAA"]
    assert state.voice is VoiceState.SPEAKING
    assert state.current_transcript == "You have two meetings."

    _apply(
        state,
        {"type": "response.audio_transcript.done", "transcript": "You have two meetings."},
        {"type": "response.audio.done"},
    )
    assert state.voice is VoiceState.IDLE
    assert state.current_transcript == ""
    assert [(m.role, m.text) for m in state.messages] == [
        ("user", "what's on today?"),
        ("assistant", "You have two meetings."),
    ]


def test_error_event_records_message() -> None:
    state = VoiceClientState()
    _apply(state, {"type": "error", "error": {"message": "quota exceeded"}})
    assert state.last_error == "quota exceeded"
    _apply(state, {"type": "error", "message": "OpenAI connection closed: 1011"})
    assert state.last_error == "OpenAI connection closed: 1011"


def test_unknown_and_empty_events_are_ignored() -> None:
    state = VoiceClientState()
    assert handle_event(state, {"type": "rate_limits.updated"}, lambda _: None) is False
    assert handle_event(state, {}, lambda _: None) is False
    audio = _apply(state, {"type": "response.audio.delta"}, {"type": "response.audio_transcript.done"})
    assert audio == []
    assert state.messages == []
