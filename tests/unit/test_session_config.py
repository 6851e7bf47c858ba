from __future__ import annotations

import orjson

from chief_relay.config import session as session_config
from chief_relay.runtime.settings import load_settings
from chief_relay.realtime.session_config import build_session_update, encode_session_update


def test_default_session_update_matches_realtime_defaults(monkeypatch) -> None:
    for name in dir(session_config):
        if name.startswith("ENV_"):
            monkeypatch.delenv(getattr(session_config, name), raising=False)
    update = build_session_update(load_settings().session)

    assert update["type"] == "session.update"
    session = update["session"]
    assert session["modalities"] == ["text", "audio"]
    assert session["voice"] == "alloy"
    assert session["input_audio_format"] == "pcm16"
    assert session["output_audio_format"] == "pcm16"
    assert session["input_audio_transcription"] == {"model": "whisper-1"}
    assert session["turn_detection"] == {
        "type": "server_vad",
        "threshold": 0.5,
        "prefix_padding_ms": 300,
        "silence_duration_ms": 1000,
    }
    assert session["temperature"] == 0.8
    assert session["max_response_output_tokens"] == "inf"
    assert "Chief" in session["instructions"]


def test_encoded_update_is_json_text() -> None:
    settings = load_settings().session
    encoded = encode_session_update(settings)
    assert isinstance(encoded, str)
    assert orjson.loads(encoded) == build_session_update(settings)
