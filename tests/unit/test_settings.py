from __future__ import annotations

from chief_relay.runtime.settings import load_settings, load_audio_settings


def test_ws_port_follows_http_port(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.delenv("WS_PORT_OFFSET", raising=False)
    server = load_settings().server
    assert server.http_port == 8080
    assert server.ws_port == 8081


def test_invalid_numbers_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "not-a-port")
    monkeypatch.setenv("UPSTREAM_CONNECT_TIMEOUT_S", "-3")
    monkeypatch.setenv("SESSION_TEMPERATURE", "warm")
    settings = load_settings()
    assert settings.server.http_port == 3001
    assert settings.upstream.connect_timeout_s == 10.0
    assert settings.session.temperature == 0.8


def test_server_default_key_is_read_from_env(monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "  sk-env  ")
    assert load_settings().auth.default_api_key == "sk-env"
    monkeypatch.delenv("OPENAI_API_KEY")
    assert load_settings().auth.default_api_key == ""


def test_max_output_tokens_accepts_inf_or_integer(monkeypatch) -> None:
    monkeypatch.setenv("SESSION_MAX_RESPONSE_OUTPUT_TOKENS", "INF")
    assert load_settings().session.max_response_output_tokens == "inf"
    monkeypatch.setenv("SESSION_MAX_RESPONSE_OUTPUT_TOKENS", "512")
    assert load_settings().session.max_response_output_tokens == 512


def test_audio_devices_accept_index_or_name(monkeypatch) -> None:
    monkeypatch.setenv("AUDIO_INPUT_DEVICE", "3")
    monkeypatch.setenv("AUDIO_OUTPUT_DEVICE", "MacBook Pro Speakers")
    audio = load_audio_settings()
    assert audio.input_device == 3
    assert audio.output_device == "MacBook Pro Speakers"
    assert audio.sample_rate_hz == 24000
