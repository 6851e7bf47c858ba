"""Environment parsing for runtime settings."""

from __future__ import annotations

import os

from chief_relay.config.secrets import ENV_OPENAI_API_KEY
from chief_relay.state.settings import (
    AppSettings,
    AuthSettings,
    AudioSettings,
    LimitsSettings,
    ServerSettings,
    SessionSettings,
    UpstreamSettings,
    WebSocketSettings,
    TurnDetectionSettings,
)
from chief_relay.config.server import (
    ENV_HOST,
    ENV_PORT,
    DEFAULT_HOST,
    DEFAULT_PORT,
    ENV_WS_PORT_OFFSET,
    DEFAULT_WS_PORT_OFFSET,
    ENV_SHUTDOWN_TIMEOUT_S,
    DEFAULT_SHUTDOWN_TIMEOUT_S,
)
from chief_relay.config.upstream import (
    ENV_UPSTREAM_URL,
    ENV_UPSTREAM_MODEL,
    DEFAULT_UPSTREAM_URL,
    DEFAULT_UPSTREAM_MODEL,
    ENV_UPSTREAM_BETA_HEADER,
    DEFAULT_UPSTREAM_BETA_HEADER,
    ENV_UPSTREAM_CONNECT_TIMEOUT_S,
    ENV_UPSTREAM_MAX_MESSAGE_BYTES,
    DEFAULT_UPSTREAM_CONNECT_TIMEOUT_S,
    DEFAULT_UPSTREAM_MAX_MESSAGE_BYTES,
)
from chief_relay.config.session import (
    ENV_SESSION_VOICE,
    DEFAULT_SESSION_VOICE,
    ENV_SESSION_TEMPERATURE,
    ENV_SESSION_INSTRUCTIONS,
    ENV_SESSION_VAD_THRESHOLD,
    DEFAULT_SESSION_MODALITIES,
    DEFAULT_SESSION_TEMPERATURE,
    DEFAULT_SESSION_INSTRUCTIONS,
    DEFAULT_SESSION_VAD_THRESHOLD,
    ENV_SESSION_INPUT_AUDIO_FORMAT,
    ENV_SESSION_OUTPUT_AUDIO_FORMAT,
    ENV_SESSION_TRANSCRIPTION_MODEL,
    DEFAULT_SESSION_INPUT_AUDIO_FORMAT,
    ENV_SESSION_VAD_PREFIX_PADDING_MS,
    DEFAULT_SESSION_OUTPUT_AUDIO_FORMAT,
    DEFAULT_SESSION_TRANSCRIPTION_MODEL,
    DEFAULT_SESSION_TURN_DETECTION_TYPE,
    ENV_SESSION_VAD_SILENCE_DURATION_MS,
    DEFAULT_SESSION_VAD_PREFIX_PADDING_MS,
    ENV_SESSION_MAX_RESPONSE_OUTPUT_TOKENS,
    DEFAULT_SESSION_VAD_SILENCE_DURATION_MS,
    DEFAULT_SESSION_MAX_RESPONSE_OUTPUT_TOKENS,
)
from chief_relay.config.limits import (
    ENV_WS_MESSAGE_WINDOW_SECONDS,
    ENV_MAX_CONCURRENT_CONNECTIONS,
    ENV_WS_MAX_MESSAGES_PER_WINDOW,
    DEFAULT_WS_MESSAGE_WINDOW_SECONDS,
    DEFAULT_MAX_CONCURRENT_CONNECTIONS,
    DEFAULT_WS_MAX_MESSAGES_PER_WINDOW,
)
from chief_relay.config.websocket import (
    ENV_WS_ENDPOINT_PATH,
    ENV_WS_IDLE_TIMEOUT_S,
    ENV_WS_WATCHDOG_TICK_S,
    DEFAULT_WS_ENDPOINT_PATH,
    DEFAULT_WS_IDLE_TIMEOUT_S,
    DEFAULT_WS_WATCHDOG_TICK_S,
    ENV_WS_MAX_CONNECTION_DURATION_S,
    DEFAULT_WS_MAX_CONNECTION_DURATION_S,
)
from chief_relay.config.audio import (
    ENV_AUDIO_INPUT_DEVICE,
    ENV_AUDIO_BLOCK_SAMPLES,
    ENV_AUDIO_OUTPUT_DEVICE,
    ENV_AUDIO_FRAME_QUEUE_MAX,
    ENV_AUDIO_SAMPLE_RATE_HZ,
    DEFAULT_AUDIO_BLOCK_SAMPLES,
    ENV_AUDIO_NOISE_SUPPRESSION,
    ENV_AUDIO_ECHO_CANCELLATION,
    DEFAULT_AUDIO_FRAME_QUEUE_MAX,
    DEFAULT_AUDIO_SAMPLE_RATE_HZ,
    DEFAULT_AUDIO_NOISE_SUPPRESSION,
    DEFAULT_AUDIO_ECHO_CANCELLATION,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _device_env(name: str) -> int | str | None:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    # sounddevice accepts either an index or a substring of the device name.
    return int(raw) if raw.isdigit() else raw


def _max_tokens_env(name: str, default: int | str) -> int | str:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    if raw.lower() == "inf":
        return "inf"
    try:
        return max(1, int(raw))
    except Exception:
        return default


def _load_auth_settings() -> AuthSettings:
    api_key = (os.getenv(ENV_OPENAI_API_KEY) or "").strip()
    return AuthSettings(default_api_key=api_key)


def _load_server_settings() -> ServerSettings:
    http_port = _int_env(ENV_PORT, DEFAULT_PORT)
    offset = _int_env(ENV_WS_PORT_OFFSET, DEFAULT_WS_PORT_OFFSET)
    shutdown_timeout = _float_env(ENV_SHUTDOWN_TIMEOUT_S, DEFAULT_SHUTDOWN_TIMEOUT_S)
    if shutdown_timeout <= 0:
        shutdown_timeout = DEFAULT_SHUTDOWN_TIMEOUT_S

    return ServerSettings(
        host=_str_env(ENV_HOST, DEFAULT_HOST),
        http_port=http_port,
        ws_port=http_port + max(0, offset),
        shutdown_timeout_s=shutdown_timeout,
    )


def _load_upstream_settings() -> UpstreamSettings:
    connect_timeout = _float_env(ENV_UPSTREAM_CONNECT_TIMEOUT_S, DEFAULT_UPSTREAM_CONNECT_TIMEOUT_S)
    if connect_timeout <= 0:
        connect_timeout = DEFAULT_UPSTREAM_CONNECT_TIMEOUT_S

    return UpstreamSettings(
        url=_str_env(ENV_UPSTREAM_URL, DEFAULT_UPSTREAM_URL),
        model=_str_env(ENV_UPSTREAM_MODEL, DEFAULT_UPSTREAM_MODEL),
        beta_header=_str_env(ENV_UPSTREAM_BETA_HEADER, DEFAULT_UPSTREAM_BETA_HEADER),
        connect_timeout_s=connect_timeout,
        max_message_bytes=max(0, _int_env(ENV_UPSTREAM_MAX_MESSAGE_BYTES, DEFAULT_UPSTREAM_MAX_MESSAGE_BYTES)),
    )


def _load_session_settings() -> SessionSettings:
    turn_detection = TurnDetectionSettings(
        type=DEFAULT_SESSION_TURN_DETECTION_TYPE,
        threshold=_float_env(ENV_SESSION_VAD_THRESHOLD, DEFAULT_SESSION_VAD_THRESHOLD),
        prefix_padding_ms=_int_env(ENV_SESSION_VAD_PREFIX_PADDING_MS, DEFAULT_SESSION_VAD_PREFIX_PADDING_MS),
        silence_duration_ms=_int_env(ENV_SESSION_VAD_SILENCE_DURATION_MS, DEFAULT_SESSION_VAD_SILENCE_DURATION_MS),
    )

    return SessionSettings(
        modalities=DEFAULT_SESSION_MODALITIES,
        instructions=_str_env(ENV_SESSION_INSTRUCTIONS, DEFAULT_SESSION_INSTRUCTIONS),
        voice=_str_env(ENV_SESSION_VOICE, DEFAULT_SESSION_VOICE),
        input_audio_format=_str_env(ENV_SESSION_INPUT_AUDIO_FORMAT, DEFAULT_SESSION_INPUT_AUDIO_FORMAT),
        output_audio_format=_str_env(ENV_SESSION_OUTPUT_AUDIO_FORMAT, DEFAULT_SESSION_OUTPUT_AUDIO_FORMAT),
        transcription_model=_str_env(ENV_SESSION_TRANSCRIPTION_MODEL, DEFAULT_SESSION_TRANSCRIPTION_MODEL),
        turn_detection=turn_detection,
        temperature=_float_env(ENV_SESSION_TEMPERATURE, DEFAULT_SESSION_TEMPERATURE),
        max_response_output_tokens=_max_tokens_env(
            ENV_SESSION_MAX_RESPONSE_OUTPUT_TOKENS, DEFAULT_SESSION_MAX_RESPONSE_OUTPUT_TOKENS
        ),
    )


def _load_limits_settings() -> LimitsSettings:
    max_connections = _int_env(ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS)
    msg_window = _float_env(ENV_WS_MESSAGE_WINDOW_SECONDS, DEFAULT_WS_MESSAGE_WINDOW_SECONDS)
    msg_limit = _int_env(ENV_WS_MAX_MESSAGES_PER_WINDOW, DEFAULT_WS_MAX_MESSAGES_PER_WINDOW)

    return LimitsSettings(
        max_concurrent_connections=max(1, max_connections),
        ws_message_window_seconds=msg_window,
        ws_max_messages_per_window=msg_limit,
    )


def _load_websocket_settings() -> WebSocketSettings:
    idle_timeout = _float_env(ENV_WS_IDLE_TIMEOUT_S, DEFAULT_WS_IDLE_TIMEOUT_S)
    watchdog_tick = _float_env(ENV_WS_WATCHDOG_TICK_S, DEFAULT_WS_WATCHDOG_TICK_S)
    max_duration = _float_env(ENV_WS_MAX_CONNECTION_DURATION_S, DEFAULT_WS_MAX_CONNECTION_DURATION_S)
    if watchdog_tick <= 0:
        watchdog_tick = DEFAULT_WS_WATCHDOG_TICK_S

    return WebSocketSettings(
        endpoint_path=_str_env(ENV_WS_ENDPOINT_PATH, DEFAULT_WS_ENDPOINT_PATH),
        idle_timeout_s=idle_timeout,
        watchdog_tick_s=watchdog_tick,
        max_connection_duration_s=max_duration,
    )


def load_audio_settings() -> AudioSettings:
    block_samples = _int_env(ENV_AUDIO_BLOCK_SAMPLES, DEFAULT_AUDIO_BLOCK_SAMPLES)

    return AudioSettings(
        sample_rate_hz=_int_env(ENV_AUDIO_SAMPLE_RATE_HZ, DEFAULT_AUDIO_SAMPLE_RATE_HZ),
        block_samples=block_samples if block_samples > 0 else DEFAULT_AUDIO_BLOCK_SAMPLES,
        frame_queue_max=max(1, _int_env(ENV_AUDIO_FRAME_QUEUE_MAX, DEFAULT_AUDIO_FRAME_QUEUE_MAX)),
        input_device=_device_env(ENV_AUDIO_INPUT_DEVICE),
        output_device=_device_env(ENV_AUDIO_OUTPUT_DEVICE),
        echo_cancellation=_bool_env(ENV_AUDIO_ECHO_CANCELLATION, DEFAULT_AUDIO_ECHO_CANCELLATION),
        noise_suppression=_bool_env(ENV_AUDIO_NOISE_SUPPRESSION, DEFAULT_AUDIO_NOISE_SUPPRESSION),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        auth=_load_auth_settings(),
        server=_load_server_settings(),
        upstream=_load_upstream_settings(),
        session=_load_session_settings(),
        limits=_load_limits_settings(),
        websocket=_load_websocket_settings(),
        audio=load_audio_settings(),
    )


__all__ = ["load_audio_settings", "load_settings"]
