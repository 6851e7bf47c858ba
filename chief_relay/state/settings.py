"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AuthSettings:
    default_api_key: str


@dataclass(frozen=True, slots=True)
class ServerSettings:
    host: str
    http_port: int
    ws_port: int
    shutdown_timeout_s: float


@dataclass(frozen=True, slots=True)
class UpstreamSettings:
    url: str
    model: str
    beta_header: str
    connect_timeout_s: float
    max_message_bytes: int


@dataclass(frozen=True, slots=True)
class TurnDetectionSettings:
    type: str
    threshold: float
    prefix_padding_ms: int
    silence_duration_ms: int


@dataclass(frozen=True, slots=True)
class SessionSettings:
    modalities: tuple[str, ...]
    instructions: str
    voice: str
    input_audio_format: str
    output_audio_format: str
    transcription_model: str
    turn_detection: TurnDetectionSettings
    temperature: float
    max_response_output_tokens: int | str


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_concurrent_connections: int
    ws_message_window_seconds: float
    ws_max_messages_per_window: int


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    endpoint_path: str
    idle_timeout_s: float
    watchdog_tick_s: float
    max_connection_duration_s: float


@dataclass(frozen=True, slots=True)
class AudioSettings:
    sample_rate_hz: int
    block_samples: int
    frame_queue_max: int
    input_device: int | str | None
    output_device: int | str | None
    echo_cancellation: bool
    noise_suppression: bool


@dataclass(frozen=True, slots=True)
class AppSettings:
    auth: AuthSettings
    server: ServerSettings
    upstream: UpstreamSettings
    session: SessionSettings
    limits: LimitsSettings
    websocket: WebSocketSettings
    audio: AudioSettings


__all__ = [
    "AppSettings",
    "AudioSettings",
    "AuthSettings",
    "LimitsSettings",
    "ServerSettings",
    "SessionSettings",
    "TurnDetectionSettings",
    "UpstreamSettings",
    "WebSocketSettings",
]
