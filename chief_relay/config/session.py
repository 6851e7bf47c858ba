"""Realtime session configuration injected after `session.created`."""

from __future__ import annotations

ENV_SESSION_INSTRUCTIONS = "SESSION_INSTRUCTIONS"
ENV_SESSION_VOICE = "SESSION_VOICE"
ENV_SESSION_INPUT_AUDIO_FORMAT = "SESSION_INPUT_AUDIO_FORMAT"
ENV_SESSION_OUTPUT_AUDIO_FORMAT = "SESSION_OUTPUT_AUDIO_FORMAT"
ENV_SESSION_TRANSCRIPTION_MODEL = "SESSION_TRANSCRIPTION_MODEL"
ENV_SESSION_VAD_THRESHOLD = "SESSION_VAD_THRESHOLD"
ENV_SESSION_VAD_PREFIX_PADDING_MS = "SESSION_VAD_PREFIX_PADDING_MS"
ENV_SESSION_VAD_SILENCE_DURATION_MS = "SESSION_VAD_SILENCE_DURATION_MS"
ENV_SESSION_TEMPERATURE = "SESSION_TEMPERATURE"
ENV_SESSION_MAX_RESPONSE_OUTPUT_TOKENS = "SESSION_MAX_RESPONSE_OUTPUT_TOKENS"

DEFAULT_SESSION_MODALITIES: tuple[str, ...] = ("text", "audio")

DEFAULT_SESSION_INSTRUCTIONS = """You are Chief, an AI executive assistant. You help busy professionals manage their day efficiently.

Key capabilities:
- Calendar management and scheduling
- Email prioritization and drafting
- Task organization and reminders
- Meeting preparation and follow-ups
- Daily briefings and summaries

Personality:
- Professional yet approachable
- Concise but thorough
- Proactive in suggesting improvements
- Always respectful of time
- Confident in handling executive-level tasks

Remember to be helpful, efficient, and speak naturally as if you're a trusted assistant who knows the user's preferences and work style."""

DEFAULT_SESSION_VOICE = "alloy"
DEFAULT_SESSION_INPUT_AUDIO_FORMAT = "pcm16"
DEFAULT_SESSION_OUTPUT_AUDIO_FORMAT = "pcm16"
DEFAULT_SESSION_TRANSCRIPTION_MODEL = "whisper-1"

DEFAULT_SESSION_TURN_DETECTION_TYPE = "server_vad"
DEFAULT_SESSION_VAD_THRESHOLD = 0.5
DEFAULT_SESSION_VAD_PREFIX_PADDING_MS = 300
DEFAULT_SESSION_VAD_SILENCE_DURATION_MS = 1000

DEFAULT_SESSION_TEMPERATURE = 0.8
# "inf" is the upstream's marker for an unbounded response length.
DEFAULT_SESSION_MAX_RESPONSE_OUTPUT_TOKENS = "inf"

__all__ = [
    "DEFAULT_SESSION_INPUT_AUDIO_FORMAT",
    "DEFAULT_SESSION_INSTRUCTIONS",
    "DEFAULT_SESSION_MAX_RESPONSE_OUTPUT_TOKENS",
    "DEFAULT_SESSION_MODALITIES",
    "DEFAULT_SESSION_OUTPUT_AUDIO_FORMAT",
    "DEFAULT_SESSION_TEMPERATURE",
    "DEFAULT_SESSION_TRANSCRIPTION_MODEL",
    "DEFAULT_SESSION_TURN_DETECTION_TYPE",
    "DEFAULT_SESSION_VAD_PREFIX_PADDING_MS",
    "DEFAULT_SESSION_VAD_SILENCE_DURATION_MS",
    "DEFAULT_SESSION_VAD_THRESHOLD",
    "DEFAULT_SESSION_VOICE",
    "ENV_SESSION_INPUT_AUDIO_FORMAT",
    "ENV_SESSION_INSTRUCTIONS",
    "ENV_SESSION_MAX_RESPONSE_OUTPUT_TOKENS",
    "ENV_SESSION_OUTPUT_AUDIO_FORMAT",
    "ENV_SESSION_TEMPERATURE",
    "ENV_SESSION_TRANSCRIPTION_MODEL",
    "ENV_SESSION_VAD_PREFIX_PADDING_MS",
    "ENV_SESSION_VAD_SILENCE_DURATION_MS",
    "ENV_SESSION_VAD_THRESHOLD",
    "ENV_SESSION_VOICE",
]
