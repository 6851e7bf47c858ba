"""Client-side audio configuration (env names and defaults only)."""

from __future__ import annotations

ENV_AUDIO_SAMPLE_RATE_HZ = "AUDIO_SAMPLE_RATE_HZ"
ENV_AUDIO_BLOCK_SAMPLES = "AUDIO_BLOCK_SAMPLES"
ENV_AUDIO_FRAME_QUEUE_MAX = "AUDIO_FRAME_QUEUE_MAX"
ENV_AUDIO_INPUT_DEVICE = "AUDIO_INPUT_DEVICE"
ENV_AUDIO_OUTPUT_DEVICE = "AUDIO_OUTPUT_DEVICE"
ENV_AUDIO_ECHO_CANCELLATION = "AUDIO_ECHO_CANCELLATION"
ENV_AUDIO_NOISE_SUPPRESSION = "AUDIO_NOISE_SUPPRESSION"

# The Realtime API speaks PCM16 mono at 24kHz in both directions.
DEFAULT_AUDIO_SAMPLE_RATE_HZ = 24000
AUDIO_CHANNELS = 1
AUDIO_SAMPLE_WIDTH_BYTES = 2
DEFAULT_AUDIO_BLOCK_SAMPLES = 4096
DEFAULT_AUDIO_FRAME_QUEUE_MAX = 64
DEFAULT_AUDIO_ECHO_CANCELLATION = True
DEFAULT_AUDIO_NOISE_SUPPRESSION = True

WAV_HEADER_BYTES = 44

# Client event carrying microphone audio.
AUDIO_APPEND_EVENT_TYPE = "input_audio_buffer.append"
AUDIO_APPEND_KEY = "audio"

__all__ = [
    "AUDIO_APPEND_EVENT_TYPE",
    "AUDIO_APPEND_KEY",
    "AUDIO_CHANNELS",
    "AUDIO_SAMPLE_WIDTH_BYTES",
    "DEFAULT_AUDIO_BLOCK_SAMPLES",
    "DEFAULT_AUDIO_ECHO_CANCELLATION",
    "DEFAULT_AUDIO_FRAME_QUEUE_MAX",
    "DEFAULT_AUDIO_NOISE_SUPPRESSION",
    "DEFAULT_AUDIO_SAMPLE_RATE_HZ",
    "ENV_AUDIO_BLOCK_SAMPLES",
    "ENV_AUDIO_ECHO_CANCELLATION",
    "ENV_AUDIO_FRAME_QUEUE_MAX",
    "ENV_AUDIO_INPUT_DEVICE",
    "ENV_AUDIO_NOISE_SUPPRESSION",
    "ENV_AUDIO_OUTPUT_DEVICE",
    "ENV_AUDIO_SAMPLE_RATE_HZ",
    "WAV_HEADER_BYTES",
]
