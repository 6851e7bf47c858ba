"""PCM16 / base64 / WAV conversions for Realtime audio frames.

Wire audio is 16-bit signed little-endian PCM, mono, 24kHz. Frames travel
base64-encoded inside JSON events; playback wraps them in a 44-byte RIFF
header so a generic decoder can treat each frame as a standalone clip.
"""

from __future__ import annotations

import base64
import struct
import binascii
from typing import Any

import numpy as np
import orjson

from chief_relay.config.audio import (
    AUDIO_CHANNELS,
    AUDIO_APPEND_KEY,
    WAV_HEADER_BYTES,
    AUDIO_APPEND_EVENT_TYPE,
    AUDIO_SAMPLE_WIDTH_BYTES,
    DEFAULT_AUDIO_SAMPLE_RATE_HZ,
)

_WAV_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")


def float32_to_pcm16(samples: Any) -> bytes:
    """Convert float samples in [-1, 1] to PCM16 LE bytes.

    Out-of-range input is clipped. Negative values scale by 0x8000 and
    positive values by 0x7FFF so both -1.0 and 1.0 map to the int16 limits.
    """
    x = np.clip(np.asarray(samples, dtype=np.float32).reshape(-1), -1.0, 1.0)
    scaled = np.where(x < 0, x * 32768.0, x * 32767.0)
    return scaled.astype("<i2").tobytes()


def pcm16_to_float32(pcm: bytes) -> np.ndarray:
    usable = len(pcm) - (len(pcm) % AUDIO_SAMPLE_WIDTH_BYTES)
    ints = np.frombuffer(pcm[:usable], dtype="<i2")
    return ints.astype(np.float32) / 32768.0


def encode_pcm16_b64(pcm: bytes) -> str:
    return base64.b64encode(pcm).decode("ascii")


def decode_pcm16_b64(data: str) -> bytes:
    """Decode a base64 frame; raises ValueError on malformed input."""
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, TypeError) as exc:
        raise ValueError(f"invalid base64 audio frame: {exc}") from exc


def encode_audio_frame(samples: Any) -> str:
    """Float microphone block -> base64 PCM16 frame."""
    return encode_pcm16_b64(float32_to_pcm16(samples))


def pcm16_to_wav(
    pcm: bytes,
    *,
    sample_rate_hz: int = DEFAULT_AUDIO_SAMPLE_RATE_HZ,
    channels: int = AUDIO_CHANNELS,
) -> bytes:
    bits = AUDIO_SAMPLE_WIDTH_BYTES * 8
    block_align = channels * AUDIO_SAMPLE_WIDTH_BYTES
    header = _WAV_HEADER.pack(
        b"RIFF",
        36 + len(pcm),
        b"WAVE",
        b"fmt ",
        16,
        1,
        channels,
        sample_rate_hz,
        sample_rate_hz * block_align,
        block_align,
        bits,
        b"data",
        len(pcm),
    )
    return header + pcm


def wav_to_pcm16(clip: bytes) -> tuple[bytes, int, int]:
    """Parse a clip built by `pcm16_to_wav`; returns (pcm, sample_rate_hz, channels)."""
    if len(clip) < WAV_HEADER_BYTES:
        raise ValueError("clip shorter than WAV header")
    riff, _, wave, fmt, _, audio_format, channels, rate, _, _, bits, data, size = _WAV_HEADER.unpack_from(clip)
    if (riff, wave, fmt, data) != (b"RIFF", b"WAVE", b"fmt ", b"data"):
        raise ValueError("not a canonical PCM WAV clip")
    if audio_format != 1 or bits != AUDIO_SAMPLE_WIDTH_BYTES * 8:
        raise ValueError(f"unsupported WAV encoding (format={audio_format}, bits={bits})")
    return clip[WAV_HEADER_BYTES : WAV_HEADER_BYTES + size], rate, channels


def build_append_event(frame_b64: str) -> str:
    return orjson.dumps({"type": AUDIO_APPEND_EVENT_TYPE, AUDIO_APPEND_KEY: frame_b64}).decode("utf-8")


__all__ = [
    "build_append_event",
    "decode_pcm16_b64",
    "encode_audio_frame",
    "encode_pcm16_b64",
    "float32_to_pcm16",
    "pcm16_to_float32",
    "pcm16_to_wav",
    "wav_to_pcm16",
]
