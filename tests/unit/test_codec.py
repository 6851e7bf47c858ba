from __future__ import annotations

import base64
import struct

import numpy as np
import orjson
import pytest

from chief_relay.audio.codec import (
    pcm16_to_wav,
    wav_to_pcm16,
    decode_pcm16_b64,
    float32_to_pcm16,
    build_append_event,
    encode_audio_frame,
)


def test_float_conversion_is_asymmetric_and_clipped() -> None:
    pcm = float32_to_pcm16(np.array([-1.0, 0.0, 1.0, 2.0, -3.0, 0.5], dtype=np.float32))
    assert struct.unpack("<6h", pcm) == (-32768, 0, 32767, 32767, -32768, 16383)


def test_encoded_frame_is_base64_of_little_endian_pcm() -> None:
    frame = encode_audio_frame([0.0, 1.0])
    assert base64.b64decode(frame) == b"\x00\x00\xff\x7f"


def test_decode_rejects_invalid_base64() -> None:
    with pytest.raises(ValueError):
        decode_pcm16_b64("not base64!!")


def test_wav_header_describes_24k_mono_pcm16() -> None:
    pcm = b"\x01\x00\x02\x00"
    clip = pcm16_to_wav(pcm)

    assert len(clip) == 44 + len(pcm)
    assert clip[:4] == b"RIFF" and clip[8:12] == b"WAVE" and clip[36:40] == b"data"
    (riff_size,) = struct.unpack_from("<I", clip, 4)
    assert riff_size == 36 + len(pcm)
    channels, rate, byte_rate, block_align, bits = struct.unpack_from("<HIIHH", clip, 22)
    assert (channels, rate, byte_rate, block_align, bits) == (1, 24000, 48000, 2, 16)
    (data_size,) = struct.unpack_from("<I", clip, 40)
    assert data_size == len(pcm)

    assert wav_to_pcm16(clip) == (pcm, 24000, 1)


def test_wav_parser_rejects_truncated_clips() -> None:
    with pytest.raises(ValueError):
        wav_to_pcm16(b"RIFF")


def test_append_event_shape() -> None:
    assert orjson.loads(build_append_event("AAAA")) == {"type": "input_audio_buffer.append", "audio": "AAAA"}
