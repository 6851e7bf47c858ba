from __future__ import annotations

import asyncio
import struct

import pytest

from chief_relay.audio.codec import pcm16_to_wav, encode_pcm16_b64
from chief_relay.audio.player import SoundDevicePlayer
from chief_relay.audio.playback import PlaybackQueue
from tests.fakes import FakePlayer, FakeSoundDevice, eventually


def _frame(i: int) -> str:
    return encode_pcm16_b64(struct.pack("<2h", i, -i))


def _pcm(clip: bytes) -> bytes:
    return clip[44:]


@pytest.mark.asyncio
async def test_frames_play_in_arrival_order() -> None:
    player = FakePlayer()
    queue = PlaybackQueue(player)

    for i in range(16):
        queue.enqueue(_frame(i))
    assert queue.is_playing
    await asyncio.wait_for(queue.wait_idle(), timeout=1.0)

    assert [_pcm(c) for c in player.clips] == [struct.pack("<2h", i, -i) for i in range(16)]
    assert all(c[:4] == b"RIFF" for c in player.clips)
    assert queue.is_playing is False


@pytest.mark.asyncio
async def test_one_frame_plays_at_a_time() -> None:
    player = FakePlayer(manual=True)
    queue = PlaybackQueue(player)
    for i in range(3):
        queue.enqueue(_frame(i))

    await eventually(lambda: len(player.clips) == 1)
    await asyncio.sleep(0.02)
    assert len(player.clips) == 1
    assert len(queue) == 2

    player.release()
    await eventually(lambda: len(player.clips) == 2)
    player.release()
    await eventually(lambda: len(player.clips) == 3)
    player.release()
    await asyncio.wait_for(queue.wait_idle(), timeout=1.0)
    assert queue.is_playing is False


@pytest.mark.asyncio
async def test_clear_drops_pending_and_stops_current_clip() -> None:
    player = FakePlayer(manual=True)
    queue = PlaybackQueue(player)
    for i in range(5):
        queue.enqueue(_frame(i))
    await eventually(lambda: len(player.clips) == 1)

    queue.clear()
    queue.clear()
    assert queue.is_playing is False
    assert len(queue) == 0
    assert player.stop_calls == 2

    player.manual = False
    queue.enqueue(_frame(9))
    await asyncio.wait_for(queue.wait_idle(), timeout=1.0)
    assert _pcm(player.clips[-1]) == struct.pack("<2h", 9, -9)
    assert len(player.clips) == 2


@pytest.mark.asyncio
async def test_undecodable_or_failing_frames_are_skipped() -> None:
    player = FakePlayer(fail_on={1})
    queue = PlaybackQueue(player)

    queue.enqueue(_frame(0))
    queue.enqueue("%%% not base64 %%%")
    queue.enqueue(_frame(1))
    queue.enqueue(_frame(2))
    await asyncio.wait_for(queue.wait_idle(), timeout=1.0)

    # Index 1 is the second clip handed to the player, i.e. frame 1.
    assert [_pcm(c) for c in player.clips] == [struct.pack("<2h", i, -i) for i in range(3)]
    assert queue.skipped == 2
    assert queue.is_playing is False


@pytest.mark.asyncio
async def test_sounddevice_player_plays_decoded_clip() -> None:
    sd = FakeSoundDevice()
    player = SoundDevicePlayer(sd=sd)

    await player.play(pcm16_to_wav(struct.pack("<3h", 1, 2, 3)))
    [(data, rate)] = sd.played
    assert rate == 24000
    assert data.shape == (3, 1)
    assert data[:, 0].tolist() == [1, 2, 3]

    await player.play(pcm16_to_wav(b""))
    assert len(sd.played) == 1

    player.stop()
    assert sd.stop_calls == 1
