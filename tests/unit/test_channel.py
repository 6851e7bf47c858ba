from __future__ import annotations

import asyncio
import threading

import pytest

from chief_relay.audio.channel import FrameChannel


@pytest.mark.asyncio
async def test_full_channel_drops_oldest() -> None:
    channel = FrameChannel(maxsize=2)
    for frame in ("a", "b", "c"):
        channel.publish(frame)
    channel.close()

    assert [f async for f in channel] == ["b", "c"]
    assert channel.dropped == 1


@pytest.mark.asyncio
async def test_close_on_full_channel_keeps_buffered_frames() -> None:
    channel = FrameChannel(maxsize=3)
    for frame in ("a", "b", "c"):
        channel.publish(frame)
    channel.close()

    assert [f async for f in channel] == ["a", "b", "c"]
    assert channel.dropped == 0


@pytest.mark.asyncio
async def test_threadsafe_publish_reaches_consumer() -> None:
    channel = FrameChannel(maxsize=8)

    def _producer() -> None:
        for i in range(3):
            channel.publish_threadsafe(str(i))

    thread = threading.Thread(target=_producer)
    thread.start()
    thread.join()

    got = [await asyncio.wait_for(channel.get(), timeout=1.0) for _ in range(3)]
    assert got == ["0", "1", "2"]


@pytest.mark.asyncio
async def test_close_wakes_waiting_consumer_and_ignores_later_frames() -> None:
    channel = FrameChannel(maxsize=1)
    waiter = asyncio.create_task(channel.get())
    await asyncio.sleep(0)

    channel.close()
    channel.close()
    channel.publish("late")

    assert await asyncio.wait_for(waiter, timeout=1.0) is None
    assert await channel.get() is None
