from __future__ import annotations

import asyncio
from typing import Any

import pytest

from chief_relay.client import VoiceClient
from chief_relay.errors import AudioDeviceError, ClientNotConnectedError
from chief_relay.client.state import VoiceState, ConnectionState
from chief_relay.client.network import ws_url, build_relay_url, append_auth_query
from tests.fakes import FakePlayer, FakeConnect, event, eventually, make_settings


class _FakeCapture:
    instances: list[_FakeCapture] = []

    def __init__(self, settings: Any, *, channel: Any = None, fail: bool = False) -> None:
        self.channel = channel
        self.fail = fail
        self.started = False
        self.stop_calls = 0
        self.strategy = "fake"
        _FakeCapture.instances.append(self)

    def start(self) -> None:
        if self.fail:
            raise AudioDeviceError("permission denied")
        self.started = True

    def stop(self) -> None:
        self.stop_calls += 1


def _client(connect: FakeConnect, *, fail_capture: bool = False) -> tuple[VoiceClient, FakePlayer]:
    player = FakePlayer()
    client = VoiceClient(
        "ws://relay.test/?api_key=k",
        audio_settings=make_settings().audio,
        connect_fn=connect,
        capture_factory=lambda settings, channel: _FakeCapture(settings, channel=channel, fail=fail_capture),
        player=player,
    )
    return client, player


@pytest.mark.asyncio
async def test_connect_streams_mic_frames_and_plays_audio() -> None:
    connect = FakeConnect()
    relay = connect.upstream
    client, player = _client(connect)

    await client.connect()
    assert client.state.connection is ConnectionState.CONNECTED
    capture = _FakeCapture.instances[-1]
    assert capture.started

    capture.channel.publish("AAAA")
    await eventually(lambda: len(relay.sent) == 1)
    assert relay.sent_json() == [{"type": "input_audio_buffer.append", "audio": "AAAA"}]

    relay.push(event("response.audio.delta", delta="AQACAA=="))
    await eventually(lambda: len(player.clips) == 1)
    assert client.state.voice is VoiceState.SPEAKING

    await client.disconnect()
    assert capture.stop_calls == 1
    assert relay.close_calls == 1


@pytest.mark.asyncio
async def test_connect_twice_is_a_no_op() -> None:
    connect = FakeConnect()
    client, _ = _client(connect)
    await client.connect()
    await client.connect()
    assert len(connect.calls) == 1
    await client.disconnect()


@pytest.mark.asyncio
async def test_send_text_sends_item_then_response_create() -> None:
    connect = FakeConnect()
    client, _ = _client(connect)
    await client.connect()

    await client.send_text("Schedule lunch with Sam")

    item, create = connect.upstream.sent_json()
    assert item == {
        "type": "conversation.item.create",
        "item": {
            "type": "message",
            "role": "user",
            "content": [{"type": "input_text", "text": "Schedule lunch with Sam"}],
        },
    }
    assert create == {"type": "response.create"}
    assert [(m.role, m.text) for m in client.state.messages] == [("user", "Schedule lunch with Sam")]
    await client.disconnect()


@pytest.mark.asyncio
async def test_send_text_requires_connection() -> None:
    client, _ = _client(FakeConnect())
    with pytest.raises(ClientNotConnectedError):
        await client.send_text("hello")


@pytest.mark.asyncio
async def test_mic_failure_leaves_client_in_error_state() -> None:
    connect = FakeConnect()
    client, _ = _client(connect, fail_capture=True)

    with pytest.raises(AudioDeviceError):
        await client.connect()
    assert client.state.connection is ConnectionState.ERROR
    assert client.state.last_error == "permission denied"
    assert connect.upstream.close_calls == 1


@pytest.mark.asyncio
async def test_relay_close_marks_client_disconnected() -> None:
    connect = FakeConnect()
    client, _ = _client(connect)
    await client.connect()

    connect.upstream.push(event("error", message="OpenAI connection closed: 1011"))
    connect.upstream.drop(1011)
    await asyncio.wait_for(client.wait_closed(), timeout=1.0)

    assert client.state.connection is ConnectionState.DISCONNECTED
    assert client.state.last_error == "OpenAI connection closed: 1011"
    assert _FakeCapture.instances[-1].stop_calls == 1

    await client.disconnect()
    await client.disconnect()


def test_relay_url_helpers() -> None:
    assert ws_url("localhost:3002") == "ws://localhost:3002/"
    assert ws_url("https://relay.example.com") == "wss://relay.example.com/"
    assert ws_url("ws://relay.example.com/voice") == "ws://relay.example.com/voice"
    assert append_auth_query("ws://h/?a=1", "k") == "ws://h/?a=1&api_key=k"
    assert append_auth_query("ws://h/?api_key=old", "new") == "ws://h/?api_key=old"
    assert append_auth_query("ws://h/?api_key=old", "new", override=True) == "ws://h/?api_key=new"
    assert build_relay_url("localhost:3002", api_key="sk") == "ws://localhost:3002/?api_key=sk"
    assert build_relay_url("localhost:3002") == "ws://localhost:3002/"
