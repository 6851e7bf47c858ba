from __future__ import annotations

import pytest
from websockets.exceptions import InvalidURI

from chief_relay.errors import UpstreamConnectError
from chief_relay.realtime.upstream import UpstreamConnector
from tests.fakes import FakeConnect, make_settings


def test_url_keeps_existing_query_and_sets_model() -> None:
    settings = make_settings()
    upstream = settings.upstream.__class__(
        url="wss://proxy.test/v1/realtime?region=eu",
        model="gpt-4o-realtime-preview-2024-10-01",
        beta_header="realtime=v1",
        connect_timeout_s=10.0,
        max_message_bytes=1024,
    )
    url = UpstreamConnector(upstream).build_url()
    assert url == "wss://proxy.test/v1/realtime?region=eu&model=gpt-4o-realtime-preview-2024-10-01"


@pytest.mark.asyncio
async def test_connect_passes_auth_headers_and_limits() -> None:
    connect = FakeConnect()
    connector = UpstreamConnector(make_settings().upstream, connect_fn=connect)

    socket = await connector.connect("sk-abc")

    assert socket is connect.upstream
    [(url, kwargs)] = connect.calls
    assert url.endswith("?model=test-model")
    assert kwargs["additional_headers"] == {"Authorization": "Bearer sk-abc", "OpenAI-Beta": "realtime=v1"}
    assert kwargs["open_timeout"] == 1.0
    assert kwargs["max_size"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (TimeoutError(), "timed out after 1.0s"),
        (ConnectionRefusedError("refused"), "refused"),
        (InvalidURI("nope", "bad uri"), "bad uri"),
    ],
)
async def test_connect_failures_become_upstream_connect_error(error: BaseException, expected: str) -> None:
    connector = UpstreamConnector(make_settings().upstream, connect_fn=FakeConnect(error=error))
    with pytest.raises(UpstreamConnectError) as exc:
        await connector.connect("sk-abc")
    assert expected in str(exc.value)
