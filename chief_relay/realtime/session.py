"""One client socket bridged to one upstream Realtime socket.

The session owns both sockets. Messages cross in either direction unchanged,
except for a single `session.update` injected upstream after the upstream
announces `session.created`. Either side closing tears the whole session
down; there is no reconnect.
"""

from __future__ import annotations

import uuid
import asyncio
import logging
import contextlib
from typing import Any

from websockets.exceptions import ConnectionClosed

from chief_relay.errors import UpstreamConnectError
from chief_relay.state import SessionPhase, RelaySessionState
from chief_relay.handlers.websocket.lifecycle import SessionLifecycle
from chief_relay.handlers.websocket.limits import consume_limiter, build_message_limiter
from chief_relay.state.settings import LimitsSettings, SessionSettings, WebSocketSettings
from chief_relay.handlers.websocket.errors import (
    safe_close,
    send_error,
    safe_send_text,
    safe_send_bytes,
    safe_send_notice,
)
from chief_relay.config.websocket import (
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_INTERNAL_ERROR_CODE,
    WS_TYPE_CONNECTION_ESTABLISHED,
    WS_MESSAGE_CONNECTION_ESTABLISHED,
)

from .upstream import UpstreamConnector
from .session_config import encode_session_update
from .events import Malformed, SessionCreated, UpstreamError, parse_event

logger = logging.getLogger(__name__)


def _close_details(exc: ConnectionClosed) -> tuple[int, str]:
    frame = exc.rcvd or exc.sent
    if frame is None:
        return 1006, ""
    return frame.code, frame.reason


def _message_from_asgi(message: dict[str, Any]) -> str | bytes | None:
    text = message.get("text")
    if text is not None:
        return text
    return message.get("bytes")


class RelaySession:
    def __init__(
        self,
        *,
        client: Any,
        api_key: str,
        connector: UpstreamConnector,
        session_settings: SessionSettings,
        limits: LimitsSettings,
        websocket_settings: WebSocketSettings,
        session_id: str | None = None,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._connector = connector
        self._session_update = encode_session_update(session_settings)
        self._limiter = build_message_limiter(
            limit=limits.ws_max_messages_per_window,
            window_seconds=limits.ws_message_window_seconds,
        )
        self._lifecycle = SessionLifecycle(
            self._on_expire,
            idle_timeout_s=websocket_settings.idle_timeout_s,
            watchdog_tick_s=websocket_settings.watchdog_tick_s,
            max_connection_duration_s=websocket_settings.max_connection_duration_s,
        )
        self._upstream: Any = None
        self.state = RelaySessionState(session_id=session_id or uuid.uuid4().hex[:12])

    @property
    def session_id(self) -> str:
        return self.state.session_id

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    async def run(self) -> None:
        """Drive the session until either side goes away."""
        logger.info("session %s: using API key with length %d", self.session_id, len(self._api_key))
        self._lifecycle.start()
        client_task = asyncio.create_task(self._client_pump(), name=f"relay-client-{self.session_id}")
        connect_task = asyncio.create_task(self._open_upstream(), name=f"relay-connect-{self.session_id}")
        tasks = {client_task, connect_task}
        try:
            done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
            if connect_task not in done or not connect_task.result():
                return

            upstream_task = asyncio.create_task(self._upstream_pump(), name=f"relay-upstream-{self.session_id}")
            tasks.add(upstream_task)
            await asyncio.wait({client_task, upstream_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            await self.close()
            for task in tasks:
                if not task.done():
                    task.cancel()
            for task in tasks:
                with contextlib.suppress(BaseException):
                    await task
            logger.info(
                "session %s closed: to_upstream=%d to_client=%d dropped=%d",
                self.session_id,
                self.state.forwarded_to_upstream,
                self.state.forwarded_to_client,
                self.state.dropped,
            )

    # ------------------------------------------------------------------
    # Forwarding
    # ------------------------------------------------------------------

    async def forward_client_to_upstream(self, message: str | bytes) -> bool:
        self._lifecycle.touch()
        event = parse_event(message)
        if isinstance(event, Malformed):
            logger.warning("session %s: dropping malformed client message: %s", self.session_id, event.reason)
            self.state.dropped += 1
            return False

        upstream = self._upstream
        if upstream is None or not self.state.upstream_open:
            logger.warning("session %s: upstream not ready, dropping client %s", self.session_id, event.type)
            self.state.dropped += 1
            return False

        if not await consume_limiter(self._client, self._limiter):
            self.state.dropped += 1
            return False

        logger.debug("session %s: client -> upstream %s", self.session_id, event.type)
        try:
            await upstream.send(message)
        except ConnectionClosed:
            # The upstream pump reports the close to the client.
            logger.debug("session %s: upstream closed while forwarding", self.session_id)
            self.state.dropped += 1
            return False
        self.state.forwarded_to_upstream += 1
        return True

    async def forward_upstream_to_client(self, message: str | bytes) -> bool:
        self._lifecycle.touch()
        event = parse_event(message)
        if isinstance(event, Malformed):
            logger.warning("session %s: dropping malformed upstream message: %s", self.session_id, event.reason)
            self.state.dropped += 1
            return False

        if isinstance(event, SessionCreated):
            await self._inject_session_update()
        elif isinstance(event, UpstreamError):
            logger.warning("session %s: upstream error event: %s", self.session_id, event.message)
        else:
            logger.debug("session %s: upstream -> client %s", self.session_id, event.type)

        if not self.state.client_open:
            self.state.dropped += 1
            return False
        send = safe_send_text if isinstance(message, str) else safe_send_bytes
        if not await send(self._client, message):
            self.state.dropped += 1
            return False
        self.state.forwarded_to_client += 1
        return True

    async def _inject_session_update(self) -> None:
        if self.state.config_sent:
            logger.debug("session %s: replayed session.created ignored", self.session_id)
            return
        # Set before the first await so no later session.created can re-enter.
        self.state.config_sent = True
        self.state.phase = SessionPhase.AWAITING_CONFIG_ACK
        logger.info("session %s: session created, sending session update", self.session_id)
        try:
            await self._upstream.send(self._session_update)
        except ConnectionClosed:
            logger.warning("session %s: upstream closed before session update was sent", self.session_id)
            return
        if not self.state.is_closing:
            self.state.phase = SessionPhase.RELAYING

    # ------------------------------------------------------------------
    # Pumps
    # ------------------------------------------------------------------

    async def _open_upstream(self) -> bool:
        try:
            upstream = await self._connector.connect(self._api_key)
        except UpstreamConnectError as exc:
            logger.warning("session %s: upstream connect failed: %s", self.session_id, exc)
            await self._fail(f"Failed to connect to OpenAI: {exc}", code=WS_CLOSE_INTERNAL_ERROR_CODE)
            return False

        self._upstream = upstream
        if self.state.is_closing:
            with contextlib.suppress(Exception):
                await upstream.close()
            return False

        self.state.upstream_open = True
        self.state.phase = SessionPhase.UPSTREAM_OPEN
        logger.info("session %s: connected upstream", self.session_id)
        await safe_send_notice(
            self._client,
            msg_type=WS_TYPE_CONNECTION_ESTABLISHED,
            message=WS_MESSAGE_CONNECTION_ESTABLISHED,
        )
        return True

    async def _client_pump(self) -> None:
        while True:
            message = await self._client.receive()
            if message.get("type") == "websocket.disconnect":
                logger.info("session %s: client disconnected (code=%s)", self.session_id, message.get("code"))
                self.state.client_open = False
                return
            data = _message_from_asgi(message)
            if data is None:
                continue
            await self.forward_client_to_upstream(data)

    async def _upstream_pump(self) -> None:
        upstream = self._upstream
        try:
            async for message in upstream:
                await self.forward_upstream_to_client(message)
        except ConnectionClosed as exc:
            code, reason = _close_details(exc)
            logger.info("session %s: upstream closed code=%s reason=%s", self.session_id, code, reason)
            await self._fail(f"OpenAI connection closed: {reason or code}", code=WS_CLOSE_INTERNAL_ERROR_CODE)
            return
        except Exception as exc:
            logger.exception("session %s: upstream socket error", self.session_id)
            await self._fail(f"OpenAI connection error: {exc}", code=WS_CLOSE_INTERNAL_ERROR_CODE)
            return

        self.state.upstream_open = False
        code = getattr(upstream, "close_code", None)
        reason = getattr(upstream, "close_reason", None) or ""
        logger.info("session %s: upstream closed code=%s reason=%s", self.session_id, code, reason)
        await self._fail(f"OpenAI connection closed: {reason or code}", code=WS_CLOSE_NORMAL_CODE)

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    async def _fail(self, message: str, *, code: int) -> None:
        """Tell the client why the session is ending, then end it."""
        if self.state.is_closing:
            return
        if self.state.client_open:
            await send_error(self._client, message)
        await self.close(code=code)

    async def _on_expire(self, code: int, reason: str) -> None:
        await self.close(code=code, reason=reason)

    async def close(self, *, code: int = WS_CLOSE_NORMAL_CODE, reason: str = "") -> None:
        """Close both sockets. Safe to call any number of times."""
        if self.state.is_closing:
            return
        self.state.phase = SessionPhase.CLOSING
        await self._lifecycle.stop()

        upstream = self._upstream
        if upstream is not None:
            self.state.upstream_open = False
            with contextlib.suppress(Exception):
                await upstream.close()

        if self.state.client_open:
            self.state.client_open = False
            await safe_close(self._client, code=code, reason=reason)

        self.state.phase = SessionPhase.CLOSED


__all__ = ["RelaySession"]
