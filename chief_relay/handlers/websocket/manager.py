"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket

from chief_relay.state import RuntimeDeps
from chief_relay.config.websocket import (
    WS_CLOSE_BUSY_CODE,
    WS_MESSAGE_MISSING_API_KEY,
    WS_CLOSE_UNAUTHORIZED_CODE,
    WS_MESSAGE_SERVER_AT_CAPACITY,
)

from .auth import resolve_api_key
from .errors import reject_connection

logger = logging.getLogger(__name__)


async def _prepare_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> str | None:
    api_key = resolve_api_key(ws, default_api_key=runtime_deps.settings.auth.default_api_key)
    if not api_key:
        logger.warning("rejecting WebSocket connection: no API key")
        await reject_connection(ws, message=WS_MESSAGE_MISSING_API_KEY, close_code=WS_CLOSE_UNAUTHORIZED_CODE)
        return None

    if not await runtime_deps.connections.connect(ws):
        logger.warning("rejecting WebSocket connection: server at capacity")
        await reject_connection(ws, message=WS_MESSAGE_SERVER_AT_CAPACITY, close_code=WS_CLOSE_BUSY_CODE)
        return None

    try:
        await ws.accept()
    except Exception:
        with contextlib.suppress(Exception):
            await runtime_deps.connections.disconnect(ws)
        raise
    return api_key


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    session_id: str | None = None
    api_key = await _prepare_connection(ws, runtime_deps)
    if api_key is None:
        return

    try:
        session = runtime_deps.relay_bridge.new_session(ws, api_key)
        session_id = session.session_id
        await runtime_deps.connections.attach(ws, session)
        logger.info(
            "WebSocket connection accepted session_id=%s. Active: %s",
            session_id,
            runtime_deps.connections.get_connection_count(),
        )
        await session.run()
    finally:
        with contextlib.suppress(Exception):
            await runtime_deps.connections.disconnect(ws)
        logger.info(
            "WebSocket connection closed session_id=%s. Active: %s",
            session_id,
            runtime_deps.connections.get_connection_count(),
        )


__all__ = ["handle_websocket_connection"]
