"""Error notices and safe-send helpers for client sockets."""

from __future__ import annotations

import logging
import contextlib
from typing import Any

import orjson
from fastapi import WebSocketDisconnect

from chief_relay.config.websocket import WS_KEY_TYPE, WS_TYPE_ERROR, WS_KEY_MESSAGE

logger = logging.getLogger(__name__)


def build_notice(msg_type: str, message: str) -> dict[str, Any]:
    return {WS_KEY_TYPE: msg_type, WS_KEY_MESSAGE: message}


def build_error_notice(message: str) -> dict[str, Any]:
    return build_notice(WS_TYPE_ERROR, message)


async def safe_send_text(ws: Any, text: str) -> bool:
    try:
        await ws.send_text(text)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket send failed", exc_info=True)
        return False
    return True


async def safe_send_bytes(ws: Any, data: bytes) -> bool:
    try:
        await ws.send_bytes(data)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket send failed", exc_info=True)
        return False
    return True


async def safe_send_notice(ws: Any, *, msg_type: str, message: str) -> bool:
    return await safe_send_text(ws, orjson.dumps(build_notice(msg_type, message)).decode("utf-8"))


async def send_error(ws: Any, message: str) -> bool:
    return await safe_send_notice(ws, msg_type=WS_TYPE_ERROR, message=message)


async def safe_close(ws: Any, *, code: int, reason: str = "") -> None:
    with contextlib.suppress(Exception):
        await ws.close(code=code, reason=reason)


async def reject_connection(ws: Any, *, message: str, close_code: int) -> None:
    # Accept so we can send a structured error, then close.
    try:
        await ws.accept()
    except Exception:
        # If accept fails, nothing else to do.
        return
    await send_error(ws, message)
    await safe_close(ws, code=close_code, reason=message)


__all__ = [
    "build_error_notice",
    "build_notice",
    "reject_connection",
    "safe_close",
    "safe_send_bytes",
    "safe_send_notice",
    "safe_send_text",
    "send_error",
]
