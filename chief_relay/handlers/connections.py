"""WebSocket connection admission control and live-session registry."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class Closable(Protocol):
    async def close(self) -> None: ...


class ConnectionManager:
    def __init__(self, *, max_connections: int) -> None:
        self._max = max(1, int(max_connections))
        self._lock = asyncio.Lock()
        self._active: dict[int, Closable | None] = {}

    async def connect(self, ws: Any) -> bool:
        """Attempt to admit a websocket connection (without accepting it)."""
        key = id(ws)
        async with self._lock:
            if len(self._active) >= self._max:
                return False
            self._active[key] = None
            return True

    async def attach(self, ws: Any, session: Closable) -> None:
        """Bind the relay session serving an admitted websocket, for shutdown."""
        async with self._lock:
            if id(ws) in self._active:
                self._active[id(ws)] = session

    async def disconnect(self, ws: Any) -> None:
        key = id(ws)
        async with self._lock:
            self._active.pop(key, None)

    def get_connection_count(self) -> int:
        return len(self._active)

    async def close_all(self, *, timeout_s: float) -> None:
        """Close every live session, waiting at most `timeout_s` seconds."""
        async with self._lock:
            sessions = [s for s in self._active.values() if s is not None]
        if not sessions:
            return
        logger.info("closing %d live session(s)", len(sessions))
        try:
            async with asyncio.timeout(timeout_s):
                await asyncio.gather(*(s.close() for s in sessions), return_exceptions=True)
        except TimeoutError:
            logger.warning("timed out after %.1fs closing live sessions", timeout_s)


__all__ = ["ConnectionManager"]
