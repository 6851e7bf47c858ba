"""Per-session lifecycle watchdog (idle and max-duration enforcement)."""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib
from collections.abc import Callable, Awaitable

from chief_relay.config.websocket import (
    WS_CLOSE_IDLE_CODE,
    WS_CLOSE_IDLE_REASON,
    WS_CLOSE_MAX_DURATION_CODE,
    WS_CLOSE_MAX_DURATION_REASON,
)

logger = logging.getLogger(__name__)

ExpireFn = Callable[[int, str], Awaitable[None]]


class SessionLifecycle:
    def __init__(
        self,
        on_expire: ExpireFn,
        *,
        idle_timeout_s: float,
        watchdog_tick_s: float,
        max_connection_duration_s: float = 0.0,
    ) -> None:
        self._on_expire = on_expire
        self._idle_timeout_s = float(idle_timeout_s)
        self._watchdog_tick_s = max(0.001, float(watchdog_tick_s))
        self._max_connection_duration_s = float(max_connection_duration_s)
        self._connection_start = time.monotonic()
        self._last_activity = time.monotonic()
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None

    def touch(self) -> None:
        self._last_activity = time.monotonic()

    def expired(self) -> bool:
        return self._stop_event.is_set()

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self._watchdog_loop())
        return self._task

    async def stop(self) -> None:
        self._stop_event.set()
        task, self._task = self._task, None
        if task is None or task is asyncio.current_task():
            return
        task.cancel()
        with contextlib.suppress(BaseException):
            await task

    async def _expire(self, code: int, reason: str) -> None:
        self._stop_event.set()
        try:
            await self._on_expire(code, reason)
        except Exception:
            logger.debug("session expiry callback failed", exc_info=True)

    async def _watchdog_loop(self) -> None:
        try:
            while not self._stop_event.is_set():
                await asyncio.sleep(self._watchdog_tick_s)
                if self._stop_event.is_set():
                    break
                now = time.monotonic()
                if (
                    self._max_connection_duration_s > 0
                    and (now - self._connection_start) >= self._max_connection_duration_s
                ):
                    logger.info("session max duration reached; closing connection")
                    await self._expire(WS_CLOSE_MAX_DURATION_CODE, WS_CLOSE_MAX_DURATION_REASON)
                    break
                if self._idle_timeout_s > 0 and (now - self._last_activity) >= self._idle_timeout_s:
                    logger.info("session idle timeout reached; closing connection")
                    await self._expire(WS_CLOSE_IDLE_CODE, WS_CLOSE_IDLE_REASON)
                    break
        except asyncio.CancelledError:
            return


__all__ = ["SessionLifecycle"]
