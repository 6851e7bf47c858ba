"""Factory for per-connection relay sessions."""

from __future__ import annotations

from typing import Any

from chief_relay.state.settings import AppSettings

from .session import RelaySession
from .upstream import UpstreamConnector


class RelayBridge:
    def __init__(self, *, settings: AppSettings, connector: UpstreamConnector) -> None:
        self._settings = settings
        self._connector = connector

    def new_session(self, ws: Any, api_key: str) -> RelaySession:
        return RelaySession(
            client=ws,
            api_key=api_key,
            connector=self._connector,
            session_settings=self._settings.session,
            limits=self._settings.limits,
            websocket_settings=self._settings.websocket,
        )


__all__ = ["RelayBridge"]
