"""Runtime dependency construction (upstream connector + admission control)."""

from __future__ import annotations

import logging

from chief_relay.state import RuntimeDeps
from chief_relay.realtime.bridge import RelayBridge
from chief_relay.state.settings import AppSettings
from chief_relay.realtime.upstream import UpstreamConnector
from chief_relay.handlers.connections import ConnectionManager

from .settings import load_settings

logger = logging.getLogger(__name__)


def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()

    connector = UpstreamConnector(settings.upstream)
    relay_bridge = RelayBridge(settings=settings, connector=connector)
    connections = ConnectionManager(max_connections=settings.limits.max_concurrent_connections)

    if not settings.auth.default_api_key:
        logger.warning("no server-side OpenAI API key configured; clients must supply their own")

    return RuntimeDeps(
        connections=connections,
        relay_bridge=relay_bridge,
        settings=settings,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
