"""Main FastAPI server for the Chief voice relay."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket
from fastapi.responses import ORJSONResponse

from chief_relay.runtime.settings import load_settings
from chief_relay.runtime.logging import configure_logging
from chief_relay.runtime.dependencies import build_runtime_deps
from chief_relay.handlers.websocket.manager import handle_websocket_connection

logger = logging.getLogger(__name__)

configure_logging()

settings = load_settings()


@asynccontextmanager
async def _lifespan(app: FastAPI):
    runtime_deps = build_runtime_deps(settings)
    app.state.runtime_deps = runtime_deps
    logger.info(
        "runtime: ready (http port %s, websocket port %s, path %s)",
        settings.server.http_port,
        settings.server.ws_port,
        settings.websocket.endpoint_path,
    )
    try:
        yield
    finally:
        deps = getattr(app.state, "runtime_deps", None)
        if deps is not None:
            await deps.shutdown()


app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)


@app.get("/")
async def root() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.websocket(settings.websocket.endpoint_path)
async def websocket_endpoint(websocket: WebSocket) -> None:
    runtime_deps = getattr(app.state, "runtime_deps", None)
    if runtime_deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    await handle_websocket_connection(websocket, runtime_deps)


__all__ = ["app", "settings"]
