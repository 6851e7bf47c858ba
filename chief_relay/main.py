"""Process entry point: one app served on the HTTP and WebSocket ports."""

from __future__ import annotations

import socket
import asyncio
import logging

import uvicorn

from chief_relay.server import app, settings

logger = logging.getLogger(__name__)


def _bind_socket(host: str, port: int) -> socket.socket:
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family=family, type=socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    sock.set_inheritable(True)
    return sock


def build_server() -> tuple[uvicorn.Server, list[socket.socket]]:
    server_settings = settings.server
    ports = [server_settings.http_port]
    if server_settings.ws_port != server_settings.http_port:
        ports.append(server_settings.ws_port)

    sockets = [_bind_socket(server_settings.host, port) for port in ports]
    config = uvicorn.Config(
        app,
        log_config=None,
        timeout_graceful_shutdown=max(1, int(server_settings.shutdown_timeout_s)),
    )
    return uvicorn.Server(config), sockets


def main() -> None:
    server, sockets = build_server()
    for sock in sockets:
        host, port = sock.getsockname()[:2]
        logger.info("listening on %s:%s", host, port)
    try:
        asyncio.run(server.serve(sockets=sockets))
    finally:
        for sock in sockets:
            sock.close()


if __name__ == "__main__":
    main()
