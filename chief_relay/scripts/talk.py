#!/usr/bin/env python3
"""Talk to the relay from a terminal using the local microphone and speakers.

Type a line and press enter to send it as a text message; /quit or EOF exits.
"""

from __future__ import annotations

import os
import sys
import asyncio
import argparse
import logging
import threading
import contextlib
from typing import Any

from chief_relay.client import VoiceClient, build_relay_url
from chief_relay.client.state import VoiceClientState
from chief_relay.config.secrets import ENV_OPENAI_API_KEY
from chief_relay.runtime.logging import configure_logging
from chief_relay.client.network import DEFAULT_SERVER
from chief_relay.runtime.settings import load_audio_settings

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Voice session against the Chief relay")
    p.add_argument("--server", default=DEFAULT_SERVER, help="relay host:port or ws(s):// URL")
    p.add_argument("--secure", action="store_true", help="use wss:// for bare host:port servers")
    p.add_argument(
        "--api-key",
        default=os.getenv(ENV_OPENAI_API_KEY) or None,
        help=f"OpenAI API key (default: ${ENV_OPENAI_API_KEY}; omit to use the relay's key)",
    )
    p.add_argument("--debug", action="store_true", help="log every relay event")
    return p.parse_args(argv)


def _printer(debug: bool):
    def _on_update(event: dict[str, Any], state: VoiceClientState) -> None:
        msg_type = event.get("type")
        if debug:
            print(f"<< {msg_type}")
        if msg_type in {"response.audio_transcript.done", "conversation.item.input_audio_transcription.completed"}:
            if state.messages:
                last = state.messages[-1]
                print(f"[{last.role}] {last.text}")
        elif msg_type == "error":
            print(f"[error] {state.last_error}")
        elif msg_type == "connection_established":
            print("connected; speak or type a message (/quit to exit)")

    return _on_update


async def _read_stdin_line() -> str:
    # Daemon reader so a pending readline never blocks interpreter exit.
    loop = asyncio.get_running_loop()
    fut: asyncio.Future[str] = loop.create_future()

    def _deliver(line: str) -> None:
        if not fut.done():
            fut.set_result(line)

    def _reader() -> None:
        line = sys.stdin.readline()
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(_deliver, line)

    threading.Thread(target=_reader, name="stdin-reader", daemon=True).start()
    return await fut


async def _input_loop(client: VoiceClient) -> None:
    while True:
        line = await _read_stdin_line()
        if not line:
            return
        line = line.strip()
        if not line:
            continue
        if line == "/quit":
            return
        await client.send_text(line)


async def run(args: argparse.Namespace) -> int:
    url = build_relay_url(args.server, api_key=args.api_key, secure=args.secure)
    client = VoiceClient(url, audio_settings=load_audio_settings(), on_update=_printer(args.debug))
    try:
        await client.connect()
    except Exception as exc:
        logger.debug("voice session start failed", exc_info=True)
        print(f"failed to start voice session: {exc}", file=sys.stderr)
        return 1

    input_task = asyncio.create_task(_input_loop(client))
    closed_task = asyncio.create_task(client.wait_closed())
    try:
        await asyncio.wait({input_task, closed_task}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in (input_task, closed_task):
            task.cancel()
            with contextlib.suppress(BaseException):
                await task
        last_error = client.state.last_error
        await client.disconnect()
    if last_error:
        print(f"session ended: {last_error}", file=sys.stderr)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    with contextlib.suppress(KeyboardInterrupt):
        return asyncio.run(run(args))
    return 130


if __name__ == "__main__":
    raise SystemExit(main())
