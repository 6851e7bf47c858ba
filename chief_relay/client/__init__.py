"""Python voice client for the relay."""

from .session import VoiceClient
from .network import build_relay_url
from .state import VoiceState, ConnectionState, TranscriptMessage, VoiceClientState

__all__ = [
    "ConnectionState",
    "TranscriptMessage",
    "VoiceClient",
    "VoiceClientState",
    "VoiceState",
    "build_relay_url",
]
