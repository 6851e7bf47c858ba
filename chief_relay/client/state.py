"""Client-side voice session state."""

from __future__ import annotations

import enum
import time
import uuid
from dataclasses import field, dataclass


class ConnectionState(str, enum.Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    ERROR = "error"


class VoiceState(str, enum.Enum):
    IDLE = "idle"
    LISTENING = "listening"
    SPEAKING = "speaking"
    PROCESSING = "processing"


@dataclass(frozen=True, slots=True)
class TranscriptMessage:
    text: str
    role: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: float = field(default_factory=time.time)


@dataclass(slots=True)
class VoiceClientState:
    connection: ConnectionState = ConnectionState.DISCONNECTED
    voice: VoiceState = VoiceState.IDLE
    messages: list[TranscriptMessage] = field(default_factory=list)
    current_transcript: str = ""
    last_error: str | None = None

    def add_message(self, text: str, role: str) -> TranscriptMessage:
        message = TranscriptMessage(text=text, role=role)
        self.messages.append(message)
        return message

    def reset(self) -> None:
        self.connection = ConnectionState.DISCONNECTED
        self.voice = VoiceState.IDLE
        self.messages.clear()
        self.current_transcript = ""


__all__ = ["ConnectionState", "TranscriptMessage", "VoiceClientState", "VoiceState"]
