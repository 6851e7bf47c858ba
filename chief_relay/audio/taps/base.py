"""Common interface for microphone taps."""

from __future__ import annotations

from typing import Any, Protocol
from collections.abc import Callable

from chief_relay.state.settings import AudioSettings

# Called from the audio thread with one mono float32 block.
BlockFn = Callable[[Any], None]


def import_sounddevice() -> Any:
    """Import sounddevice, raising a clear error if missing."""
    try:
        import sounddevice as _sd

        return _sd
    except (ImportError, OSError) as exc:
        # OSError: the module is installed but the PortAudio library is not.
        raise ImportError(
            "sounddevice (and the PortAudio library) is required for local audio. "
            "Install it with: pip install sounddevice"
        ) from exc


class MicTap(Protocol):
    name: str

    def __init__(self, settings: AudioSettings, on_block: BlockFn, *, sd: Any = None) -> None: ...

    def open(self) -> None:
        """Open and start the device; raises if it cannot."""

    def close(self) -> None:
        """Stop and release the device. Never raises."""


def device_hints(settings: AudioSettings) -> dict[str, bool]:
    # PortAudio exposes no echo/noise flags; kept for logging.
    return {
        "echo_cancellation": settings.echo_cancellation,
        "noise_suppression": settings.noise_suppression,
    }


__all__ = ["BlockFn", "MicTap", "device_hints", "import_sounddevice"]
