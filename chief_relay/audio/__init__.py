"""Client-side audio: codec, microphone capture and speaker playback."""

from .channel import FrameChannel
from .capture import AudioCapture
from .playback import PlaybackQueue
from .player import Player, SoundDevicePlayer

__all__ = ["AudioCapture", "FrameChannel", "PlaybackQueue", "Player", "SoundDevicePlayer"]
