from .buffer import PlaybackBuffer
from .output import AudioOutput
from .clocked import ClockedOutput
from .segment import AudioSegment
from .events import PlaybackEvent, PlaybackCompleted, PlaybackInterrupted

__all__ = [
    "AudioOutput",
    "AudioSegment",
    "ClockedOutput",
    "PlaybackBuffer",
    "PlaybackCompleted",
    "PlaybackEvent",
    "PlaybackInterrupted",
]
