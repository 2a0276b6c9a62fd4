"""Audio output device abstraction used by the playback buffer."""

from __future__ import annotations

from typing import Protocol

from .voice import Voice
from .segment import AudioSegment


class AudioOutput(Protocol):
    """What the buffer needs from a device: a clock, a gain stage and voices.

    ``current_time`` is in seconds on the device clock. Voices report their end
    through ``on_ended``; a stopped voice is not required to report anything.
    """

    @property
    def current_time(self) -> float: ...

    @property
    def suspended(self) -> bool: ...

    def set_gain(self, value: float) -> None: ...

    async def resume(self) -> None: ...

    def create_voice(self, segment: AudioSegment) -> Voice: ...

    def disconnect(self) -> None: ...


__all__ = ["AudioOutput"]
