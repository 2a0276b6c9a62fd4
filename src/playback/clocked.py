"""Headless audio output driven by the event loop clock."""

from __future__ import annotations

import time
from collections.abc import Callable

from .segment import AudioSegment
from .clocked_voice import ClockedVoice


class ClockedOutput:
    """Plays nothing; each voice just ends after its segment's duration.

    Useful for headless clients and tests. ``clock`` overrides the time source
    reported as ``current_time``.
    """

    def __init__(self, *, clock: Callable[[], float] | None = None, suspended: bool = False) -> None:
        self._clock = clock or time.monotonic
        self._suspended = suspended
        self.gain = 1.0
        self.connected = True
        self.voices: list[ClockedVoice] = []

    @property
    def current_time(self) -> float:
        return self._clock()

    @property
    def suspended(self) -> bool:
        return self._suspended

    def suspend(self) -> None:
        self._suspended = True

    def set_gain(self, value: float) -> None:
        self.gain = float(value)

    async def resume(self) -> None:
        self._suspended = False

    def create_voice(self, segment: AudioSegment) -> ClockedVoice:
        voice = ClockedVoice(segment)
        self.voices.append(voice)
        return voice

    def disconnect(self) -> None:
        self.connected = False


__all__ = ["ClockedOutput"]
