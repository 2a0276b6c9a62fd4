"""Voice that ends after its segment's duration on the event loop."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from .segment import AudioSegment


class ClockedVoice:
    def __init__(self, segment: AudioSegment) -> None:
        self.segment = segment
        self.on_ended: Callable[[], None] | None = None
        self.started = False
        self.stopped = False
        self.connected = True
        self._handle: asyncio.TimerHandle | None = None

    def start(self) -> None:
        if self.started:
            raise RuntimeError("voice already started")
        self.started = True
        self._handle = asyncio.get_running_loop().call_later(self.segment.duration_s, self._finish)

    def _finish(self) -> None:
        self._handle = None
        if self.connected and self.on_ended is not None:
            self.on_ended()

    def stop(self) -> None:
        self.stopped = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def disconnect(self) -> None:
        self.connected = False


__all__ = ["ClockedVoice"]
