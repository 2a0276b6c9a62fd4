"""Client-side playback buffer: ordered segment playback with stall recovery."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from collections import deque

import numpy as np

from src.config.playback import (
    PLAYBACK_SAMPLE_RATE_HZ,
    PLAYBACK_STALL_THRESHOLD_S,
    PLAYBACK_STALL_CHECK_INTERVAL_S,
)

from .voice import Voice
from .output import AudioOutput
from .segment import AudioSegment
from .events import PlaybackEvent, PlaybackCompleted, PlaybackInterrupted

logger = logging.getLogger(__name__)


class PlaybackBuffer:
    """FIFO of decoded segments played one at a time on an ``AudioOutput``.

    Only ``enqueue`` grows the queue and only the playback path consumes it.
    Completion and interruption are published on ``events`` rather than through
    callbacks. Every method is a no-op once ``dispose`` has run.
    """

    def __init__(
        self,
        output: AudioOutput,
        *,
        sample_rate: int = PLAYBACK_SAMPLE_RATE_HZ,
        stall_check_interval_s: float = PLAYBACK_STALL_CHECK_INTERVAL_S,
        stall_threshold_s: float = PLAYBACK_STALL_THRESHOLD_S,
    ) -> None:
        self._output = output
        self._sample_rate = int(sample_rate)
        self._stall_check_interval_s = float(stall_check_interval_s)
        self._stall_threshold_s = float(stall_threshold_s)
        self._queue: deque[AudioSegment] = deque()
        self._voice: Voice | None = None
        self._playing = False
        self._disposed = False
        self._last_playback_start = 0.0
        self._stall_timer: asyncio.TimerHandle | None = None
        self._resume_task: asyncio.Task | None = None
        self.events: asyncio.Queue[PlaybackEvent] = asyncio.Queue()

    @property
    def playing(self) -> bool:
        return self._playing

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def queued(self) -> int:
        return len(self._queue)

    @property
    def last_playback_start(self) -> float:
        return self._last_playback_start

    def enqueue(self, chunk: bytes | bytearray | memoryview | np.ndarray) -> None:
        if self._disposed or chunk is None or len(chunk) == 0:
            return
        segment = AudioSegment.from_pcm16(chunk, self._sample_rate)
        if len(segment) == 0:
            logger.warning("dropping audio chunk shorter than one sample")
            return

        if self._output.suspended and (self._resume_task is None or self._resume_task.done()):
            self._resume_task = asyncio.get_running_loop().create_task(self._output.resume())
        self._output.set_gain(1.0)

        self._queue.append(segment)
        if not self._playing:
            self._playing = True
            self._last_playback_start = self._output.current_time
            self._play_next()

        self._arm_stall_timer()

    def _arm_stall_timer(self) -> None:
        if self._stall_timer is not None:
            self._stall_timer.cancel()
            self._stall_timer = None
        if self._disposed:
            return
        self._stall_timer = asyncio.get_running_loop().call_later(self._stall_check_interval_s, self._on_stall_tick)

    def _on_stall_tick(self) -> None:
        self._stall_timer = None
        self.check_stall()
        if self._playing and not self._disposed:
            self._arm_stall_timer()

    def check_stall(self) -> bool:
        """Force an advance if playback looks stuck; returns whether it advanced."""
        if self._disposed or not self._playing or not self._queue:
            return False
        gap = self._output.current_time - self._last_playback_start
        if gap <= self._stall_threshold_s:
            return False
        logger.warning("playback stalled for %.2fs with %d queued, advancing", gap, len(self._queue))
        self._play_next()
        return True

    def _play_next(self) -> None:
        if self._disposed:
            return
        if not self._queue:
            self._playing = False
            self._publish(PlaybackCompleted())
            return

        self._last_playback_start = self._output.current_time
        segment = self._queue.popleft()
        self._release_voice()
        voice = self._output.create_voice(segment)
        voice.on_ended = lambda: self._on_voice_ended(voice)
        self._voice = voice
        voice.start()

    def _on_voice_ended(self, voice: Voice) -> None:
        if self._disposed or voice is not self._voice:
            return
        self._last_playback_start = self._output.current_time
        if self._queue:
            # Start the next segment outside the ended callback.
            asyncio.get_running_loop().call_soon(self._advance_after, voice)
            return
        self._voice = None
        self._playing = False
        self._publish(PlaybackCompleted())

    def _advance_after(self, voice: Voice) -> None:
        # Stale if stop() or a stall advance replaced the voice in between.
        if self._disposed or voice is not self._voice:
            return
        self._play_next()

    def _release_voice(self) -> None:
        voice = self._voice
        self._voice = None
        if voice is None:
            return
        voice.on_ended = None
        with contextlib.suppress(Exception):
            voice.stop()
        with contextlib.suppress(Exception):
            voice.disconnect()

    def _halt(self) -> int:
        self._playing = False
        if self._stall_timer is not None:
            self._stall_timer.cancel()
            self._stall_timer = None
        discarded = len(self._queue)
        self._queue.clear()
        self._release_voice()
        return discarded

    def stop(self) -> None:
        if self._disposed:
            return
        discarded = self._halt()
        self._output.set_gain(0.0)
        logger.debug("playback stopped, discarded %d segments", discarded)
        self._publish(PlaybackInterrupted(discarded=discarded))

    async def resume(self) -> None:
        if self._disposed:
            return
        if self._output.suspended:
            await self._output.resume()
        self._output.set_gain(1.0)

    def dispose(self) -> None:
        if self._disposed:
            return
        self._halt()
        self._disposed = True
        if self._resume_task is not None and not self._resume_task.done():
            self._resume_task.cancel()
        self._resume_task = None
        with contextlib.suppress(Exception):
            self._output.set_gain(0.0)
        with contextlib.suppress(Exception):
            self._output.disconnect()

    def _publish(self, event: PlaybackEvent) -> None:
        self.events.put_nowait(event)


__all__ = ["PlaybackBuffer"]
