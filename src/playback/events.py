"""Typed events published by the playback buffer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PlaybackCompleted:
    """The queue drained after the last segment ended."""


@dataclass(frozen=True, slots=True)
class PlaybackInterrupted:
    """Playback was stopped; ``discarded`` segments never played."""

    discarded: int = 0


PlaybackEvent = PlaybackCompleted | PlaybackInterrupted

__all__ = ["PlaybackCompleted", "PlaybackEvent", "PlaybackInterrupted"]
