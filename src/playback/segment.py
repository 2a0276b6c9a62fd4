"""Decoded audio segments queued for playback."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from src.config.playback import PCM16_FULL_SCALE


@dataclass(frozen=True, slots=True, eq=False)
class AudioSegment:
    """Mono float32 samples in [-1, 1); read-only once built."""

    samples: np.ndarray
    sample_rate: int

    @classmethod
    def from_pcm16(cls, chunk: bytes | bytearray | memoryview | np.ndarray, sample_rate: int) -> AudioSegment:
        if isinstance(chunk, np.ndarray):
            pcm = chunk.astype("<i2", copy=False).reshape(-1)
        else:
            # A truncated payload may end mid-sample; the dangling byte is dropped.
            data = memoryview(chunk).cast("B")
            pcm = np.frombuffer(data[: len(data) - len(data) % 2], dtype="<i2")
        samples = pcm.astype(np.float32) / np.float32(PCM16_FULL_SCALE)
        samples.setflags(write=False)
        return cls(samples=samples, sample_rate=int(sample_rate))

    @property
    def duration_s(self) -> float:
        return len(self.samples) / float(self.sample_rate)

    def __len__(self) -> int:
        return len(self.samples)


__all__ = ["AudioSegment"]
