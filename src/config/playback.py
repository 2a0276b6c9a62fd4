"""Client playback defaults."""

from __future__ import annotations

# Gemini Live emits 24kHz mono PCM16.
PLAYBACK_SAMPLE_RATE_HZ = 24000
PLAYBACK_STALL_CHECK_INTERVAL_S = 1.0
PLAYBACK_STALL_THRESHOLD_S = 1.0

PCM16_FULL_SCALE = 32768.0

__all__ = [
    "PLAYBACK_SAMPLE_RATE_HZ",
    "PLAYBACK_STALL_CHECK_INTERVAL_S",
    "PLAYBACK_STALL_THRESHOLD_S",
    "PCM16_FULL_SCALE",
]
