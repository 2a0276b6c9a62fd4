"""Conversational turn states."""

from __future__ import annotations

from enum import Enum


class TurnState(str, Enum):
    IDLE = "idle"
    LISTENING = "listening"
    SPEAKING = "speaking"
    INTERRUPTED = "interrupted"


__all__ = ["TurnState"]
