"""Applies relay events to the device-side turn mirror and playback buffer."""

from __future__ import annotations

import logging
from typing import Any

from src.errors import IllegalTurnTransitionError
from src.state.turn import TurnStateMachine
from src.state.turn_state import TurnState
from src.playback.buffer import PlaybackBuffer
from src.config.websocket import (
    WS_KEY_DATA,
    WS_KEY_KIND,
    WS_EVENT_TEXT,
    WS_EVENT_ERROR,
    WS_EVENT_READY,
    WS_EVENT_END_CALL,
    WS_EVENT_TOOL_TEXT,
    WS_KEY_TURN_COMPLETE,
    WS_EVENT_INTERRUPTED,
    WS_EVENT_TURN_COMPLETE,
    WS_EVENT_TURN_NOT_COMPLETE,
)

logger = logging.getLogger(__name__)


class ClientEventHandler:
    """Keeps what the device shows in sync with the relay.

    ``transcript`` holds one entry per assistant turn; text events append to the
    open entry until a text event carries ``turnComplete``.
    """

    def __init__(self, playback: PlaybackBuffer | None = None, *, label: str = "client") -> None:
        self.playback = playback
        self.turn = TurnStateMachine(label=label)
        self.transcript: list[str] = []
        self.tool_text: str | None = None
        self.end_call_reason: str | None = None
        self.last_error: dict[str, Any] | None = None
        self._turn_open = False
        self._resume_pending = False

    def _move(self, target: TurnState) -> None:
        try:
            self.turn.transition(target)
        except IllegalTurnTransitionError as exc:
            logger.warning("ignoring relay event: %s", exc)

    def _append_text(self, text: str, turn_complete: bool) -> None:
        if self._turn_open and self.transcript:
            self.transcript[-1] += text
        else:
            self.transcript.append(text)
        self._turn_open = not turn_complete

    async def apply(self, event: dict[str, Any]) -> None:
        kind = event.get(WS_KEY_KIND)
        data = event.get(WS_KEY_DATA)

        if kind == WS_EVENT_READY:
            self._move(TurnState.LISTENING)
        elif kind == WS_EVENT_INTERRUPTED:
            self._move(TurnState.INTERRUPTED)
            self._turn_open = False
            if self.playback is not None:
                self.playback.stop()
                self._resume_pending = True
        elif kind == WS_EVENT_TURN_COMPLETE:
            self._move(TurnState.LISTENING)
            self._turn_open = False
            if self._resume_pending and self.playback is not None:
                self._resume_pending = False
                await self.playback.resume()
        elif kind == WS_EVENT_TURN_NOT_COMPLETE:
            pass
        elif kind == WS_EVENT_TEXT:
            if isinstance(data, str):
                self._append_text(data, bool(event.get(WS_KEY_TURN_COMPLETE)))
        elif kind == WS_EVENT_TOOL_TEXT:
            self.tool_text = data if isinstance(data, str) else str(data or "")
        elif kind == WS_EVENT_END_CALL:
            self.end_call_reason = data if isinstance(data, str) else str(data or "")
        elif kind == WS_EVENT_ERROR:
            self.last_error = data if isinstance(data, dict) else {"message": str(data)}
            logger.warning("relay error: %s", self.last_error)
        else:
            logger.info("unhandled relay event kind=%s", kind)


__all__ = ["ClientEventHandler"]
