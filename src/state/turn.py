"""Turn state machine shared by the relay and the client mirror."""

from __future__ import annotations

import logging

from src.errors import IllegalTurnTransitionError

from .turn_state import TurnState

logger = logging.getLogger(__name__)

# SPEAKING is unreachable while output audio is disabled, but its edges stay legal.
_TRANSITIONS: dict[TurnState, frozenset[TurnState]] = {
    TurnState.IDLE: frozenset({TurnState.LISTENING}),
    TurnState.LISTENING: frozenset(
        {TurnState.LISTENING, TurnState.SPEAKING, TurnState.INTERRUPTED, TurnState.IDLE}
    ),
    TurnState.SPEAKING: frozenset({TurnState.LISTENING, TurnState.SPEAKING, TurnState.INTERRUPTED}),
    TurnState.INTERRUPTED: frozenset({TurnState.LISTENING}),
}


def can_transition(source: TurnState, target: TurnState) -> bool:
    return target in _TRANSITIONS.get(source, frozenset())


class TurnStateMachine:
    def __init__(self, *, label: str = "session") -> None:
        self._label = label
        self._state = TurnState.IDLE

    @property
    def state(self) -> TurnState:
        return self._state

    def transition(self, target: TurnState) -> TurnState:
        source = self._state
        if not can_transition(source, target):
            raise IllegalTurnTransitionError(source=source.value, target=target.value)
        if source is not target:
            logger.debug("turn %s: %s -> %s", self._label, source.value, target.value)
        self._state = target
        return source

    def reset(self) -> None:
        """Return to IDLE unconditionally; used on session teardown only."""
        self._state = TurnState.IDLE


__all__ = ["TurnStateMachine", "can_transition"]
