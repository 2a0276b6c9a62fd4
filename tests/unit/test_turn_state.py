from __future__ import annotations

import pytest

from src.state.turn import TurnStateMachine, can_transition
from src.state.turn_state import TurnState
from src.errors import IllegalTurnTransitionError


def test_turn_starts_idle_and_moves_to_listening() -> None:
    turn = TurnStateMachine(label="c1")
    assert turn.state is TurnState.IDLE
    assert turn.transition(TurnState.LISTENING) is TurnState.IDLE
    assert turn.state is TurnState.LISTENING


def test_interruption_returns_to_listening() -> None:
    turn = TurnStateMachine()
    turn.transition(TurnState.LISTENING)
    turn.transition(TurnState.INTERRUPTED)
    turn.transition(TurnState.LISTENING)
    assert turn.state is TurnState.LISTENING


@pytest.mark.parametrize(
    ("source", "target"),
    [
        (TurnState.IDLE, TurnState.SPEAKING),
        (TurnState.IDLE, TurnState.INTERRUPTED),
        (TurnState.INTERRUPTED, TurnState.SPEAKING),
        (TurnState.INTERRUPTED, TurnState.INTERRUPTED),
        (TurnState.SPEAKING, TurnState.IDLE),
    ],
)
def test_illegal_transitions_are_rejected(source: TurnState, target: TurnState) -> None:
    assert not can_transition(source, target)


def test_illegal_transition_leaves_state_unchanged() -> None:
    turn = TurnStateMachine()
    with pytest.raises(IllegalTurnTransitionError) as exc:
        turn.transition(TurnState.INTERRUPTED)
    assert exc.value.source == "idle"
    assert exc.value.target == "interrupted"
    assert turn.state is TurnState.IDLE


def test_reset_returns_to_idle_from_any_state() -> None:
    turn = TurnStateMachine()
    turn.transition(TurnState.LISTENING)
    turn.transition(TurnState.INTERRUPTED)
    turn.reset()
    assert turn.state is TurnState.IDLE
