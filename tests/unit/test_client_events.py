from __future__ import annotations

import numpy as np
import pytest

from src.client import ClientEventHandler
from src.state.turn_state import TurnState
from src.playback import ClockedOutput, PlaybackBuffer, PlaybackInterrupted


@pytest.mark.asyncio
async def test_text_events_build_the_transcript() -> None:
    handler = ClientEventHandler()
    await handler.apply({"kind": "ready"})
    await handler.apply({"kind": "turn_not_complete"})
    await handler.apply({"kind": "text", "data": "Revise ", "turnComplete": False})
    await handler.apply({"kind": "text", "data": "el cable.", "turnComplete": True})
    await handler.apply({"kind": "turn_complete"})
    await handler.apply({"kind": "text", "data": "Otra", "turnComplete": True})

    assert handler.turn.state is TurnState.LISTENING
    assert handler.transcript == ["Revise el cable.", "Otra"]


@pytest.mark.asyncio
async def test_interruption_stops_playback_and_turn_complete_resumes_it() -> None:
    output = ClockedOutput()
    playback = PlaybackBuffer(output, sample_rate=1000)
    handler = ClientEventHandler(playback)
    await handler.apply({"kind": "ready"})
    playback.enqueue(np.zeros(5000, dtype="<i2"))
    playback.enqueue(np.zeros(5000, dtype="<i2"))

    await handler.apply({"kind": "interrupted"})
    assert handler.turn.state is TurnState.INTERRUPTED
    assert playback.queued == 0
    assert isinstance(playback.events.get_nowait(), PlaybackInterrupted)
    assert output.gain == 0.0

    await handler.apply({"kind": "turn_complete"})
    assert handler.turn.state is TurnState.LISTENING
    assert output.gain == 1.0
    playback.dispose()


@pytest.mark.asyncio
async def test_tool_and_control_events_are_recorded() -> None:
    handler = ClientEventHandler()
    await handler.apply({"kind": "tool_text", "data": "SN-4471"})
    await handler.apply({"kind": "end_call", "data": "Call ended by AI"})
    await handler.apply({"kind": "error", "data": {"code": "rate_limited", "message": "slow down"}})
    await handler.apply({"kind": "mystery"})

    assert handler.tool_text == "SN-4471"
    assert handler.end_call_reason == "Call ended by AI"
    assert handler.last_error == {"code": "rate_limited", "message": "slow down"}


@pytest.mark.asyncio
async def test_out_of_order_events_do_not_raise() -> None:
    handler = ClientEventHandler()
    await handler.apply({"kind": "interrupted"})
    assert handler.turn.state is TurnState.IDLE
