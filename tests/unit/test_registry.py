from __future__ import annotations

import asyncio

import pytest

from helpers.fakes import FakeClient, FakeTransportFactory, make_upstream_settings
from src.state.turn import TurnStateMachine
from src.state.session import SessionState
from src.state.turn_state import TurnState
from src.handlers.registry import SessionRegistry
from src.realtime.upstream import UpstreamSession


def _session(client_id: str, factory: FakeTransportFactory) -> SessionState:
    return SessionState(
        client_id=client_id,
        client=FakeClient(client_id),
        upstream=UpstreamSession(make_upstream_settings(), transport_factory=factory, label=client_id),
        turn=TurnStateMachine(label=client_id),
    )


@pytest.mark.asyncio
async def test_one_session_per_client_id() -> None:
    registry = SessionRegistry()
    factory = FakeTransportFactory()

    assert await registry.register(_session("c1", factory))
    assert not await registry.register(_session("c1", factory))
    assert await registry.register(_session("c2", factory))
    assert len(registry) == 2
    assert "c1" in registry


@pytest.mark.asyncio
async def test_cleanup_closes_upstream_and_stops_receive_task() -> None:
    registry = SessionRegistry()
    factory = FakeTransportFactory()
    session = _session("c1", factory)
    session.upstream.set_config({"systemPrompt": "x"})
    await session.upstream.connect()
    session.configured = True
    session.turn.transition(TurnState.LISTENING)
    session.receive_task = asyncio.create_task(asyncio.sleep(60))
    task = session.receive_task
    await registry.register(session)

    assert await registry.cleanup("c1")

    assert task.cancelled()
    assert factory.last.closed
    assert not session.upstream.is_open()
    assert not session.configured
    assert session.turn.state is TurnState.IDLE
    assert registry.get("c1") is None
    assert not await registry.cleanup("c1")


@pytest.mark.asyncio
async def test_close_all_empties_registry() -> None:
    registry = SessionRegistry()
    factory = FakeTransportFactory()
    await registry.register(_session("c1", factory))
    await registry.register(_session("c2", factory))

    await registry.close_all()

    assert len(registry) == 0
