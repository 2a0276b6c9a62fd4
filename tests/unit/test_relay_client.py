from __future__ import annotations

from typing import Any

import orjson
import pytest
from websockets.asyncio.server import ServerConnection, serve

from src.client import RelayClient
from src.errors import ProtocolError
from src.state.turn_state import TurnState


def _dump(obj: dict[str, Any]) -> str:
    return orjson.dumps(obj).decode("utf-8")


@pytest.mark.asyncio
async def test_relay_client_handshake_and_turn() -> None:
    received: list[dict[str, Any]] = []
    paths: list[str] = []

    async def relay(ws: ServerConnection) -> None:
        paths.append(ws.request.path)
        received.append(orjson.loads(await ws.recv()))
        await ws.send(_dump({"kind": "ready"}))
        async for raw in ws:
            msg = orjson.loads(raw)
            received.append(msg)
            if msg["kind"] == "end":
                await ws.send(_dump({"kind": "text", "data": "Listo", "turnComplete": True}))
                await ws.send(_dump({"kind": "turn_complete"}))
                await ws.close()

    async with serve(relay, "127.0.0.1", 0) as server:
        port = next(iter(server.sockets)).getsockname()[1]
        client = RelayClient(f"ws://127.0.0.1:{port}", {"systemPrompt": "x"}, client_id="tech-9")

        await client.connect()
        assert client.handler.turn.state is TurnState.LISTENING

        await client.send_text("hola")
        await client.send_end()
        kinds = [event["kind"] async for event in client.events()]
        await client.close()

    assert paths == ["/ws/tech-9"]
    assert received[0] == {"kind": "config", "config": {"systemPrompt": "x"}}
    assert received[1] == {"kind": "text", "data": "hola"}
    assert received[2]["data"]["client_content"]["turn_complete"] is True
    assert kinds == ["text", "turn_complete"]
    assert client.handler.transcript == ["Listo"]


@pytest.mark.asyncio
async def test_relay_client_fails_when_relay_closes_before_ready() -> None:
    async def relay(ws: ServerConnection) -> None:
        await ws.recv()
        await ws.close(code=1011, reason="Failed to connect upstream")

    async with serve(relay, "127.0.0.1", 0) as server:
        port = next(iter(server.sockets)).getsockname()[1]
        client = RelayClient(f"ws://127.0.0.1:{port}", {"systemPrompt": "x"})

        with pytest.raises(ProtocolError):
            await client.connect()
