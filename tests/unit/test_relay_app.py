from __future__ import annotations

from typing import Any

import pytest
from fastapi import WebSocketDisconnect
from fastapi.testclient import TestClient

from helpers.fakes import FakeTransportFactory, make_upstream_settings
from src.server import create_app
from src.state.runtime import RuntimeDeps
from src.realtime.bridge import RealtimeBridge
from src.handlers.registry import SessionRegistry
from src.handlers.connections import ConnectionManager
from src.handlers.tools import build_default_dispatcher
from src.state.settings import AppSettings, LimitsSettings, ServerSettings

CONFIG = {"kind": "config", "config": {"systemPrompt": "Eres un asistente tecnico"}}


def _client(factory: FakeTransportFactory, *, max_connections: int = 10, max_messages: int = 600) -> TestClient:
    settings = AppSettings(
        upstream=make_upstream_settings(),
        limits=LimitsSettings(
            max_concurrent_connections=max_connections,
            ws_message_window_seconds=60.0,
            ws_max_messages_per_window=max_messages,
        ),
        server=ServerSettings(cors_allow_origins=("*",)),
    )

    async def runtime_deps_factory() -> RuntimeDeps:
        return RuntimeDeps(
            connections=ConnectionManager(max_connections=max_connections),
            realtime_bridge=RealtimeBridge(settings.upstream, transport_factory=factory),
            registry=SessionRegistry(),
            tool_dispatcher=build_default_dispatcher(),
            settings=settings,
        )

    return TestClient(create_app(runtime_deps_factory, cors_allow_origins=("*",)))


def test_health_routes() -> None:
    with _client(FakeTransportFactory()) as client:
        for path in ("/", "/health", "/healthz"):
            assert client.get(path).json() == {"status": "ok"}


def test_config_then_text_reaches_upstream_as_client_content() -> None:
    factory = FakeTransportFactory()
    with _client(factory) as client, client.websocket_connect("/ws/tech-1") as ws:
        ws.send_json(CONFIG)
        assert ws.receive_json() == {"kind": "ready"}

        ws.send_json({"kind": "text", "data": "hola"})
        # Messages are handled in order, so the error reply means the text was already forwarded.
        ws.send_text("not json")
        assert ws.receive_json()["data"]["code"] == "invalid_message"

    upstream = factory.last
    assert upstream.sent[0]["setup"]["system_instruction"]["parts"][0]["text"] == "Eres un asistente tecnico"
    assert upstream.sent[1] == {
        "client_content": {"turns": [{"role": "user", "parts": [{"text": "hola"}]}], "turn_complete": True}
    }
    assert upstream.closed


def test_first_message_must_be_config() -> None:
    factory = FakeTransportFactory()
    with _client(factory) as client, client.websocket_connect("/ws/tech-1") as ws:
        ws.send_json({"kind": "text", "data": "hola"})
        with pytest.raises(WebSocketDisconnect) as exc:
            ws.receive_json()

    assert exc.value.code == 1011
    assert factory.transports == []


def test_upstream_content_and_interruption_are_forwarded_in_order() -> None:
    script: list[dict[str, Any] | None] = [
        {"serverContent": {"modelTurn": {"parts": [{"text": "Revise el cable"}]}}},
        {"serverContent": {"interrupted": True}},
    ]
    factory = FakeTransportFactory(script=script)
    with _client(factory) as client, client.websocket_connect("/ws/tech-1") as ws:
        ws.send_json(CONFIG)
        kinds = [ws.receive_json()["kind"] for _ in range(5)]

    assert kinds == ["ready", "turn_not_complete", "text", "interrupted", "turn_complete"]
    assert factory.last.sent[-1]["client_content"]["turn_complete"] is True


def test_upstream_close_ends_the_client_session() -> None:
    factory = FakeTransportFactory(script=[None])
    with _client(factory) as client, client.websocket_connect("/ws/tech-1") as ws:
        ws.send_json(CONFIG)
        assert ws.receive_json() == {"kind": "ready"}
        with pytest.raises(WebSocketDisconnect) as exc:
            ws.receive_json()

    assert exc.value.code == 1011


def test_failed_upstream_handshake_closes_client() -> None:
    factory = FakeTransportFactory(ack=None)
    with _client(factory) as client, client.websocket_connect("/ws/tech-1") as ws:
        ws.send_json(CONFIG)
        with pytest.raises(WebSocketDisconnect) as exc:
            ws.receive_json()

    assert exc.value.code == 1011


def test_duplicate_client_id_is_rejected() -> None:
    factory = FakeTransportFactory()
    with _client(factory) as client, client.websocket_connect("/ws/tech-1") as first:
        first.send_json(CONFIG)
        assert first.receive_json() == {"kind": "ready"}

        with client.websocket_connect("/ws/tech-1") as second:
            assert second.receive_json()["data"]["code"] == "session_exists"
            with pytest.raises(WebSocketDisconnect) as exc:
                second.receive_json()

    assert exc.value.code == 4003
    assert len(factory.transports) == 1


def test_connections_over_capacity_are_turned_away() -> None:
    factory = FakeTransportFactory()
    with _client(factory, max_connections=1) as client, client.websocket_connect("/ws/tech-1") as first:
        first.send_json(CONFIG)
        assert first.receive_json() == {"kind": "ready"}

        with client.websocket_connect("/ws/tech-2") as second:
            assert second.receive_json()["data"]["code"] == "server_at_capacity"
            with pytest.raises(WebSocketDisconnect) as exc:
                second.receive_json()

    assert exc.value.code == 4002


def test_rate_limited_messages_get_an_error() -> None:
    factory = FakeTransportFactory()
    with _client(factory, max_messages=1) as client, client.websocket_connect("/ws/tech-1") as ws:
        ws.send_json(CONFIG)
        assert ws.receive_json() == {"kind": "ready"}
        ws.send_json({"kind": "text", "data": "uno"})
        ws.send_json({"kind": "text", "data": "dos"})
        assert ws.receive_json()["data"]["code"] == "rate_limited"

    assert [frame["client_content"]["turns"][0]["parts"][0]["text"] for frame in factory.last.sent[1:]] == ["uno"]


def _drain(ws: Any) -> None:
    # Frames are handled in order; the parse error marks everything before it as processed.
    ws.send_text("not json")
    assert ws.receive_json()["data"]["code"] == "invalid_message"


def test_image_is_forwarded_as_inline_data_turn() -> None:
    factory = FakeTransportFactory()
    with _client(factory) as client, client.websocket_connect("/ws/tech-1") as ws:
        ws.send_json(CONFIG)
        assert ws.receive_json() == {"kind": "ready"}
        ws.send_json({"kind": "image", "data": "aGVsbG8="})
        _drain(ws)

    content = factory.last.sent[1]["client_content"]
    assert content["turn_complete"] is True
    assert content["turns"][0]["parts"] == [
        {"text": "Describeme la imagen"},
        {"inline_data": {"mime_type": "image/jpeg", "data": "aGVsbG8="}},
    ]


def test_continue_and_end_forward_client_envelopes_verbatim() -> None:
    envelope_continue = {"client_content": {"turns": [{"role": "user", "parts": []}], "turn_complete": False}}
    envelope_end = {"client_content": {"turns": [{"role": "user", "parts": [{"text": "fin"}]}], "turn_complete": True}}
    factory = FakeTransportFactory()
    with _client(factory) as client, client.websocket_connect("/ws/tech-1") as ws:
        ws.send_json(CONFIG)
        assert ws.receive_json() == {"kind": "ready"}
        ws.send_json({"kind": "continue", "data": envelope_continue})
        ws.send_json({"kind": "end", "data": envelope_end})
        _drain(ws)

    assert factory.last.sent[1:] == [envelope_continue, envelope_end]


def test_continue_and_end_fall_back_to_empty_turns() -> None:
    factory = FakeTransportFactory()
    with _client(factory) as client, client.websocket_connect("/ws/tech-1") as ws:
        ws.send_json(CONFIG)
        assert ws.receive_json() == {"kind": "ready"}
        ws.send_json({"kind": "continue"})
        ws.send_json({"kind": "end", "data": "done"})
        _drain(ws)

    empty_turns = [{"role": "user", "parts": []}]
    assert factory.last.sent[1:] == [
        {"client_content": {"turns": empty_turns, "turn_complete": False}},
        {"client_content": {"turns": empty_turns, "turn_complete": True}},
    ]


def test_duplicate_config_is_ignored() -> None:
    factory = FakeTransportFactory()
    with _client(factory) as client, client.websocket_connect("/ws/tech-1") as ws:
        ws.send_json(CONFIG)
        assert ws.receive_json() == {"kind": "ready"}
        ws.send_json({"kind": "config", "config": {"systemPrompt": "otro"}})
        _drain(ws)

    assert len(factory.transports) == 1
    assert len(factory.last.sent) == 1
    assert factory.last.sent[0]["setup"]["system_instruction"]["parts"][0]["text"] == "Eres un asistente tecnico"


def test_unknown_kind_is_ignored_without_error() -> None:
    factory = FakeTransportFactory()
    with _client(factory) as client, client.websocket_connect("/ws/tech-1") as ws:
        ws.send_json(CONFIG)
        assert ws.receive_json() == {"kind": "ready"}
        ws.send_json({"kind": "dance", "data": "salsa"})
        _drain(ws)

    assert len(factory.last.sent) == 1
