"""In-memory stand-ins for the client socket and the upstream transport."""

from __future__ import annotations

import asyncio
from typing import Any

import orjson

from src.state.settings import UpstreamSettings

SETUP_ACK = '{"setupComplete": {}}'


def make_upstream_settings(**overrides: Any) -> UpstreamSettings:
    values: dict[str, Any] = {
        "api_key": "test-key",
        "model": "gemini-test",
        "ws_url": "wss://upstream.invalid/bidi",
        "open_timeout_s": 1.0,
        "close_timeout_s": 1.0,
        "image_prompt": "Describeme la imagen",
        "image_mime_type": "image/jpeg",
    }
    values.update(overrides)
    return UpstreamSettings(**values)


class FakeClient:
    """Records every event sent to the client; ``timeline`` may be shared with a fake upstream."""

    def __init__(self, client_id: str = "c1", timeline: list[tuple[str, Any]] | None = None) -> None:
        self.client_id = client_id
        self.events: list[dict[str, Any]] = []
        self.timeline = timeline if timeline is not None else []
        self.open = True
        self.accepted = False
        self.close_code: int | None = None
        self.close_reason: str | None = None

    def is_open(self) -> bool:
        return self.open

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, obj: dict[str, Any]) -> bool:
        if not self.open:
            return False
        self.events.append(obj)
        self.timeline.append(("client", obj))
        return True

    async def send_event(self, kind: str, **fields: Any) -> bool:
        return await self.send_json({"kind": kind, **fields})

    async def send_error(self, code: str, message: str) -> bool:
        return await self.send_event("error", data={"code": code, "message": message})

    async def close(self, code: int = 1000, reason: str = "") -> None:
        if not self.open:
            return
        self.open = False
        self.close_code = code
        self.close_reason = reason

    def kinds(self) -> list[str]:
        return [event["kind"] for event in self.events]


class FakeUpstreamTransport:
    """Upstream socket fed from ``push``; ``None`` pushed simulates a remote close."""

    def __init__(self, timeline: list[tuple[str, Any]] | None = None) -> None:
        self.sent: list[dict[str, Any]] = []
        self.timeline = timeline if timeline is not None else []
        self.incoming: asyncio.Queue[str | bytes | None] = asyncio.Queue()
        self.open = True
        self.closed = False
        self.uri: str | None = None

    def push(self, frame: dict[str, Any] | str | bytes | None) -> None:
        if isinstance(frame, dict):
            frame = orjson.dumps(frame).decode("utf-8")
        self.incoming.put_nowait(frame)

    def is_open(self) -> bool:
        return self.open

    async def send_json(self, obj: dict[str, Any]) -> None:
        self.sent.append(obj)
        self.timeline.append(("upstream", obj))

    async def receive(self) -> str | bytes | None:
        raw = await self.incoming.get()
        if raw is None:
            self.open = False
        return raw

    def close_info(self) -> tuple[int | None, str]:
        return (1000, "bye") if not self.open else (None, "")

    async def close(self) -> None:
        self.open = False
        self.closed = True


class FakeTransportFactory:
    """Hands out pre-built fake transports, acknowledging setup automatically."""

    def __init__(
        self,
        timeline: list[tuple[str, Any]] | None = None,
        *,
        ack: str | bytes | None = SETUP_ACK,
        script: list[dict[str, Any] | None] | None = None,
    ) -> None:
        self.timeline = timeline if timeline is not None else []
        self.ack = ack
        self.script = list(script or [])
        self.transports: list[FakeUpstreamTransport] = []

    async def __call__(self, uri: str, *, open_timeout_s: float, close_timeout_s: float) -> FakeUpstreamTransport:
        transport = FakeUpstreamTransport(self.timeline)
        transport.uri = uri
        transport.push(self.ack)
        for frame in self.script:
            transport.push(frame)
        self.transports.append(transport)
        return transport

    @property
    def last(self) -> FakeUpstreamTransport:
        return self.transports[-1]
