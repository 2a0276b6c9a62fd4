"""Async client for the relay WebSocket (the technician device's side)."""

from __future__ import annotations

import uuid
import asyncio
import logging
from typing import Any
from collections.abc import Mapping, AsyncIterator

import orjson
import websockets
from websockets.exceptions import ConnectionClosed

from src.errors import ProtocolError, NotConnectedError
from src.realtime.frames import build_empty_turn
from src.config.websocket import (
    WS_KEY_DATA,
    WS_KEY_KIND,
    WS_KIND_END,
    WS_KIND_TEXT,
    WS_KEY_CONFIG,
    WS_KIND_IMAGE,
    WS_KIND_CONFIG,
    WS_EVENT_READY,
    WS_KIND_CONTINUE,
    WS_ENDPOINT_PATH,
)

from .events import ClientEventHandler

logger = logging.getLogger(__name__)


class RelayClient:
    def __init__(
        self,
        server_url: str,
        config: Mapping[str, Any],
        *,
        client_id: str | None = None,
        handler: ClientEventHandler | None = None,
        ready_timeout_s: float = 10.0,
    ) -> None:
        self.client_id = client_id or str(uuid.uuid4())
        self.url = server_url.rstrip("/") + WS_ENDPOINT_PATH.format(client_id=self.client_id)
        self.handler = handler or ClientEventHandler(label=self.client_id)
        self._config = dict(config)
        self._ready_timeout_s = ready_timeout_s
        self._ws: Any = None

    async def connect(self) -> None:
        """Open the socket, send the configuration and wait for ``ready``."""
        self._ws = await websockets.connect(self.url, max_size=None)
        await self._send({WS_KEY_KIND: WS_KIND_CONFIG, WS_KEY_CONFIG: self._config})
        try:
            await asyncio.wait_for(self._wait_ready(), timeout=self._ready_timeout_s)
        except (asyncio.TimeoutError, ProtocolError):
            await self.close()
            raise

    async def _wait_ready(self) -> None:
        while True:
            try:
                raw = await self._ws.recv()
            except ConnectionClosed as exc:
                rcvd = exc.rcvd
                raise ProtocolError(
                    f"relay closed before ready: code={rcvd.code if rcvd else None}"
                    f" reason={(rcvd.reason if rcvd else '') or '<no reason>'}"
                ) from exc
            event = orjson.loads(raw)
            await self.handler.apply(event)
            if event.get(WS_KEY_KIND) == WS_EVENT_READY:
                logger.info("client_id=%s relay ready", self.client_id)
                return

    async def _send(self, message: dict[str, Any]) -> None:
        if self._ws is None:
            raise NotConnectedError("relay client is not connected")
        try:
            await self._ws.send(orjson.dumps(message).decode("utf-8"))
        except ConnectionClosed as exc:
            raise NotConnectedError("relay socket closed during send") from exc

    async def send_text(self, text: str) -> None:
        await self._send({WS_KEY_KIND: WS_KIND_TEXT, WS_KEY_DATA: text})

    async def send_image(self, image_b64: str) -> None:
        await self._send({WS_KEY_KIND: WS_KIND_IMAGE, WS_KEY_DATA: image_b64})

    async def send_continue(self) -> None:
        await self._send({WS_KEY_KIND: WS_KIND_CONTINUE, WS_KEY_DATA: build_empty_turn(turn_complete=False)})

    async def send_end(self) -> None:
        await self._send({WS_KEY_KIND: WS_KIND_END, WS_KEY_DATA: build_empty_turn(turn_complete=True)})

    async def events(self) -> AsyncIterator[dict[str, Any]]:
        """Yield relay events until the socket closes, applying each to the handler first."""
        if self._ws is None:
            raise NotConnectedError("relay client is not connected")
        try:
            async for raw in self._ws:
                event = orjson.loads(raw)
                await self.handler.apply(event)
                yield event
        except ConnectionClosed:
            logger.info("client_id=%s relay connection closed", self.client_id)

    async def close(self) -> None:
        ws = self._ws
        self._ws = None
        if ws is not None:
            await ws.close()


__all__ = ["RelayClient"]
