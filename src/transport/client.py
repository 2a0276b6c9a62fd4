"""Client-facing transport: JSON framing over a FastAPI WebSocket."""

from __future__ import annotations

import logging
from typing import Any

import orjson
from fastapi import WebSocket, WebSocketDisconnect
from fastapi.websockets import WebSocketState

from src.config.websocket import WS_KEY_DATA, WS_KEY_KIND, WS_EVENT_ERROR, WS_CLOSE_NORMAL_CODE

logger = logging.getLogger(__name__)


class ClientTransport:
    """Wraps the downstream socket; every send is best-effort and never raises on a closed peer."""

    def __init__(self, ws: WebSocket, *, client_id: str) -> None:
        self._ws = ws
        self.client_id = client_id

    def is_open(self) -> bool:
        return (
            self._ws.client_state == WebSocketState.CONNECTED
            and self._ws.application_state == WebSocketState.CONNECTED
        )

    async def accept(self) -> None:
        await self._ws.accept()

    async def receive(self) -> str:
        """Return the next text (or utf-8 decoded binary) frame; raise WebSocketDisconnect on close."""
        message = await self._ws.receive()
        if message["type"] == "websocket.disconnect":
            raise WebSocketDisconnect(code=message.get("code", WS_CLOSE_NORMAL_CODE), reason=message.get("reason"))
        text = message.get("text")
        if text is not None:
            return text
        data = message.get("bytes") or b""
        return data.decode("utf-8", errors="replace")

    async def send_json(self, obj: dict[str, Any]) -> bool:
        if not self.is_open():
            logger.warning("client_id=%s socket not open, dropping %s", self.client_id, obj.get(WS_KEY_KIND))
            return False
        try:
            await self._ws.send_text(orjson.dumps(obj).decode("utf-8"))
        except WebSocketDisconnect:
            return False
        except Exception:
            logger.debug("client_id=%s send failed", self.client_id, exc_info=True)
            return False
        return True

    async def send_event(self, kind: str, **fields: Any) -> bool:
        event: dict[str, Any] = {WS_KEY_KIND: kind}
        event.update(fields)
        return await self.send_json(event)

    async def send_error(self, code: str, message: str) -> bool:
        return await self.send_event(WS_EVENT_ERROR, **{WS_KEY_DATA: {"code": code, "message": message}})

    async def close(self, code: int = WS_CLOSE_NORMAL_CODE, reason: str = "") -> None:
        if self._ws.application_state == WebSocketState.DISCONNECTED:
            return
        if self._ws.client_state == WebSocketState.DISCONNECTED:
            return
        try:
            await self._ws.close(code=code, reason=reason)
        except Exception:
            logger.debug("client_id=%s close failed", self.client_id, exc_info=True)


__all__ = ["ClientTransport"]
