"""Upstream transport: JSON framing over a `websockets` client connection."""

from __future__ import annotations

import logging
from typing import Any

import orjson
import websockets
from websockets.protocol import State
from websockets.exceptions import ConnectionClosed

from src.errors import NotConnectedError, UpstreamConnectionError

logger = logging.getLogger(__name__)


class UpstreamTransport:
    def __init__(self, conn: Any) -> None:
        self._conn = conn

    @classmethod
    async def open(
        cls,
        uri: str,
        *,
        open_timeout_s: float,
        close_timeout_s: float,
    ) -> UpstreamTransport:
        try:
            conn = await websockets.connect(
                uri,
                additional_headers={"Content-Type": "application/json"},
                open_timeout=open_timeout_s,
                close_timeout=close_timeout_s,
                max_size=None,
            )
        except Exception as exc:
            raise UpstreamConnectionError(f"failed to open upstream socket: {type(exc).__name__}") from exc
        return cls(conn)

    def is_open(self) -> bool:
        return self._conn.state is State.OPEN

    async def send_json(self, obj: dict[str, Any]) -> None:
        if not self.is_open():
            raise NotConnectedError("upstream socket is not open")
        try:
            await self._conn.send(orjson.dumps(obj).decode("utf-8"))
        except ConnectionClosed as exc:
            raise NotConnectedError("upstream socket closed during send") from exc

    async def receive(self) -> str | bytes | None:
        """Return one frame as received (text or binary), or None once the socket has closed."""
        try:
            raw = await self._conn.recv()
        except ConnectionClosed as exc:
            rcvd = exc.rcvd
            logger.info(
                "upstream socket closed code=%s reason=%s",
                rcvd.code if rcvd is not None else None,
                (rcvd.reason if rcvd is not None else "") or "<no reason>",
            )
            return None
        return raw

    def close_info(self) -> tuple[int | None, str]:
        code = getattr(self._conn, "close_code", None)
        reason = getattr(self._conn, "close_reason", None) or ""
        return code, reason

    async def close(self) -> None:
        """Perform the close handshake; returns once the peer acknowledged or the timeout elapsed."""
        await self._conn.close()


__all__ = ["UpstreamTransport"]
