"""Upstream session: the single connection to the AI streaming endpoint for one client."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from collections.abc import Callable, Awaitable

import orjson

from src.state.tools import ToolResponse
from src.state.config import SessionConfig
from src.state.settings import UpstreamSettings
from src.transport.upstream import UpstreamTransport
from src.errors import ProtocolError, NotConnectedError, ConfigurationError

from .results import FrameReceived, ReceiveFailed, ReceiveResult, UpstreamClosed
from .frames import (
    build_text_turn,
    build_empty_turn,
    build_image_turn,
    build_setup_frame,
    build_tool_response_frame,
)

logger = logging.getLogger(__name__)

TransportFactory = Callable[..., Awaitable[UpstreamTransport]]


class UpstreamSession:
    """Owns one upstream transport; sends are serialized by a per-session lock.

    ``connected`` is set once the transport opens and cleared when it closes, so a
    transport object left over from a previous connection is never reported open.
    """

    def __init__(
        self,
        settings: UpstreamSettings,
        *,
        transport_factory: TransportFactory | None = None,
        label: str = "unknown",
    ) -> None:
        self._settings = settings
        self._transport_factory = transport_factory or UpstreamTransport.open
        self._label = label
        self._config: SessionConfig | None = None
        self._transport: UpstreamTransport | None = None
        self._connected = False
        self._send_lock = asyncio.Lock()
        self._acked_tool_calls: set[str] = set()

    @property
    def config(self) -> SessionConfig | None:
        return self._config

    def set_config(self, config: SessionConfig | Any) -> SessionConfig:
        if not isinstance(config, SessionConfig):
            config = SessionConfig.from_payload(config)
        self._config = config
        return config

    def is_open(self) -> bool:
        return self._connected and self._transport is not None and self._transport.is_open()

    def _uri(self) -> str:
        if not self._settings.api_key:
            return self._settings.ws_url
        return f"{self._settings.ws_url}?key={self._settings.api_key}"

    async def connect(self) -> dict[str, Any]:
        """Open the transport, send setup and wait for exactly one acknowledgment frame."""
        if self._config is None:
            raise ConfigurationError("configuration must be set before connecting")
        if self.is_open():
            raise ProtocolError("upstream session is already connected")
        if self._transport is not None:
            await self._abandon()

        logger.info("upstream %s: connecting model=%s", self._label, self._settings.model)
        transport = await self._transport_factory(
            self._uri(),
            open_timeout_s=self._settings.open_timeout_s,
            close_timeout_s=self._settings.close_timeout_s,
        )
        self._transport = transport
        self._connected = True

        try:
            await self._send(build_setup_frame(self._settings.model, self._config))
            raw = await transport.receive()
        except NotConnectedError as exc:
            await self._abandon()
            raise ProtocolError("upstream closed while sending setup") from exc
        except Exception:
            await self._abandon()
            raise

        if raw is None:
            await self._abandon()
            raise ProtocolError("upstream closed before setup acknowledgment")
        try:
            ack = orjson.loads(raw)
        except orjson.JSONDecodeError as exc:
            await self._abandon()
            raise ProtocolError("setup acknowledgment is not valid JSON") from exc

        logger.info("upstream %s: setup acknowledged", self._label)
        return ack if isinstance(ack, dict) else {"ack": ack}

    async def _send(self, frame: dict[str, Any]) -> None:
        async with self._send_lock:
            if not self.is_open() or self._transport is None:
                raise NotConnectedError("upstream session is not open")
            await self._transport.send_json(frame)

    async def send_text(self, text: str) -> None:
        logger.debug("upstream %s: sending text", self._label)
        await self._send(build_text_turn(text))

    async def send_image(self, image_b64: str) -> None:
        logger.debug("upstream %s: sending image", self._label)
        await self._send(
            build_image_turn(
                image_b64,
                prompt=self._settings.image_prompt,
                mime_type=self._settings.image_mime_type,
            )
        )

    async def send_continue(self, envelope: dict[str, Any] | None = None) -> None:
        await self._send(envelope if isinstance(envelope, dict) else build_empty_turn(turn_complete=False))

    async def send_end(self, envelope: dict[str, Any] | None = None) -> None:
        await self._send(envelope if isinstance(envelope, dict) else build_empty_turn(turn_complete=True))

    async def send_tool_response(self, response: ToolResponse) -> None:
        await self._send(build_tool_response_frame([response.to_payload()]))
        self._acked_tool_calls.add(response.id)

    def consume_tool_ack(self, call_id: str) -> bool:
        """Return whether a response for ``call_id`` was sent, forgetting it afterwards."""
        if call_id in self._acked_tool_calls:
            self._acked_tool_calls.discard(call_id)
            return True
        return False

    async def receive(self) -> ReceiveResult:
        transport = self._transport
        if transport is None:
            return UpstreamClosed(reason="session closed")
        try:
            raw = await transport.receive()
        except Exception as exc:
            logger.error("upstream %s: receive failed: %s", self._label, exc)
            return ReceiveFailed(error=exc)
        if raw is None:
            self._connected = False
            code, reason = transport.close_info()
            return UpstreamClosed(code=code, reason=reason)
        return FrameReceived(raw=raw)

    async def _abandon(self) -> None:
        transport = self._transport
        self._connected = False
        self._transport = None
        if transport is not None:
            try:
                await transport.close()
            except Exception:
                logger.debug("upstream %s: close after failed setup raised", self._label, exc_info=True)

    def _clear(self) -> None:
        self._connected = False
        self._transport = None
        self._config = None
        self._acked_tool_calls.clear()

    async def close(self) -> None:
        transport = self._transport
        if transport is None or not self.is_open():
            logger.info("upstream %s: not open or already closed", self._label)
            self._clear()
            return
        logger.info("upstream %s: closing", self._label)
        try:
            await transport.close()
        finally:
            self._clear()


__all__ = ["UpstreamSession"]
