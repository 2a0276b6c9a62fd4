"""Handlers for content frames arriving from the client."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Callable, Awaitable

from src.state.session import SessionState
from src.config.websocket import (
    WS_KEY_DATA,
    WS_KIND_END,
    WS_KIND_TEXT,
    WS_KIND_IMAGE,
    WS_KIND_CONTINUE,
)

logger = logging.getLogger(__name__)

HandlerFn = Callable[[SessionState, dict[str, Any]], Awaitable[None]]


def _upstream_ready(session: SessionState, kind: str) -> bool:
    # Frames arriving mid-teardown are expected; drop them quietly.
    if session.upstream.is_open():
        return True
    logger.debug("client_id=%s upstream not open, ignoring %s", session.client_id, kind)
    return False


def _client_envelope(data: Any) -> dict[str, Any] | None:
    if isinstance(data, dict) and "client_content" in data:
        return data
    return None


async def _handle_text(session: SessionState, msg: dict[str, Any]) -> None:
    text = msg.get(WS_KEY_DATA)
    if not isinstance(text, str) or not text.strip():
        logger.warning("client_id=%s text frame without text data", session.client_id)
        return
    if not _upstream_ready(session, WS_KIND_TEXT):
        return
    await session.upstream.send_text(text)


async def _handle_image(session: SessionState, msg: dict[str, Any]) -> None:
    image = msg.get(WS_KEY_DATA)
    if not isinstance(image, str) or not image:
        logger.warning("client_id=%s image frame without base64 data", session.client_id)
        return
    if not _upstream_ready(session, WS_KIND_IMAGE):
        return
    await session.upstream.send_image(image)


async def _handle_continue(session: SessionState, msg: dict[str, Any]) -> None:
    if not _upstream_ready(session, WS_KIND_CONTINUE):
        return
    await session.upstream.send_continue(_client_envelope(msg.get(WS_KEY_DATA)))


async def _handle_end(session: SessionState, msg: dict[str, Any]) -> None:
    if not _upstream_ready(session, WS_KIND_END):
        return
    await session.upstream.send_end(_client_envelope(msg.get(WS_KEY_DATA)))


HANDLERS: dict[str, HandlerFn] = {
    WS_KIND_TEXT: _handle_text,
    WS_KIND_IMAGE: _handle_image,
    WS_KIND_CONTINUE: _handle_continue,
    WS_KIND_END: _handle_end,
}

__all__ = ["HANDLERS", "HandlerFn"]
