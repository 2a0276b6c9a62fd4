"""Client message loop: configuration handshake, then content frames upstream."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import WebSocketDisconnect

from src.errors import RelayError
from src.state.turn_state import TurnState
from src.state.runtime import RuntimeDeps
from src.state.session import SessionState
from src.config.websocket import (
    WS_KEY_KIND,
    WS_KEY_CONFIG,
    WS_KIND_CONFIG,
    WS_EVENT_READY,
    WS_CLOSE_ABNORMAL_CODE,
    WS_ERROR_NOT_CONFIGURED,
    WS_ERROR_INVALID_MESSAGE,
    WS_CLOSE_FIRST_MESSAGE_REASON,
    WS_CLOSE_UPSTREAM_FAILED_REASON,
)

from .dispatch import HANDLERS
from .limits import consume_limiter, MessageRateLimiter
from .receiver import run_receive_loop
from .parser import parse_client_message
from .errors import close_for_protocol_violation

logger = logging.getLogger(__name__)


async def _configure(session: SessionState, runtime_deps: RuntimeDeps) -> bool:
    """Handle the mandatory first frame; any failure closes the session."""
    raw = await session.client.receive()
    try:
        msg = parse_client_message(raw)
    except ValueError:
        msg = None
    if msg is None or msg[WS_KEY_KIND] != WS_KIND_CONFIG:
        await close_for_protocol_violation(
            session.client, close_code=WS_CLOSE_ABNORMAL_CODE, reason=WS_CLOSE_FIRST_MESSAGE_REASON
        )
        return False

    try:
        session.upstream.set_config(msg.get(WS_KEY_CONFIG))
        logger.info("client_id=%s connecting upstream", session.client_id)
        ack = await session.upstream.connect()
    except (RelayError, OSError) as exc:
        logger.error("client_id=%s failed to configure/connect upstream: %s", session.client_id, exc)
        await session.client.close(code=WS_CLOSE_ABNORMAL_CODE, reason=WS_CLOSE_UPSTREAM_FAILED_REASON)
        return False

    logger.info("client_id=%s upstream setup response: %s", session.client_id, ack)
    session.configured = True
    session.turn.transition(TurnState.LISTENING)
    await session.client.send_event(WS_EVENT_READY)
    session.receive_task = asyncio.create_task(
        run_receive_loop(session, runtime_deps.tool_dispatcher),
        name=f"upstream-receive:{session.client_id}",
    )
    return True


async def _parse_or_send_error(session: SessionState, raw: str) -> dict[str, Any] | None:
    try:
        return parse_client_message(raw)
    except ValueError as exc:
        logger.error("client_id=%s invalid client message: %s", session.client_id, exc)
        await session.client.send_error(WS_ERROR_INVALID_MESSAGE, str(exc))
        return None


async def _handle_message(session: SessionState, msg: dict[str, Any]) -> None:
    kind = msg[WS_KEY_KIND]
    if kind == WS_KIND_CONFIG:
        logger.warning("client_id=%s duplicate config ignored", session.client_id)
        return

    handler = HANDLERS.get(kind)
    if handler is None:
        logger.warning("client_id=%s unknown message kind: %s", session.client_id, kind)
        return

    if not session.configured:
        await session.client.send_error(WS_ERROR_NOT_CONFIGURED, "session is not configured yet")
        return

    try:
        await handler(session, msg)
    except RelayError as exc:
        logger.debug("client_id=%s dropped %s: %s", session.client_id, kind, exc)


async def run_message_loop(
    session: SessionState,
    runtime_deps: RuntimeDeps,
    limiter: MessageRateLimiter,
) -> None:
    try:
        if not await _configure(session, runtime_deps):
            return

        while True:
            raw = await session.client.receive()
            msg = await _parse_or_send_error(session, raw)
            if msg is None:
                continue
            if not await consume_limiter(session.client, limiter):
                continue
            await _handle_message(session, msg)
    except WebSocketDisconnect as exc:
        logger.warning("client_id=%s disconnected code=%s reason=%s", session.client_id, exc.code, exc.reason or "<no reason>")


__all__ = ["run_message_loop"]
