"""Upstream receive loop: classify every AI-service frame and forward it to the client."""

from __future__ import annotations

import logging
from typing import Any

import orjson

from src.errors import NotConnectedError
from src.state.turn_state import TurnState
from src.state.session import SessionState
from src.handlers.tools.dispatcher import ToolDispatcher
from src.realtime.results import ReceiveFailed, UpstreamClosed
from src.realtime.server_frames import model_parts, is_interrupted, function_calls, is_turn_complete
from src.config.websocket import (
    WS_KEY_DATA,
    WS_EVENT_TEXT,
    WS_KEY_TURN_COMPLETE,
    WS_EVENT_INTERRUPTED,
    WS_EVENT_TURN_COMPLETE,
    WS_CLOSE_ABNORMAL_CODE,
    WS_EVENT_TURN_NOT_COMPLETE,
    WS_CLOSE_UPSTREAM_CLOSED_REASON,
)

logger = logging.getLogger(__name__)


def _decode_frame(raw: str | bytes, client_id: str) -> dict[str, Any] | None:
    try:
        frame = orjson.loads(raw)
    except orjson.JSONDecodeError:
        logger.error("client_id=%s failed to parse upstream frame", client_id)
        return None
    if not isinstance(frame, dict):
        logger.error("client_id=%s upstream frame is not an object", client_id)
        return None
    return frame


async def _handle_interruption(session: SessionState) -> None:
    # The client hears "interrupted" before the forced end-turn so it can flush playback first.
    logger.info("client_id=%s interrupted", session.client_id)
    session.turn.transition(TurnState.INTERRUPTED)
    await session.client.send_event(WS_EVENT_INTERRUPTED)
    try:
        await session.upstream.send_end()
    except NotConnectedError:
        logger.warning("client_id=%s could not close interrupted turn, upstream not open", session.client_id)
    except Exception:
        logger.exception("client_id=%s failed to close interrupted turn upstream", session.client_id)
    session.turn.transition(TurnState.LISTENING)
    await session.client.send_event(WS_EVENT_TURN_COMPLETE)


async def _forward_model_parts(session: SessionState, parts: list[dict[str, Any]], turn_complete: bool) -> None:
    if not turn_complete:
        await session.client.send_event(WS_EVENT_TURN_NOT_COMPLETE)

    for part in parts:
        if not session.client.is_open():
            break
        text = part.get("text")
        if isinstance(text, str) and text:
            logger.info("client_id=%s forwarding text: %r", session.client_id, text)
            await session.client.send_event(
                WS_EVENT_TEXT,
                **{WS_KEY_DATA: text.strip(), WS_KEY_TURN_COMPLETE: turn_complete},
            )
        elif "inlineData" in part:
            # Output audio is disabled; inline payloads are not forwarded.
            logger.debug("client_id=%s dropping inline data part", session.client_id)


async def handle_upstream_frame(session: SessionState, frame: dict[str, Any], dispatcher: ToolDispatcher) -> None:
    calls = function_calls(frame)
    if calls:
        await dispatcher.dispatch_all(calls, session.client, session.upstream, session.client_id)

    if is_interrupted(frame):
        await _handle_interruption(session)
        return

    turn_complete = is_turn_complete(frame)
    parts = model_parts(frame)
    if parts is not None:
        await _forward_model_parts(session, parts, turn_complete)

    if turn_complete:
        logger.debug("client_id=%s turn complete", session.client_id)
        session.turn.transition(TurnState.LISTENING)
        await session.client.send_event(WS_EVENT_TURN_COMPLETE)


async def run_receive_loop(session: SessionState, dispatcher: ToolDispatcher) -> None:
    """Pump upstream frames until the upstream closes or fails, or the client goes away.

    Client liveness is checked before each receive rather than by preempting the loop.
    When the upstream ends first the client is closed, which tears the session down.
    """
    client_id = session.client_id
    logger.info("client_id=%s receive loop starting", client_id)
    upstream_ended = False
    try:
        while True:
            if not session.client.is_open():
                logger.info("client_id=%s client closed, stopping receive loop", client_id)
                break

            result = await session.upstream.receive()
            if isinstance(result, UpstreamClosed):
                logger.info("client_id=%s upstream closed code=%s reason=%s", client_id, result.code, result.reason)
                upstream_ended = True
                break
            if isinstance(result, ReceiveFailed):
                logger.error("client_id=%s upstream receive failed: %s", client_id, result.error)
                upstream_ended = True
                break

            frame = _decode_frame(result.raw, client_id)
            if frame is None:
                continue
            try:
                await handle_upstream_frame(session, frame, dispatcher)
            except Exception:
                logger.exception("client_id=%s error forwarding upstream frame", client_id)
    finally:
        logger.info("client_id=%s receive loop stopped", client_id)

    if upstream_ended and session.client.is_open():
        await session.client.close(code=WS_CLOSE_ABNORMAL_CODE, reason=WS_CLOSE_UPSTREAM_CLOSED_REASON)


__all__ = ["handle_upstream_frame", "run_receive_loop"]
