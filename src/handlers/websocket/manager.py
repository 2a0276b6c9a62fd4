"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket

from src.state.runtime import RuntimeDeps
from src.state.turn import TurnStateMachine
from src.state.session import SessionState
from src.transport.client import ClientTransport
from src.config.websocket import (
    WS_CLOSE_BUSY_CODE,
    WS_CLOSE_DUPLICATE_CODE,
    WS_ERROR_SESSION_EXISTS,
    WS_ERROR_SERVER_AT_CAPACITY,
)

from .errors import reject_connection
from .limits import MessageRateLimiter
from .message_loop import run_message_loop

logger = logging.getLogger(__name__)


def _create_rate_limiter(runtime_deps: RuntimeDeps) -> MessageRateLimiter:
    return MessageRateLimiter(
        limit=runtime_deps.settings.limits.ws_max_messages_per_window,
        window_seconds=runtime_deps.settings.limits.ws_message_window_seconds,
    )


async def _admit(client: ClientTransport, runtime_deps: RuntimeDeps) -> bool:
    if await runtime_deps.connections.admit(client.client_id):
        return True
    await reject_connection(
        client,
        error_code=WS_ERROR_SERVER_AT_CAPACITY,
        message="Server cannot accept new connections. Please try again later.",
        close_code=WS_CLOSE_BUSY_CODE,
    )
    return False


async def handle_websocket_connection(ws: WebSocket, client_id: str, runtime_deps: RuntimeDeps) -> None:
    client = ClientTransport(ws, client_id=client_id)
    if not await _admit(client, runtime_deps):
        return

    registered = False
    try:
        session = SessionState(
            client_id=client_id,
            client=client,
            upstream=runtime_deps.realtime_bridge.new_session(client_id),
            turn=TurnStateMachine(label=client_id),
        )
        if not await runtime_deps.registry.register(session):
            await reject_connection(
                client,
                error_code=WS_ERROR_SESSION_EXISTS,
                message="A session is already active for this client id.",
                close_code=WS_CLOSE_DUPLICATE_CODE,
            )
            return
        registered = True

        await client.accept()
        logger.info(
            "client_id=%s connected. Active: %s", client_id, runtime_deps.connections.get_connection_count()
        )
        await run_message_loop(session, runtime_deps, _create_rate_limiter(runtime_deps))
    except Exception:
        logger.exception("client_id=%s connection error", client_id)
    finally:
        if registered:
            await runtime_deps.registry.cleanup(client_id)
        with contextlib.suppress(Exception):
            await runtime_deps.connections.release(client_id)
        logger.info(
            "client_id=%s connection closed. Active: %s", client_id, runtime_deps.connections.get_connection_count()
        )


__all__ = ["handle_websocket_connection"]
