"""Error helpers for the client WebSocket."""

from __future__ import annotations

import logging

from src.transport.client import ClientTransport

logger = logging.getLogger(__name__)


async def reject_connection(
    client: ClientTransport,
    *,
    error_code: str,
    message: str,
    close_code: int,
) -> None:
    # Accept so we can send a structured error, then close.
    try:
        await client.accept()
    except Exception:
        return
    await client.send_error(error_code, message)
    await client.close(code=close_code, reason=message)


async def close_for_protocol_violation(client: ClientTransport, *, close_code: int, reason: str) -> None:
    logger.error("client_id=%s protocol violation: %s", client.client_id, reason)
    await client.close(code=close_code, reason=reason)


__all__ = ["close_for_protocol_violation", "reject_connection"]
