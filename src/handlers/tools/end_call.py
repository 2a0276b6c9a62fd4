"""`end_call` tool: the model asks the client to hang up."""

from __future__ import annotations

import logging

from src.state.tools import ToolCall, ToolResponse
from src.transport.client import ClientTransport
from src.realtime.upstream import UpstreamSession
from src.config.tools import DEFAULT_END_CALL_REASON
from src.config.websocket import WS_KEY_DATA, WS_EVENT_END_CALL

logger = logging.getLogger(__name__)


async def handle_end_call(call: ToolCall, client: ClientTransport, upstream: UpstreamSession) -> None:
    await upstream.send_tool_response(ToolResponse.ack(call))

    reason = call.args.get("reason") or DEFAULT_END_CALL_REASON
    await client.send_event(WS_EVENT_END_CALL, **{WS_KEY_DATA: str(reason)})
    logger.info("end_call client_id=%s reason=%r", client.client_id, reason)


__all__ = ["handle_end_call"]
