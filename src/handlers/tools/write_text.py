"""`write_text` tool: show text extracted by the model on the technician's screen."""

from __future__ import annotations

import logging

from src.state.tools import ToolCall, ToolResponse
from src.transport.client import ClientTransport
from src.realtime.upstream import UpstreamSession
from src.config.websocket import WS_KEY_DATA, WS_EVENT_TOOL_TEXT

logger = logging.getLogger(__name__)


async def handle_write_text(call: ToolCall, client: ClientTransport, upstream: UpstreamSession) -> None:
    # Acknowledge first so the upstream turn never waits on client I/O.
    await upstream.send_tool_response(ToolResponse.ack(call))

    text = call.args.get("text") or ""
    logger.info("write_text client_id=%s text=%r", client.client_id, text)
    await client.send_event(WS_EVENT_TOOL_TEXT, **{WS_KEY_DATA: str(text)})


__all__ = ["handle_write_text"]
