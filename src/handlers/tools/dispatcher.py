"""Route model-initiated tool calls to their handlers."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Mapping, Callable, Iterable, Awaitable

from src.errors import ProtocolError, NotConnectedError
from src.state.tools import ToolCall, ToolResponse
from src.transport.client import ClientTransport
from src.realtime.upstream import UpstreamSession
from src.config.tools import TOOL_HANDLER_FAILED_MESSAGE, TOOL_NOT_IMPLEMENTED_MESSAGE

logger = logging.getLogger(__name__)

ToolHandler = Callable[[ToolCall, ClientTransport, UpstreamSession], Awaitable[None]]


class ToolDispatcher:
    """Guarantees one tool response upstream per call.

    Handlers send their own acknowledgment before any side effect. When a handler
    fails or returns without acknowledging, the dispatcher sends the missing response
    itself; it never sends a second one.
    """

    def __init__(self, handlers: Mapping[str, ToolHandler] | None = None) -> None:
        self._handlers: dict[str, ToolHandler] = dict(handlers or {})

    def register(self, name: str, handler: ToolHandler) -> None:
        self._handlers[name] = handler

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._handlers)

    async def _respond(self, upstream: UpstreamSession, response: ToolResponse, session_id: str) -> None:
        try:
            await upstream.send_tool_response(response)
        except NotConnectedError:
            logger.warning("tool response for %s dropped, upstream closed client_id=%s", response.name, session_id)
            return
        except Exception:
            logger.exception("tool response for %s failed client_id=%s", response.name, session_id)
            return
        upstream.consume_tool_ack(response.id)

    async def dispatch(
        self,
        call: ToolCall,
        client: ClientTransport,
        upstream: UpstreamSession,
        session_id: str,
    ) -> None:
        logger.info("tool call client_id=%s name=%s id=%s args=%s", session_id, call.name, call.id, dict(call.args))

        handler = self._handlers.get(call.name)
        if handler is None:
            logger.warning("unrecognized tool %r client_id=%s", call.name, session_id)
            message = TOOL_NOT_IMPLEMENTED_MESSAGE.format(name=call.name)
            await self._respond(upstream, ToolResponse.failure(call, message), session_id)
            return

        try:
            await handler(call, client, upstream)
        except Exception:
            logger.exception("tool %s failed client_id=%s", call.name, session_id)
            if not upstream.consume_tool_ack(call.id):
                message = TOOL_HANDLER_FAILED_MESSAGE.format(name=call.name)
                await self._respond(upstream, ToolResponse.failure(call, message), session_id)
            return

        if not upstream.consume_tool_ack(call.id):
            logger.warning("tool %s returned without acknowledging client_id=%s", call.name, session_id)
            await self._respond(upstream, ToolResponse.ack(call), session_id)

    async def dispatch_all(
        self,
        calls: Iterable[Mapping[str, Any]],
        client: ClientTransport,
        upstream: UpstreamSession,
        session_id: str,
    ) -> None:
        """Dispatch sequentially, preserving the order the model emitted the calls in."""
        for payload in calls:
            try:
                call = ToolCall.from_payload(payload)
            except ProtocolError as exc:
                logger.warning("skipping malformed function call client_id=%s: %s", session_id, exc)
                continue
            await self.dispatch(call, client, upstream, session_id)


__all__ = ["ToolDispatcher", "ToolHandler"]
