"""Per-client session state owned by the session registry."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.state.turn import TurnStateMachine
    from src.transport.client import ClientTransport
    from src.realtime.upstream import UpstreamSession


@dataclass(slots=True)
class SessionState:
    client_id: str
    client: ClientTransport
    upstream: UpstreamSession
    turn: TurnStateMachine
    configured: bool = False
    receive_task: asyncio.Task | None = None


__all__ = ["SessionState"]
