"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from src.state.settings import AppSettings
    from src.realtime.bridge import RealtimeBridge
    from src.handlers.registry import SessionRegistry
    from src.handlers.connections import ConnectionManager
    from src.handlers.tools.dispatcher import ToolDispatcher


@dataclass(slots=True)
class RuntimeDeps:
    connections: ConnectionManager
    realtime_bridge: RealtimeBridge
    registry: SessionRegistry
    tool_dispatcher: ToolDispatcher
    settings: AppSettings

    async def shutdown(self) -> None:
        try:
            await self.registry.close_all()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps"]
