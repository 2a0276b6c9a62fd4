"""Process-wide registry mapping client ids to their live sessions."""

from __future__ import annotations

import asyncio
import logging
import contextlib

from src.state.session import SessionState

logger = logging.getLogger(__name__)


async def _stop_receive_task(session: SessionState) -> None:
    task = session.receive_task
    session.receive_task = None
    if task is None or task.done() or task is asyncio.current_task():
        return
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError, Exception):
        await task


class SessionRegistry:
    """Holds at most one session per client id; cleanup is idempotent."""

    def __init__(self) -> None:
        self._sessions: dict[str, SessionState] = {}
        self._lock = asyncio.Lock()

    async def register(self, session: SessionState) -> bool:
        async with self._lock:
            if session.client_id in self._sessions:
                return False
            self._sessions[session.client_id] = session
            return True

    def get(self, client_id: str) -> SessionState | None:
        return self._sessions.get(client_id)

    def __contains__(self, client_id: object) -> bool:
        return client_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    async def cleanup(self, client_id: str) -> bool:
        async with self._lock:
            session = self._sessions.pop(client_id, None)
        if session is None:
            logger.info("cleanup: no active session for client_id=%s", client_id)
            return False

        logger.info("cleanup: closing upstream session for client_id=%s", client_id)
        try:
            await session.upstream.close()
        except Exception:
            logger.exception("cleanup: error closing upstream session for client_id=%s", client_id)
        await _stop_receive_task(session)
        session.configured = False
        session.turn.reset()
        return True

    async def close_all(self) -> None:
        for client_id in list(self._sessions):
            await self.cleanup(client_id)


__all__ = ["SessionRegistry"]
