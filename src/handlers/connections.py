"""Admission control: caps how many client sessions the relay serves at once."""

from __future__ import annotations

import asyncio


class ConnectionManager:
    def __init__(self, *, max_connections: int) -> None:
        self._max = max(1, int(max_connections))
        self._lock = asyncio.Lock()
        self._admitted: dict[str, int] = {}

    @property
    def max_connections(self) -> int:
        return self._max

    async def admit(self, client_id: str) -> bool:
        """Reserve a slot for the connection (before it is accepted)."""
        async with self._lock:
            if self.get_connection_count() >= self._max:
                return False
            self._admitted[client_id] = self._admitted.get(client_id, 0) + 1
            return True

    async def release(self, client_id: str) -> None:
        async with self._lock:
            remaining = self._admitted.get(client_id, 0) - 1
            if remaining > 0:
                self._admitted[client_id] = remaining
            else:
                self._admitted.pop(client_id, None)

    def get_connection_count(self) -> int:
        return sum(self._admitted.values())


__all__ = ["ConnectionManager"]
