"""Per-connection message rate limiting."""

from __future__ import annotations

import math
import time
from collections import deque
from collections.abc import Callable

from src.errors import RateLimitError
from src.transport.client import ClientTransport
from src.config.websocket import WS_ERROR_RATE_LIMITED

TimeFn = Callable[[], float]


class MessageRateLimiter:
    """Sliding window over the timestamps of accepted client frames.

    Disabled if limit <= 0 or window_seconds <= 0.
    """

    def __init__(self, *, limit: int, window_seconds: float, now_fn: TimeFn | None = None) -> None:
        self.limit = max(0, int(limit))
        self.window_seconds = max(0.0, float(window_seconds))
        self._now = now_fn or time.monotonic
        self._accepted: deque[float] = deque()

    @property
    def enabled(self) -> bool:
        return self.limit > 0 and self.window_seconds > 0

    def _expire(self, now: float) -> None:
        cutoff = now - self.window_seconds
        while self._accepted and self._accepted[0] <= cutoff:
            self._accepted.popleft()

    def consume(self) -> None:
        if not self.enabled:
            return
        now = self._now()
        self._expire(now)
        if len(self._accepted) >= self.limit:
            raise RateLimitError(
                retry_in=max(0.0, self._accepted[0] + self.window_seconds - now),
                limit=self.limit,
                window_seconds=self.window_seconds,
            )
        self._accepted.append(now)


async def consume_limiter(client: ClientTransport, limiter: MessageRateLimiter) -> bool:
    try:
        limiter.consume()
    except RateLimitError as exc:
        retry_in_s = max(1, math.ceil(exc.retry_in))
        await client.send_error(
            WS_ERROR_RATE_LIMITED,
            f"at most {exc.limit} messages per {int(exc.window_seconds)} seconds; retry in {retry_in_s} seconds",
        )
        return False
    return True


__all__ = ["MessageRateLimiter", "consume_limiter"]
