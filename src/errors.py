"""Shared error types for the relay server."""

from __future__ import annotations

from dataclasses import dataclass


class RelayError(Exception):
    """Base class for relay-level failures."""


class ConfigurationError(RelayError, ValueError):
    """Raised when a session configuration is missing or malformed."""


class ProtocolError(RelayError):
    """Raised when a peer breaks the framing or handshake contract."""


class UpstreamConnectionError(RelayError, ConnectionError):
    """Raised when the upstream transport cannot be opened."""


class NotConnectedError(RelayError):
    """Raised when sending or receiving on a session that is not open."""


@dataclass(frozen=True, slots=True)
class IllegalTurnTransitionError(Exception):
    """Raised when the turn state machine is asked to take an illegal edge."""

    source: str
    target: str

    def __str__(self) -> str:
        return f"illegal turn transition {self.source} -> {self.target}"


@dataclass(frozen=True, slots=True)
class RateLimitError(Exception):
    """Raised when a sliding-window rate limiter is saturated."""

    retry_in: float
    limit: int
    window_seconds: float


__all__ = [
    "ConfigurationError",
    "IllegalTurnTransitionError",
    "NotConnectedError",
    "ProtocolError",
    "RateLimitError",
    "RelayError",
    "UpstreamConnectionError",
]
