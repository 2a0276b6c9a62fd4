"""Factory for upstream sessions bound to the configured AI endpoint."""

from __future__ import annotations

from src.state.settings import UpstreamSettings

from .upstream import UpstreamSession, TransportFactory


class RealtimeBridge:
    def __init__(self, settings: UpstreamSettings, *, transport_factory: TransportFactory | None = None) -> None:
        self._settings = settings
        self._transport_factory = transport_factory

    def new_session(self, client_id: str) -> UpstreamSession:
        return UpstreamSession(self._settings, transport_factory=self._transport_factory, label=client_id)


__all__ = ["RealtimeBridge"]
