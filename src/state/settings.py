"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UpstreamSettings:
    api_key: str
    model: str
    ws_url: str
    open_timeout_s: float
    close_timeout_s: float
    image_prompt: str
    image_mime_type: str


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_concurrent_connections: int
    ws_message_window_seconds: float
    ws_max_messages_per_window: int


@dataclass(frozen=True, slots=True)
class ServerSettings:
    cors_allow_origins: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class AppSettings:
    upstream: UpstreamSettings
    limits: LimitsSettings
    server: ServerSettings


__all__ = [
    "AppSettings",
    "LimitsSettings",
    "ServerSettings",
    "UpstreamSettings",
]
