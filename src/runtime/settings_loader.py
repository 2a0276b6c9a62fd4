"""Environment parsing for runtime settings."""

from __future__ import annotations

import os

from src.config.secrets import get_gemini_api_key
from src.config.server import ENV_CORS_ALLOW_ORIGINS, DEFAULT_CORS_ALLOW_ORIGINS
from src.state.settings import AppSettings, LimitsSettings, ServerSettings, UpstreamSettings
from src.config.limits import (
    ENV_WS_MESSAGE_WINDOW_SECONDS,
    ENV_MAX_CONCURRENT_CONNECTIONS,
    ENV_WS_MAX_MESSAGES_PER_WINDOW,
    DEFAULT_WS_MESSAGE_WINDOW_SECONDS,
    DEFAULT_MAX_CONCURRENT_CONNECTIONS,
    DEFAULT_WS_MAX_MESSAGES_PER_WINDOW,
)
from src.config.upstream import (
    ENV_GEMINI_MODEL,
    ENV_GEMINI_WS_URL,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_GEMINI_WS_URL,
    ENV_UPSTREAM_IMAGE_PROMPT,
    ENV_UPSTREAM_OPEN_TIMEOUT_S,
    ENV_UPSTREAM_CLOSE_TIMEOUT_S,
    ENV_UPSTREAM_IMAGE_MIME_TYPE,
    DEFAULT_UPSTREAM_IMAGE_PROMPT,
    DEFAULT_UPSTREAM_OPEN_TIMEOUT_S,
    DEFAULT_UPSTREAM_CLOSE_TIMEOUT_S,
    DEFAULT_UPSTREAM_IMAGE_MIME_TYPE,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _csv_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    items = tuple(item.strip() for item in raw.split(",") if item.strip())
    return items or default


def _load_upstream_settings() -> UpstreamSettings:
    return UpstreamSettings(
        api_key=get_gemini_api_key(),
        model=_str_env(ENV_GEMINI_MODEL, DEFAULT_GEMINI_MODEL),
        ws_url=_str_env(ENV_GEMINI_WS_URL, DEFAULT_GEMINI_WS_URL),
        open_timeout_s=_float_env(ENV_UPSTREAM_OPEN_TIMEOUT_S, DEFAULT_UPSTREAM_OPEN_TIMEOUT_S),
        close_timeout_s=_float_env(ENV_UPSTREAM_CLOSE_TIMEOUT_S, DEFAULT_UPSTREAM_CLOSE_TIMEOUT_S),
        image_prompt=_str_env(ENV_UPSTREAM_IMAGE_PROMPT, DEFAULT_UPSTREAM_IMAGE_PROMPT),
        image_mime_type=_str_env(ENV_UPSTREAM_IMAGE_MIME_TYPE, DEFAULT_UPSTREAM_IMAGE_MIME_TYPE),
    )


def _load_limits_settings() -> LimitsSettings:
    return LimitsSettings(
        max_concurrent_connections=_int_env(ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS),
        ws_message_window_seconds=_float_env(ENV_WS_MESSAGE_WINDOW_SECONDS, DEFAULT_WS_MESSAGE_WINDOW_SECONDS),
        ws_max_messages_per_window=_int_env(ENV_WS_MAX_MESSAGES_PER_WINDOW, DEFAULT_WS_MAX_MESSAGES_PER_WINDOW),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        upstream=_load_upstream_settings(),
        limits=_load_limits_settings(),
        server=ServerSettings(cors_allow_origins=_csv_env(ENV_CORS_ALLOW_ORIGINS, DEFAULT_CORS_ALLOW_ORIGINS)),
    )


__all__ = ["load_settings"]
