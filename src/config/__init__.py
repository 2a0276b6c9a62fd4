"""Configuration module exports (env names, defaults and protocol constants)."""

from .websocket import WS_ENDPOINT_PATH
from .upstream import DEFAULT_GEMINI_MODEL
from .limits import DEFAULT_MAX_CONCURRENT_CONNECTIONS

__all__ = [
    "DEFAULT_GEMINI_MODEL",
    "DEFAULT_MAX_CONCURRENT_CONNECTIONS",
    "WS_ENDPOINT_PATH",
]
