"""Logging configuration (env-resolved constants only)."""

from __future__ import annotations

import os

ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_SHOW_TRANSPORT_LOGS = "SHOW_TRANSPORT_LOGS"

LOG_LEVEL: str = (os.getenv(ENV_LOG_LEVEL) or "INFO").strip().upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Loggers held at WARNING unless SHOW_TRANSPORT_LOGS is set.
NOISY_LOGGERS: tuple[str, ...] = ("websockets", "uvicorn.access")

__all__ = ["ENV_LOG_LEVEL", "ENV_SHOW_TRANSPORT_LOGS", "LOG_FORMAT", "LOG_LEVEL", "NOISY_LOGGERS"]
