"""Log noise filters for third-party libraries.

Only logger levels are touched: transport chatter from ``websockets`` frames and
per-request access lines drown out session logs at INFO.
"""

from __future__ import annotations

import os
import logging

from src.config.logging import NOISY_LOGGERS, ENV_SHOW_TRANSPORT_LOGS


def _show_transport_logs() -> bool:
    return (os.getenv(ENV_SHOW_TRANSPORT_LOGS) or "").strip().lower() in {"1", "true", "yes"}


def configure() -> None:
    if _show_transport_logs():
        return
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["configure"]
