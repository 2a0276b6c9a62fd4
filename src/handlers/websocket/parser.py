"""Client frame parsing/validation."""

from __future__ import annotations

import json
from typing import Any

from src.config.websocket import WS_KEY_KIND


def parse_client_message(raw: str) -> dict[str, Any]:
    try:
        msg = json.loads(raw)
    except Exception as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        raise ValueError("message must be a JSON object")

    kind = msg.get(WS_KEY_KIND)
    if not isinstance(kind, str) or not kind.strip():
        raise ValueError(f"message missing non-empty '{WS_KEY_KIND}'")

    msg[WS_KEY_KIND] = kind.strip()
    return msg


__all__ = ["parse_client_message"]
