"""Builders for frames sent to the upstream streaming endpoint."""

from __future__ import annotations

from typing import Any
from collections.abc import Iterable

from src.state.config import SessionConfig
from src.config.upstream import UPSTREAM_RESPONSE_MODALITIES

ROLE_USER = "user"


def build_setup_frame(model: str, config: SessionConfig) -> dict[str, Any]:
    setup: dict[str, Any] = {
        "model": f"models/{model}",
        "generation_config": {"response_modalities": list(UPSTREAM_RESPONSE_MODALITIES)},
        "system_instruction": {"parts": [{"text": config.system_prompt}]},
    }
    tools = config.tools_payload()
    if tools:
        setup["tools"] = tools
    return {"setup": setup}


def build_client_content(parts: list[dict[str, Any]], *, turn_complete: bool) -> dict[str, Any]:
    return {
        "client_content": {
            "turns": [{"role": ROLE_USER, "parts": parts}],
            "turn_complete": turn_complete,
        }
    }


def build_text_turn(text: str) -> dict[str, Any]:
    return build_client_content([{"text": text}], turn_complete=True)


def build_image_turn(image_b64: str, *, prompt: str, mime_type: str) -> dict[str, Any]:
    # client_content (not realtime_input) so the image is answered as a complete turn.
    parts: list[dict[str, Any]] = []
    if prompt:
        parts.append({"text": prompt})
    parts.append({"inline_data": {"mime_type": mime_type, "data": image_b64}})
    return build_client_content(parts, turn_complete=True)


def build_empty_turn(*, turn_complete: bool) -> dict[str, Any]:
    return build_client_content([], turn_complete=turn_complete)


def build_tool_response_frame(responses: Iterable[dict[str, Any]]) -> dict[str, Any]:
    return {"tool_response": {"function_responses": list(responses)}}


__all__ = [
    "build_client_content",
    "build_empty_turn",
    "build_image_turn",
    "build_setup_frame",
    "build_text_turn",
    "build_tool_response_frame",
]
