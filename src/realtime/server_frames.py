"""Accessors for frames received from the upstream streaming endpoint.

Upstream frames look like ``{"toolCall": {"functionCalls": [...]}}`` or
``{"serverContent": {"modelTurn": {"parts": [...]}, "turnComplete": bool, "interrupted": bool}}``.
The interruption and completion flags may also appear at the top level.
"""

from __future__ import annotations

from typing import Any


def _server_content(frame: dict[str, Any]) -> dict[str, Any]:
    content = frame.get("serverContent")
    return content if isinstance(content, dict) else {}


def function_calls(frame: dict[str, Any]) -> list[dict[str, Any]]:
    tool_call = frame.get("toolCall")
    if not isinstance(tool_call, dict):
        return []
    calls = tool_call.get("functionCalls")
    if not isinstance(calls, list):
        return []
    return [call for call in calls if isinstance(call, dict)]


def is_interrupted(frame: dict[str, Any]) -> bool:
    return bool(frame.get("interrupted") or _server_content(frame).get("interrupted"))


def is_turn_complete(frame: dict[str, Any]) -> bool:
    return bool(frame.get("turnComplete") or _server_content(frame).get("turnComplete"))


def model_parts(frame: dict[str, Any]) -> list[dict[str, Any]] | None:
    """Return modelTurn parts, or None when the frame carries no model content."""
    model_turn = _server_content(frame).get("modelTurn")
    if not isinstance(model_turn, dict):
        return None
    parts = model_turn.get("parts")
    if not isinstance(parts, list):
        return []
    return [part for part in parts if isinstance(part, dict)]


__all__ = ["function_calls", "is_interrupted", "is_turn_complete", "model_parts"]
