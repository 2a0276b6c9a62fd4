"""Tool dispatch constants."""

from __future__ import annotations

TOOL_WRITE_TEXT = "write_text"
TOOL_END_CALL = "end_call"

# Returned to the model with every acknowledgment so it keeps the conversation going.
TOOL_STATE_CONTINUE = "continue conversation"
TOOL_NOT_IMPLEMENTED_MESSAGE = "Tool not implemented: {name}"
TOOL_HANDLER_FAILED_MESSAGE = "Tool failed: {name}"

DEFAULT_END_CALL_REASON = "Call ended by AI"

__all__ = [
    "TOOL_WRITE_TEXT",
    "TOOL_END_CALL",
    "TOOL_STATE_CONTINUE",
    "TOOL_NOT_IMPLEMENTED_MESSAGE",
    "TOOL_HANDLER_FAILED_MESSAGE",
    "DEFAULT_END_CALL_REASON",
]
