"""Client WebSocket protocol configuration and constants."""

from __future__ import annotations

WS_ENDPOINT_PATH = "/ws/{client_id}"

# Frame keys
WS_KEY_KIND = "kind"
WS_KEY_DATA = "data"
WS_KEY_CONFIG = "config"
WS_KEY_TURN_COMPLETE = "turnComplete"

# Client -> relay frame kinds
WS_KIND_CONFIG = "config"
WS_KIND_TEXT = "text"
WS_KIND_IMAGE = "image"
WS_KIND_CONTINUE = "continue"
WS_KIND_END = "end"

# Relay -> client event kinds
WS_EVENT_READY = "ready"
WS_EVENT_TEXT = "text"
WS_EVENT_TOOL_TEXT = "tool_text"
WS_EVENT_END_CALL = "end_call"
WS_EVENT_TURN_NOT_COMPLETE = "turn_not_complete"
WS_EVENT_TURN_COMPLETE = "turn_complete"
WS_EVENT_INTERRUPTED = "interrupted"
WS_EVENT_ERROR = "error"

# Close codes
WS_CLOSE_NORMAL_CODE = 1000
WS_CLOSE_ABNORMAL_CODE = 1011
WS_CLOSE_BUSY_CODE = 4002
WS_CLOSE_DUPLICATE_CODE = 4003

WS_CLOSE_FIRST_MESSAGE_REASON = "First message must be 'config'"
WS_CLOSE_UPSTREAM_FAILED_REASON = "Failed to connect upstream"
WS_CLOSE_UPSTREAM_CLOSED_REASON = "Upstream session closed"

# Errors (data.code values)
WS_ERROR_INVALID_MESSAGE = "invalid_message"
WS_ERROR_NOT_CONFIGURED = "not_configured"
WS_ERROR_RATE_LIMITED = "rate_limited"
WS_ERROR_SERVER_AT_CAPACITY = "server_at_capacity"
WS_ERROR_SESSION_EXISTS = "session_exists"

__all__ = [
    "WS_ENDPOINT_PATH",
    "WS_KEY_KIND",
    "WS_KEY_DATA",
    "WS_KEY_CONFIG",
    "WS_KEY_TURN_COMPLETE",
    "WS_KIND_CONFIG",
    "WS_KIND_TEXT",
    "WS_KIND_IMAGE",
    "WS_KIND_CONTINUE",
    "WS_KIND_END",
    "WS_EVENT_READY",
    "WS_EVENT_TEXT",
    "WS_EVENT_TOOL_TEXT",
    "WS_EVENT_END_CALL",
    "WS_EVENT_TURN_NOT_COMPLETE",
    "WS_EVENT_TURN_COMPLETE",
    "WS_EVENT_INTERRUPTED",
    "WS_EVENT_ERROR",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_ABNORMAL_CODE",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_DUPLICATE_CODE",
    "WS_CLOSE_FIRST_MESSAGE_REASON",
    "WS_CLOSE_UPSTREAM_FAILED_REASON",
    "WS_CLOSE_UPSTREAM_CLOSED_REASON",
    "WS_ERROR_INVALID_MESSAGE",
    "WS_ERROR_NOT_CONFIGURED",
    "WS_ERROR_RATE_LIMITED",
    "WS_ERROR_SERVER_AT_CAPACITY",
    "WS_ERROR_SESSION_EXISTS",
]
