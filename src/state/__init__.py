from .runtime import RuntimeDeps
from .session import SessionState
from .settings import AppSettings
from .turn_state import TurnState
from .config import SessionConfig, ToolDeclaration
from .tools import ToolCall, ToolResponse

__all__ = [
    "AppSettings",
    "RuntimeDeps",
    "SessionConfig",
    "SessionState",
    "ToolCall",
    "ToolDeclaration",
    "ToolResponse",
    "TurnState",
]
