from src.config.tools import TOOL_END_CALL, TOOL_WRITE_TEXT

from .end_call import handle_end_call
from .write_text import handle_write_text
from .dispatcher import ToolHandler, ToolDispatcher


def build_default_dispatcher() -> ToolDispatcher:
    return ToolDispatcher(
        {
            TOOL_WRITE_TEXT: handle_write_text,
            TOOL_END_CALL: handle_end_call,
        }
    )


__all__ = [
    "ToolDispatcher",
    "ToolHandler",
    "build_default_dispatcher",
    "handle_end_call",
    "handle_write_text",
]
