"""Tool call and tool response records (transient, never persisted)."""

from __future__ import annotations

from typing import Any
from types import MappingProxyType
from dataclasses import field, dataclass
from collections.abc import Mapping

from src.errors import ProtocolError
from src.config.tools import TOOL_STATE_CONTINUE


@dataclass(frozen=True, slots=True)
class ToolCall:
    id: str
    name: str
    args: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> ToolCall:
        name = payload.get("name")
        if not isinstance(name, str) or not name:
            raise ProtocolError("function call missing 'name'")
        call_id = payload.get("id")
        args = payload.get("args")
        return cls(
            id="" if call_id is None else str(call_id),
            name=name,
            args=MappingProxyType(dict(args)) if isinstance(args, Mapping) else MappingProxyType({}),
        )


@dataclass(frozen=True, slots=True)
class ToolResponse:
    id: str
    name: str
    rendered: bool = True
    state: str = TOOL_STATE_CONTINUE
    error: str | None = None

    @classmethod
    def ack(cls, call: ToolCall) -> ToolResponse:
        return cls(id=call.id, name=call.name)

    @classmethod
    def failure(cls, call: ToolCall, message: str) -> ToolResponse:
        return cls(id=call.id, name=call.name, error=message)

    def to_payload(self) -> dict[str, Any]:
        response: dict[str, Any] = {"rendered": self.rendered, "state": self.state}
        if self.error is not None:
            response["error"] = {"message": self.error}
        return {"id": self.id, "name": self.name, "response": response}


__all__ = ["ToolCall", "ToolResponse"]
