"""Session configuration supplied by the client as its first frame."""

from __future__ import annotations

from typing import Any
from types import MappingProxyType
from dataclasses import field, dataclass
from collections.abc import Mapping

from src.errors import ConfigurationError

_KEY_SYSTEM_PROMPT = "systemPrompt"
_KEY_TOOLS = "tools"
_KEY_FUNCTION_DECLARATIONS = "function_declarations"


@dataclass(frozen=True, slots=True)
class ToolDeclaration:
    name: str
    description: str = ""
    parameters: Mapping[str, Any] | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> ToolDeclaration:
        if not isinstance(payload, Mapping):
            raise ConfigurationError("tool declaration must be an object")
        name = payload.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError("tool declaration missing non-empty 'name'")
        description = payload.get("description")
        parameters = payload.get("parameters")
        if parameters is not None and not isinstance(parameters, Mapping):
            raise ConfigurationError(f"tool '{name}' parameters must be an object")
        return cls(
            name=name.strip(),
            description=description if isinstance(description, str) else "",
            parameters=parameters,
        )

    def to_payload(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "description": self.description}
        if self.parameters is not None:
            out["parameters"] = dict(self.parameters)
        return out


def _parse_tools(raw: Any) -> tuple[ToolDeclaration, ...]:
    """Accept Gemini's grouped shape or a flat list of declarations."""
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ConfigurationError("'tools' must be a list")

    declarations: list[ToolDeclaration] = []
    for entry in raw:
        if isinstance(entry, Mapping) and _KEY_FUNCTION_DECLARATIONS in entry:
            group = entry[_KEY_FUNCTION_DECLARATIONS]
            if not isinstance(group, list):
                raise ConfigurationError("'function_declarations' must be a list")
            declarations.extend(ToolDeclaration.from_payload(item) for item in group)
            continue
        declarations.append(ToolDeclaration.from_payload(entry))
    return tuple(declarations)


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Immutable once set: system prompt, tool declarations and behavioral flags."""

    system_prompt: str
    tools: tuple[ToolDeclaration, ...] = ()
    flags: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_payload(cls, payload: Any) -> SessionConfig:
        if not isinstance(payload, Mapping):
            raise ConfigurationError("config must be an object")

        system_prompt = payload.get(_KEY_SYSTEM_PROMPT)
        if not isinstance(system_prompt, str):
            raise ConfigurationError(f"config missing string '{_KEY_SYSTEM_PROMPT}'")

        tools = _parse_tools(payload.get(_KEY_TOOLS))
        flags = {k: v for k, v in payload.items() if k not in {_KEY_SYSTEM_PROMPT, _KEY_TOOLS}}
        return cls(system_prompt=system_prompt, tools=tools, flags=MappingProxyType(flags))

    def tools_payload(self) -> list[dict[str, Any]]:
        if not self.tools:
            return []
        return [{_KEY_FUNCTION_DECLARATIONS: [tool.to_payload() for tool in self.tools]}]


__all__ = ["SessionConfig", "ToolDeclaration"]
