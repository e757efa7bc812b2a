"""
Message DTOs used across providers.

Defines ``Message`` plus the tool-call attachments an assistant message can
carry and the tool results a follow-up message can return. Messages are
frozen: once placed in a request they cannot change.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal, Mapping, Tuple, Union


# Message roles used across providers.
Role = Literal["user", "assistant", "system"]


@dataclass(frozen=True)
class ToolCall:
    """A function invocation requested by the model.

    Attributes:
        id: Provider-assigned call id, echoed back in ``ToolResult``.
        name: Tool name.
        arguments: Parsed JSON arguments.
    """

    id: str
    name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "arguments", MappingProxyType(dict(self.arguments)))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "arguments": dict(self.arguments)}


@dataclass(frozen=True)
class ToolResult:
    """Result of running a tool, sent back to the model."""

    tool_call_id: str
    result: Union[str, Mapping[str, Any]]


@dataclass(frozen=True)
class Message:
    """A chat message.

    Attributes:
        role: ``"user"``, ``"assistant"`` or ``"system"``.
        content: Plain text content.
        tool_calls: Calls an assistant message requested.
        tool_results: Results a message returns for earlier calls.
    """

    role: Role
    content: str
    tool_calls: Tuple[ToolCall, ...] = ()
    tool_results: Tuple[ToolResult, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "tool_calls", tuple(self.tool_calls or ()))
        object.__setattr__(self, "tool_results", tuple(self.tool_results or ()))


__all__ = ["Role", "ToolCall", "ToolResult", "Message"]
