"""
CompletionRequest DTO: the one request shape every provider accepts.

The request is frozen. List inputs for ``messages`` and ``tools`` are
coerced to tuples and ``provider_config`` is copied into a read-only mapping
so a request can be shared between concurrent calls.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Optional, Tuple

from .message import Message

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..dto.tools import Tool
    from .structured import StructuredOutputSchema


@dataclass(frozen=True)
class CompletionRequest:
    """Provider-agnostic completion request.

    Attributes:
        messages: Conversation to complete. Must be non-empty at dispatch time.
        temperature: Optional sampling temperature.
        max_tokens: Optional upper bound on generated tokens.
        top_p: Optional nucleus sampling value.
        tools: Tools the model may call.
        structured_output: Schema the output must follow.
        stream: Caller hint that the request is meant for streaming.
        provider_config: Extra keyword arguments forwarded verbatim to the
            vendor call (for example ``{"seed": 7}``).
    """

    messages: Tuple[Message, ...]
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None
    tools: Tuple["Tool", ...] = ()
    structured_output: Optional["StructuredOutputSchema"] = None
    stream: bool = False
    provider_config: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "messages", tuple(self.messages or ()))
        object.__setattr__(self, "tools", tuple(self.tools or ()))
        object.__setattr__(
            self, "provider_config", MappingProxyType(dict(self.provider_config or {}))
        )


__all__ = ["CompletionRequest"]
