"""
Structured output request and response types.

A ``StructuredOutputSchema`` is either a JSON schema mapping
(``JSON_SCHEMA``) or a free-text type description such as a TypeScript
interface (``TYPE_DESCRIPTION``). The response carries the parsed JSON object
next to the raw text.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from .completion_response import CompletionResponse


class StructuredOutputKind(str, Enum):
    JSON_SCHEMA = "json_schema"
    TYPE_DESCRIPTION = "typescript"


@dataclass(frozen=True)
class StructuredOutputSchema:
    """Schema the model output must follow.

    Attributes:
        kind: Schema flavour.
        schema: Mapping for ``JSON_SCHEMA``; text for ``TYPE_DESCRIPTION``.
        strict: Ask the vendor for strict schema adherence when supported.
        name: Schema name sent to vendors that require one.
    """

    kind: StructuredOutputKind
    schema: Union[Mapping[str, Any], str]
    strict: Optional[bool] = None
    name: str = "response"

    def schema_dict(self) -> Dict[str, Any]:
        """Return the JSON schema as a plain dict (empty for type descriptions)."""
        if isinstance(self.schema, Mapping):
            return _plain(self.schema)
        return {}


def _plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class StructuredOutputResponse(CompletionResponse):
    """Completion response with the parsed JSON object."""

    parsed_output: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "parsed_output", MappingProxyType(dict(self.parsed_output)))

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["parsed_output"] = _plain(self.parsed_output)
        return data


__all__ = [
    "StructuredOutputKind",
    "StructuredOutputSchema",
    "StructuredOutputResponse",
]
