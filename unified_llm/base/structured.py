"""
Structured output parsing and validation.

Model replies requested in JSON mode are parsed into a JSON object and
checked against the request schema before they are returned:

* Markdown code fences around the JSON are stripped.
* The reply must decode to a JSON object.
* For ``JSON_SCHEMA`` requests, every top-level ``required`` key must be
  present and top-level values must match the primitive ``type`` declared in
  ``properties``. Nested objects are not validated.

Failures raise ``StructuredOutputError`` with ``validation_details``.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Union

from ..i18n import get_string
from .errors_parts.structured_output_error import StructuredOutputError
from .models_parts.completion_response import CompletionResponse
from .models_parts.provider import LLMProvider
from .models_parts.structured import (
    StructuredOutputKind,
    StructuredOutputResponse,
    StructuredOutputSchema,
)

_JSON_TYPES: Dict[str, tuple] = {
    "string": (str,),
    "number": (int, float),
    "integer": (int,),
    "boolean": (bool,),
    "object": (dict,),
    "array": (list,),
    "null": (type(None),),
}


def clean_json_markers(text: str) -> str:
    """Strip Markdown code fences (```json ... ``` or ``` ... ```) and whitespace."""
    s = text.strip()
    if s.startswith("```json"):
        s = s[7:]
    elif s.startswith("```"):
        s = s[3:]
    if s.endswith("```"):
        s = s[:-3]
    return s.strip()


def type_description_instruction(schema: StructuredOutputSchema) -> str:
    """System instruction asking for JSON matching a free-text type description."""
    return (
        "Respond only with a JSON object that matches the following type definition. "
        "Do not add explanations or code fences.\n\n"
        f"{schema.schema}"
    )


def _matches(value: Any, declared: Union[str, List[str]]) -> bool:
    names = declared if isinstance(declared, list) else [declared]
    for name in names:
        accepted = _JSON_TYPES.get(name)
        if accepted is None:
            return True
        if isinstance(value, bool) and name in ("number", "integer"):
            continue
        if isinstance(value, accepted):
            return True
    return False


def validate_against_schema(data: Mapping[str, Any], schema: Mapping[str, Any]) -> Dict[str, Any]:
    """Return validation problems for ``data`` (empty dict when valid)."""
    problems: Dict[str, Any] = {}
    required = schema.get("required") or []
    missing = [key for key in required if key not in data]
    if missing:
        problems["missing_keys"] = missing
    properties = schema.get("properties") or {}
    mismatched: Dict[str, str] = {}
    for key, prop in properties.items():
        if key not in data or not isinstance(prop, Mapping) or "type" not in prop:
            continue
        if not _matches(data[key], prop["type"]):
            mismatched[key] = f"expected {prop['type']}, got {type(data[key]).__name__}"
    if mismatched:
        problems["type_mismatches"] = mismatched
    return problems


def parse_structured_output(
    content: str,
    schema: StructuredOutputSchema,
    provider: Union[LLMProvider, str],
) -> Dict[str, Any]:
    """Parse ``content`` into a JSON object that satisfies ``schema``.

    Raises
    ------
    StructuredOutputError
        When the content is not JSON, not an object, or violates the schema.
    """
    name = provider.value if isinstance(provider, LLMProvider) else str(provider)
    message = get_string("LLM_ERROR_STRUCTURED_OUTPUT_FAILED", {"provider": name})
    try:
        parsed = json.loads(clean_json_markers(content or ""))
    except ValueError as exc:
        raise StructuredOutputError(
            message,
            provider,
            validation_details={"error": "invalid_json", "detail": str(exc), "content": content},
        ) from exc
    if not isinstance(parsed, dict):
        raise StructuredOutputError(
            message,
            provider,
            validation_details={"error": "not_an_object", "type": type(parsed).__name__},
        )
    if schema.kind is StructuredOutputKind.JSON_SCHEMA and isinstance(schema.schema, Mapping):
        problems = validate_against_schema(parsed, schema.schema)
        if problems:
            raise StructuredOutputError(message, provider, validation_details=problems)
    return parsed


def to_structured_response(
    response: CompletionResponse,
    schema: StructuredOutputSchema,
    provider: Union[LLMProvider, str],
) -> StructuredOutputResponse:
    """Attach the parsed and validated output to a completion response."""
    parsed = parse_structured_output(response.content, schema, provider)
    return StructuredOutputResponse(
        id=response.id,
        content=response.content,
        status_code=response.status_code,
        usage=response.usage,
        finish_reason=response.finish_reason,
        status_reason=response.status_reason,
        tool_calls=response.tool_calls,
        parsed_output=parsed,
    )


__all__ = [
    "clean_json_markers",
    "type_description_instruction",
    "validate_against_schema",
    "parse_structured_output",
    "to_structured_response",
]
