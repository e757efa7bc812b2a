"""Structured output parsing and top-level schema checks."""

from __future__ import annotations

import pytest

from unified_llm.base.errors import StructuredOutputError
from unified_llm.base.models import (
    CompletionResponse,
    LLMProvider,
    StructuredOutputKind,
    StructuredOutputSchema,
    UsageData,
)
from unified_llm.base.structured import (
    clean_json_markers,
    parse_structured_output,
    to_structured_response,
    type_description_instruction,
    validate_against_schema,
)

PERSON = StructuredOutputSchema(
    StructuredOutputKind.JSON_SCHEMA,
    {
        "type": "object",
        "properties": {"name": {"type": "string"}, "age": {"type": "integer"}, "tags": {"type": "array"}},
        "required": ["name", "age"],
    },
)


@pytest.mark.parametrize(
    "raw",
    ['```json\n{"a": 1}\n```', '```\n{"a": 1}\n```', '  {"a": 1}  '],
)
def test_clean_json_markers(raw: str) -> None:
    assert clean_json_markers(raw) == '{"a": 1}'


def test_valid_output_is_parsed() -> None:
    parsed = parse_structured_output('```json\n{"name": "Ada", "age": 36}\n```', PERSON, LLMProvider.OPENAI)
    assert parsed == {"name": "Ada", "age": 36}


def test_invalid_json() -> None:
    with pytest.raises(StructuredOutputError) as excinfo:
        parse_structured_output("Sure! Here it is", PERSON, LLMProvider.GEMINI)
    details = excinfo.value.validation_details
    assert details["error"] == "invalid_json"
    assert details["content"] == "Sure! Here it is"
    assert excinfo.value.message == "Structured output validation failed for gemini provider"
    assert excinfo.value.retryable is False


def test_json_that_is_not_an_object() -> None:
    with pytest.raises(StructuredOutputError) as excinfo:
        parse_structured_output("[1, 2]", PERSON, LLMProvider.OPENAI)
    assert excinfo.value.validation_details == {"error": "not_an_object", "type": "list"}


def test_missing_keys_and_type_mismatches() -> None:
    with pytest.raises(StructuredOutputError) as excinfo:
        parse_structured_output('{"name": 5, "tags": []}', PERSON, LLMProvider.OPENAI)
    details = excinfo.value.validation_details
    assert details["missing_keys"] == ["age"]
    assert set(details["type_mismatches"]) == {"name"}


def test_booleans_are_not_numbers() -> None:
    problems = validate_against_schema({"age": True}, {"properties": {"age": {"type": "integer"}}})
    assert "age" in problems["type_mismatches"]


def test_union_types_and_unknown_types_accepted() -> None:
    schema = {"properties": {"v": {"type": ["string", "null"]}, "w": {"type": "custom"}}}
    assert validate_against_schema({"v": None, "w": 1}, schema) == {}


def test_type_description_only_requires_an_object() -> None:
    schema = StructuredOutputSchema(StructuredOutputKind.TYPE_DESCRIPTION, "interface R { answer: string }")
    assert parse_structured_output('{"anything": 1}', schema, LLMProvider.OPENAI) == {"anything": 1}
    instruction = type_description_instruction(schema)
    assert "JSON object" in instruction
    assert "interface R { answer: string }" in instruction


def test_to_structured_response_keeps_metadata() -> None:
    base = CompletionResponse(
        id="r9", content='{"name": "Ada", "age": 36}', status_code=200, usage=UsageData(5, 7, 12, "m"), finish_reason="stop"
    )
    structured = to_structured_response(base, PERSON, LLMProvider.OPENAI)
    assert structured.id == "r9"
    assert structured.usage.total_tokens == 12
    assert structured.content == base.content
    assert dict(structured.parsed_output) == {"name": "Ada", "age": 36}
