"""Mapping helpers between the shared DTOs and the OpenAI chat completions API.

Kept free of SDK imports: inputs are plain DTOs and outputs are the dicts the
SDK accepts; vendor responses are read by attribute so tests can use simple
fakes.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..base.dto.tools import Tool
from ..base.models_parts.completion_response import FinishReason
from ..base.models_parts.message import Message, ToolCall
from ..base.models_parts.structured import StructuredOutputKind, StructuredOutputSchema
from ..base.models_parts.usage_data import UsageData
from ..base.structured import type_description_instruction

_FINISH_REASONS: Dict[str, FinishReason] = {
    "stop": "stop",
    "length": "length",
    "tool_calls": "tool_calls",
    "function_call": "tool_calls",
}


def _result_text(result: Any) -> str:
    return result if isinstance(result, str) else json.dumps(dict(result), ensure_ascii=False)


def to_openai_messages(messages: Sequence[Message], system_prefix: Optional[str] = None) -> List[Dict[str, Any]]:
    """Convert messages to chat completions entries.

    Tool results become ``role="tool"`` entries placed before the message's
    own text so they directly follow the assistant turn that requested them.
    """
    out: List[Dict[str, Any]] = []
    if system_prefix:
        out.append({"role": "system", "content": system_prefix})
    for msg in messages:
        for result in msg.tool_results:
            out.append({"role": "tool", "tool_call_id": result.tool_call_id, "content": _result_text(result.result)})
        if msg.role == "assistant" and msg.tool_calls:
            out.append(
                {
                    "role": "assistant",
                    "content": msg.content or None,
                    "tool_calls": [
                        {
                            "id": call.id,
                            "type": "function",
                            "function": {"name": call.name, "arguments": json.dumps(dict(call.arguments))},
                        }
                        for call in msg.tool_calls
                    ],
                }
            )
        elif msg.content or not msg.tool_results:
            out.append({"role": msg.role, "content": msg.content})
    return out


def to_openai_tools(tools: Iterable[Tool]) -> List[Dict[str, Any]]:
    return [
        {
            "type": "function",
            "function": {
                "name": tool.name,
                "description": tool.description,
                "parameters": tool.to_json_schema(),
            },
        }
        for tool in tools
    ]


def response_format_for(schema: StructuredOutputSchema) -> Dict[str, Any]:
    """Return the ``response_format`` parameter for a structured output schema."""
    if schema.kind is StructuredOutputKind.TYPE_DESCRIPTION:
        return {"type": "json_object"}
    json_schema: Dict[str, Any] = {"name": schema.name, "schema": schema.schema_dict()}
    if schema.strict is not None:
        json_schema["strict"] = schema.strict
    return {"type": "json_schema", "json_schema": json_schema}


def system_prefix_for(schema: Optional[StructuredOutputSchema]) -> Optional[str]:
    if schema is not None and schema.kind is StructuredOutputKind.TYPE_DESCRIPTION:
        return type_description_instruction(schema)
    return None


def parse_arguments(raw: Optional[str]) -> Dict[str, Any]:
    """Decode tool call arguments; undecodable text is kept under ``__raw__``."""
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except ValueError:
        return {"__raw__": raw}
    return parsed if isinstance(parsed, dict) else {"__raw__": raw}


def tool_calls_from_message(message: Any) -> List[ToolCall]:
    calls: List[ToolCall] = []
    for call in getattr(message, "tool_calls", None) or []:
        fn = getattr(call, "function", None)
        if fn is None:
            continue
        calls.append(ToolCall(id=str(call.id), name=str(fn.name), arguments=parse_arguments(fn.arguments)))
    return calls


def map_finish_reason(reason: Optional[str], has_tool_calls: bool = False) -> FinishReason:
    if reason in _FINISH_REASONS:
        return _FINISH_REASONS[reason]
    return "tool_calls" if has_tool_calls else "stop"


def usage_from(raw_usage: Any, model: str) -> UsageData:
    """Read a ``CompletionUsage`` (or ``None``) into ``UsageData``."""
    if raw_usage is None:
        return UsageData.empty(model)
    prompt = int(getattr(raw_usage, "prompt_tokens", 0) or 0)
    completion = int(getattr(raw_usage, "completion_tokens", 0) or 0)
    total = getattr(raw_usage, "total_tokens", None)
    return UsageData(
        prompt_tokens=prompt,
        completion_tokens=completion,
        total_tokens=int(total) if total is not None else prompt + completion,
        model=model,
    )


class ToolCallAccumulator:
    """Collects streamed tool call deltas by index into complete calls."""

    def __init__(self) -> None:
        self._calls: Dict[int, Dict[str, Any]] = {}

    def add(self, deltas: Optional[Sequence[Any]]) -> None:
        for delta in deltas or ():
            entry = self._calls.setdefault(int(getattr(delta, "index", 0) or 0), {"id": None, "name": "", "args": []})
            if getattr(delta, "id", None):
                entry["id"] = delta.id
            fn = getattr(delta, "function", None)
            if fn is not None:
                if getattr(fn, "name", None):
                    entry["name"] = fn.name
                if getattr(fn, "arguments", None):
                    entry["args"].append(fn.arguments)

    def __bool__(self) -> bool:
        return bool(self._calls)

    def calls(self) -> List[ToolCall]:
        return [
            ToolCall(
                id=str(entry["id"] or f"call_{index}"),
                name=entry["name"],
                arguments=parse_arguments("".join(entry["args"])),
            )
            for index, entry in sorted(self._calls.items())
        ]


def error_body(error: Any) -> Mapping[str, Any]:
    """Return the ``error`` object of an API error body (empty when absent)."""
    body = getattr(error, "body", None)
    if isinstance(body, Mapping):
        inner = body.get("error", body)
        if isinstance(inner, Mapping):
            return inner
    return {}


__all__ = [
    "to_openai_messages",
    "to_openai_tools",
    "response_format_for",
    "system_prefix_for",
    "parse_arguments",
    "tool_calls_from_message",
    "map_finish_reason",
    "usage_from",
    "ToolCallAccumulator",
    "error_body",
]
