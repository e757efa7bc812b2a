"""Mapping helpers between the shared DTOs and google-genai types."""
from __future__ import annotations

import json
import uuid
from typing import Any, Dict, List, Optional, Sequence, Tuple

from google.genai import types

from ..base.dto.tools import Tool
from ..base.models_parts.completion_response import FinishReason
from ..base.models_parts.message import Message, ToolCall
from ..base.models_parts.usage_data import UsageData


def _response_payload(result: Any) -> Dict[str, Any]:
    """Function responses must be objects; text that is not a JSON object is wrapped."""
    if not isinstance(result, str):
        return dict(result)
    try:
        parsed = json.loads(result)
    except ValueError:
        return {"result": result}
    return parsed if isinstance(parsed, dict) else {"result": result}


def to_gemini_contents(messages: Sequence[Message]) -> Tuple[List[types.Content], Optional[str]]:
    """Convert messages to ``Content`` turns plus the joined system instruction.

    System messages are lifted into the system instruction. Tool results are
    sent as ``function_response`` parts named after the call they answer.
    """
    contents: List[types.Content] = []
    system_parts: List[str] = []
    call_names: Dict[str, str] = {}
    for msg in messages:
        if msg.role == "system":
            if msg.content:
                system_parts.append(msg.content)
            continue
        parts: List[types.Part] = []
        for result in msg.tool_results:
            parts.append(
                types.Part.from_function_response(
                    name=call_names.get(result.tool_call_id, result.tool_call_id),
                    response=_response_payload(result.result),
                )
            )
        if msg.content:
            parts.append(types.Part.from_text(text=msg.content))
        for call in msg.tool_calls:
            call_names[call.id] = call.name
            parts.append(types.Part.from_function_call(name=call.name, args=dict(call.arguments)))
        if parts:
            role = "model" if msg.role == "assistant" else "user"
            contents.append(types.Content(role=role, parts=parts))
    return contents, ("\n\n".join(system_parts) or None)


def to_gemini_tools(tools: Sequence[Tool]) -> List[types.Tool]:
    return [
        types.Tool(
            function_declarations=[
                types.FunctionDeclaration(
                    name=tool.name,
                    description=tool.description,
                    parameters_json_schema=tool.to_json_schema(),
                )
                for tool in tools
            ]
        )
    ]


def _parts(response: Any) -> List[Any]:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    content = getattr(candidates[0], "content", None)
    return list(getattr(content, "parts", None) or [])


def text_of(response: Any) -> str:
    """Concatenate the visible text parts of the first candidate."""
    return "".join(
        part.text for part in _parts(response) if getattr(part, "text", None) and not getattr(part, "thought", False)
    )


def tool_calls_of(response: Any) -> List[ToolCall]:
    calls: List[ToolCall] = []
    for part in _parts(response):
        fc = getattr(part, "function_call", None)
        if fc is None:
            continue
        calls.append(
            ToolCall(
                id=str(getattr(fc, "id", None) or f"call_{uuid.uuid4().hex[:8]}"),
                name=str(fc.name),
                arguments=dict(getattr(fc, "args", None) or {}),
            )
        )
    return calls


def finish_reason_of(response: Any) -> Optional[str]:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    reason = getattr(candidates[0], "finish_reason", None)
    if reason is None:
        return None
    return str(getattr(reason, "name", reason))


def map_finish_reason(reason: Optional[str], has_tool_calls: bool) -> FinishReason:
    if reason == "MAX_TOKENS":
        return "length"
    if has_tool_calls:
        return "tool_calls"
    return "stop"


def usage_from(metadata: Any, model: str) -> UsageData:
    """Read ``usage_metadata`` into ``UsageData`` (zero counts when absent)."""
    if metadata is None:
        return UsageData.empty(model)
    prompt = int(getattr(metadata, "prompt_token_count", 0) or 0)
    completion = int(getattr(metadata, "candidates_token_count", 0) or 0)
    total = getattr(metadata, "total_token_count", None)
    return UsageData(
        prompt_tokens=prompt,
        completion_tokens=completion,
        total_tokens=int(total) if total is not None else prompt + completion,
        model=model,
    )


__all__ = [
    "to_gemini_contents",
    "to_gemini_tools",
    "text_of",
    "tool_calls_of",
    "finish_reason_of",
    "map_finish_reason",
    "usage_from",
]
