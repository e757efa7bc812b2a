"""
CompletionResponse DTO.

The same shape doubles as the normalized error payload produced by
``parse_provider_error``: ``finish_reason == "error"``, the vendor status in
``status_code`` and the native error in ``raw_provider_error``. Such payloads
are consumed by the error translator and never returned to callers.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Tuple

from .message import ToolCall
from .opaque import OpaquePayload
from .usage_data import UsageData

FinishReason = Literal["stop", "tool_calls", "length", "error"]


@dataclass(frozen=True)
class CompletionResponse:
    """Normalized completion result.

    Attributes:
        id: Provider response id (``error_<ms>`` for error payloads).
        content: Generated text (error message for error payloads).
        status_code: HTTP-style status.
        usage: Token usage.
        finish_reason: Why generation stopped.
        status_reason: Optional provider reason code (``"rate_limit_exceeded"``...).
        raw_provider_error: Native error, never inspected by the core.
        tool_calls: Tool calls requested by the model.
        retry_after_seconds: Retry hint supplied by the vendor, when any.
    """

    id: str
    content: str
    status_code: int
    usage: UsageData
    finish_reason: FinishReason
    status_reason: Optional[str] = None
    raw_provider_error: Optional[OpaquePayload] = None
    tool_calls: Tuple[ToolCall, ...] = ()
    retry_after_seconds: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "tool_calls", tuple(self.tool_calls or ()))

    @property
    def is_error(self) -> bool:
        return self.finish_reason == "error"

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary excluding the raw provider error."""
        return {
            "id": self.id,
            "content": self.content,
            "status_code": self.status_code,
            "usage": self.usage.to_dict(),
            "finish_reason": self.finish_reason,
            "status_reason": self.status_reason,
            "tool_calls": [c.to_dict() for c in self.tool_calls],
            "retry_after_seconds": self.retry_after_seconds,
        }


__all__ = ["FinishReason", "CompletionResponse"]
