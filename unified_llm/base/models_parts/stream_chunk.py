"""Incremental stream chunk DTOs."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Literal, Union

from .completion_response import FinishReason
from .message import ToolCall
from .usage_data import UsageData

ChunkType = Literal["content", "tool_call", "usage", "finish"]


@dataclass(frozen=True)
class FinishData:
    finish_reason: FinishReason


@dataclass(frozen=True)
class StreamChunk:
    """One increment of a streaming response.

    ``data`` is text for ``content`` chunks, a ``ToolCall`` for ``tool_call``,
    ``UsageData`` for ``usage`` and ``FinishData`` for ``finish``.
    """

    type: ChunkType
    data: Union[str, ToolCall, UsageData, FinishData]
    timestamp: float = field(default_factory=time.time)

    @classmethod
    def content(cls, text: str) -> "StreamChunk":
        return cls(type="content", data=text)

    @classmethod
    def tool_call(cls, call: ToolCall) -> "StreamChunk":
        return cls(type="tool_call", data=call)

    @classmethod
    def usage(cls, usage: UsageData) -> "StreamChunk":
        return cls(type="usage", data=usage)

    @classmethod
    def finish(cls, reason: FinishReason) -> "StreamChunk":
        return cls(type="finish", data=FinishData(finish_reason=reason))


__all__ = ["ChunkType", "FinishData", "StreamChunk"]
