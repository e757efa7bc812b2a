"""
Streaming response wrapper.

``StreamResponse`` is an async iterator over ``StreamChunk`` values produced
by an adapter, plus ``get_complete()`` which returns the aggregated
``CompletionResponse`` once the stream is exhausted. Iteration is single-pass:
chunks consumed by the caller are folded into the aggregate as they pass, and
``get_complete()`` drains whatever is left.

Failures raised by the underlying stream are handed to ``on_error`` (the
provider's streaming failure policy) and the returned error is raised in
their place, chained to the native exception.

Closing a stream early (``aclose()`` or leaving an ``async with`` block)
closes the translated source and the vendor stream behind it.
"""
from __future__ import annotations

import inspect
import time
from typing import Any, AsyncIterator, Awaitable, Callable, List, Optional, Union

from .errors_parts.llm_error import LLMError
from .models_parts.completion_response import CompletionResponse, FinishReason
from .models_parts.message import ToolCall
from .models_parts.provider import LLMProvider
from .models_parts.stream_chunk import FinishData, StreamChunk
from .models_parts.usage_data import UsageData


async def close_vendor_stream(raw: Any) -> None:
    """Release a vendor stream through ``aclose()`` or ``close()``, whichever it has."""
    closer = getattr(raw, "aclose", None) or getattr(raw, "close", None)
    if closer is None:
        return
    result = closer()
    if inspect.isawaitable(result):
        await result


class StreamResponse:
    """Async iterator of stream chunks with an aggregated final response.

    Parameters
    ----------
    source: AsyncIterator[StreamChunk]
        Chunks translated from the vendor stream.
    provider: LLMProvider | str
        Provider tag (diagnostics only).
    model: str
        Model id, used for empty usage when the vendor reports none.
    on_error: Callable[[Exception], LLMError]
        Maps a failure raised by ``source`` to the error raised to the caller.
    on_complete: Optional[Callable[[CompletionResponse], None]]
        Called once with the aggregate when the stream ends normally.
    response_id: Optional[str]
        Id of the aggregate response. Generated when omitted.
    on_close: Optional[Callable[[], Awaitable[None]]]
        Releases the vendor stream when the caller closes early.
    """

    def __init__(
        self,
        source: AsyncIterator[StreamChunk],
        *,
        provider: Union[LLMProvider, str],
        model: str,
        on_error: Callable[[Exception], LLMError],
        on_complete: Optional[Callable[[CompletionResponse], None]] = None,
        response_id: Optional[str] = None,
        on_close: Optional[Callable[[], Awaitable[None]]] = None,
    ) -> None:
        self._source = source
        self.provider = provider
        self.model = model
        self._on_error = on_error
        self._on_complete = on_complete
        self._on_close = on_close
        self.id = response_id or f"stream_{int(time.time() * 1000)}"
        self._content: List[str] = []
        self._tool_calls: List[ToolCall] = []
        self._usage: Optional[UsageData] = None
        self._finish_reason: Optional[FinishReason] = None
        self._complete: Optional[CompletionResponse] = None
        self._exhausted = False
        self._failure: Optional[LLMError] = None
        self._closed = False

    def __aiter__(self) -> "StreamResponse":
        return self

    async def __anext__(self) -> StreamChunk:
        if self._exhausted:
            raise StopAsyncIteration
        try:
            chunk = await self._source.__anext__()
        except StopAsyncIteration:
            self._finalize()
            raise
        except Exception as exc:
            self._exhausted = True
            self._failure = self._on_error(exc)
            raise self._failure from exc
        self._absorb(chunk)
        return chunk

    def _absorb(self, chunk: StreamChunk) -> None:
        if chunk.type == "content" and isinstance(chunk.data, str):
            self._content.append(chunk.data)
        elif chunk.type == "tool_call" and isinstance(chunk.data, ToolCall):
            self._tool_calls.append(chunk.data)
        elif chunk.type == "usage" and isinstance(chunk.data, UsageData):
            self._usage = chunk.data
        elif chunk.type == "finish" and isinstance(chunk.data, FinishData):
            self._finish_reason = chunk.data.finish_reason

    def _finalize(self) -> None:
        self._exhausted = True
        if self._complete is not None:
            return
        finish: FinishReason = self._finish_reason or ("tool_calls" if self._tool_calls else "stop")
        self._complete = CompletionResponse(
            id=self.id,
            content="".join(self._content),
            status_code=200,
            usage=self._usage or UsageData.empty(self.model),
            finish_reason=finish,
            tool_calls=tuple(self._tool_calls),
        )
        if self._on_complete is not None:
            self._on_complete(self._complete)

    async def get_complete(self) -> CompletionResponse:
        """Drain the stream and return the aggregated response.

        Raises the stream's failure error when the stream breaks while draining.
        """
        async for _ in self:
            pass
        if self._failure is not None:
            raise self._failure
        if self._complete is None:
            self._finalize()
        assert self._complete is not None
        return self._complete

    async def aclose(self) -> None:
        """Stop the stream and release the vendor connection. Safe to call twice."""
        self._exhausted = True
        if self._closed:
            return
        self._closed = True
        closer = getattr(self._source, "aclose", None)
        if closer is not None:
            await closer()
        if self._on_close is not None:
            await self._on_close()

    async def __aenter__(self) -> "StreamResponse":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


__all__ = ["StreamResponse", "close_vendor_stream"]
