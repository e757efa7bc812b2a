"""
Request/response/error observation hooks for providers.

Every provider notifies one ``ProviderObserver`` around each operation. The
default ``LoggingObserver`` turns the notifications into structured log
events; applications can pass their own observer (metrics, tracing) through
the builder. Observers are side-effect only and cannot alter results.
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol, Union, runtime_checkable

from .errors_parts.llm_error import LLMError
from .errors_parts.translation import log_llm_error
from .log_support import LogContext
from .logging import get_logger, log_event
from .models_parts.completion_request import CompletionRequest
from .models_parts.completion_response import CompletionResponse
from .models_parts.provider import LLMProvider

ProviderTag = Union[LLMProvider, str]


@runtime_checkable
class ProviderObserver(Protocol):
    """Receives lifecycle notifications for provider operations."""

    def on_request(self, provider: ProviderTag, model: str, request: CompletionRequest, operation: str) -> None:
        ...

    def on_response(self, provider: ProviderTag, model: str, response: CompletionResponse, operation: str) -> None:
        ...

    def on_error(self, error: LLMError, model: str, operation: str) -> None:
        ...


class LoggingObserver:
    """Observer writing ``llm.request``/``llm.response`` at DEBUG and errors via ``log_llm_error``."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or get_logger("unified_llm.provider")

    def on_request(self, provider: ProviderTag, model: str, request: CompletionRequest, operation: str) -> None:
        log_event(
            self._logger,
            "llm.request",
            LogContext.for_call(provider, model, operation),
            level=logging.DEBUG,
            message_count=len(request.messages),
            has_tools=bool(request.tools),
            has_structured_output=request.structured_output is not None,
            stream=request.stream,
        )

    def on_response(self, provider: ProviderTag, model: str, response: CompletionResponse, operation: str) -> None:
        log_event(
            self._logger,
            "llm.response",
            LogContext.for_call(provider, model, operation),
            level=logging.DEBUG,
            finish_reason=response.finish_reason,
            usage=response.usage.to_dict(),
            has_tool_calls=bool(response.tool_calls),
        )

    def on_error(self, error: LLMError, model: str, operation: str) -> None:
        log_llm_error(error, self._logger, model=model, operation=operation)


__all__ = ["ProviderObserver", "LoggingObserver"]
