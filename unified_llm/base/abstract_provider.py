"""
Provider contract.

``AbstractLLMProvider`` is the template every adapter fills in. It owns the
parts that must behave the same for every vendor:

* construction checks (API key present),
* request checks before any vendor call (messages, schema, tools),
* the failure policy: a native exception is normalized by the adapter's
  ``parse_provider_error``, translated onto the error taxonomy, reported to
  the observer and raised chained to the native exception,
* observer notifications around each operation.

Adapters implement the four operations by calling ``_execute`` (or
``_open_stream``) with two callables: ``invoke`` performs the vendor call and
``translate`` maps the raw vendor payload to the shared response shape.
Nothing in the contract retries.
"""
from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import (
    Any,
    AsyncIterator,
    Awaitable,
    Callable,
    ClassVar,
    FrozenSet,
    Mapping,
    Optional,
    Sequence,
    TypeVar,
)

from ..i18n import get_string
from .errors_parts.llm_error import LLMError
from .errors_parts.streaming_error import StreamingError
from .errors_parts.translation import translate_provider_error
from .errors_parts.unsupported_operation_error import UnsupportedOperationError
from .errors_parts.validation_error import ValidationError
from .log_support import LogContext
from .logging import get_logger, log_event
from .models_parts.completion_request import CompletionRequest
from .models_parts.completion_response import CompletionResponse
from .models_parts.message import Message
from .models_parts.opaque import OpaquePayload
from .models_parts.provider import LLMProvider, SupportedModel, model_id
from .models_parts.stream_chunk import StreamChunk
from .models_parts.structured import StructuredOutputKind, StructuredOutputResponse
from .models_parts.usage_data import UsageData
from .observer import LoggingObserver, ProviderObserver
from .streaming import StreamResponse, close_vendor_stream

OP_COMPLETE = "complete"
OP_STREAM = "stream"
OP_STRUCTURED = "complete_with_structured_output"
OP_TOOLS = "complete_with_tool_invocation"
ALL_OPERATIONS: FrozenSet[str] = frozenset({OP_COMPLETE, OP_STREAM, OP_STRUCTURED, OP_TOOLS})

R = TypeVar("R", bound=CompletionResponse)


class AbstractLLMProvider(ABC):
    """Base class of every provider adapter.

    Parameters
    ----------
    api_key: str
        Vendor credential. ``None``, empty or whitespace-only keys are rejected.
    model: SupportedModel
        Model enum member or raw model id.
    provider: LLMProvider
        Provider tag attached to every error this instance raises.
    config: Optional[Mapping[str, Any]]
        Adapter options (``client_options``, ``api_key_header`` ...). Stored as
        a read-only copy.
    observer: Optional[ProviderObserver]
        Lifecycle observer. Defaults to ``LoggingObserver``.

    Raises
    ------
    ValidationError
        When the API key is missing or blank.
    """

    capabilities: ClassVar[FrozenSet[str]] = ALL_OPERATIONS

    def __init__(
        self,
        api_key: Optional[str],
        model: SupportedModel,
        provider: LLMProvider,
        config: Optional[Mapping[str, Any]] = None,
        *,
        observer: Optional[ProviderObserver] = None,
    ) -> None:
        self._provider = provider
        self._validate_api_key(api_key)
        self._api_key: str = api_key  # type: ignore[assignment]
        self._model = model
        self._config: Mapping[str, Any] = MappingProxyType(dict(config or {}))
        self._observer: ProviderObserver = observer or LoggingObserver()
        self._logger = get_logger(f"unified_llm.{self.provider_name}")

    # ---- read-only surface -------------------------------------------------

    @property
    def provider(self) -> LLMProvider:
        return self._provider

    @property
    def provider_name(self) -> str:
        return self._provider.value if isinstance(self._provider, LLMProvider) else str(self._provider)

    @property
    def model(self) -> SupportedModel:
        return self._model

    @property
    def model_name(self) -> str:
        """Plain model id sent to the vendor."""
        return model_id(self._model)

    @property
    def config(self) -> Mapping[str, Any]:
        return self._config

    @property
    def observer(self) -> ProviderObserver:
        return self._observer

    def supports(self, operation: str) -> bool:
        """Return True when this adapter implements ``operation``."""
        return operation in self.capabilities

    def __repr__(self) -> str:
        return f"{type(self).__name__}(provider={self.provider_name!r}, model={self.model_name!r})"

    # ---- operations ----------------------------------------------------------

    @abstractmethod
    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Return one completion for ``request``."""

    @abstractmethod
    async def stream(self, request: CompletionRequest) -> StreamResponse:
        """Open a stream of chunks for ``request``."""

    @abstractmethod
    async def complete_with_structured_output(self, request: CompletionRequest) -> StructuredOutputResponse:
        """Return a completion whose content is parsed against ``request.structured_output``."""

    @abstractmethod
    async def complete_with_tool_invocation(self, request: CompletionRequest) -> CompletionResponse:
        """Return a completion that may carry tool calls for ``request.tools``."""

    @abstractmethod
    def parse_provider_error(self, error: Exception) -> CompletionResponse:
        """Normalize a native vendor exception into an error ``CompletionResponse``.

        Implementations must not raise. ``_fallback_error_response`` builds the
        payload from the extracted fields.
        """

    # ---- hooks -----------------------------------------------------------------

    def _translate_response(self, raw: Any) -> CompletionResponse:
        raise NotImplementedError(f"{type(self).__name__} must implement _translate_response")

    def _extract_usage_metrics(self, raw: Any) -> UsageData:
        raise NotImplementedError(f"{type(self).__name__} must implement _extract_usage_metrics")

    # ---- validation --------------------------------------------------------------

    def _validate_api_key(self, api_key: Optional[str]) -> None:
        if api_key is None or not str(api_key).strip():
            raise ValidationError(get_string("LLM_ERROR_MISSING_API_KEY"), self._provider)

    def _validate_request_message_existence(self, messages: Sequence[Message]) -> None:
        if not messages:
            raise ValidationError(get_string("LLM_MISSING_REQUEST_MESSAGES"), self._provider)

    def _validate_structured_output(self, request: CompletionRequest) -> None:
        schema = request.structured_output
        if schema is None:
            raise ValidationError(get_string("LLM_ERROR_MISSING_SCHEMA"), self._provider)
        if schema.kind is StructuredOutputKind.JSON_SCHEMA:
            valid = isinstance(schema.schema, Mapping)
        else:
            valid = isinstance(schema.schema, str) and bool(schema.schema.strip())
        if not valid:
            raise ValidationError(
                get_string("LLM_ERROR_INVALID_SCHEMA", {"kind": schema.kind.value}),
                self._provider,
            )

    def _validate_tools(self, request: CompletionRequest) -> None:
        if not request.tools:
            raise ValidationError(get_string("LLM_ERROR_MISSING_TOOLS"), self._provider)

    def _preflight(self, operation: str, request: CompletionRequest) -> None:
        """Run every pre-dispatch check that applies to ``operation``."""
        self._validate_request_message_existence(request.messages)
        if operation == OP_STRUCTURED:
            self._validate_structured_output(request)
        elif operation == OP_TOOLS:
            self._validate_tools(request)

    # ---- failure policy ------------------------------------------------------------

    def _fallback_error_response(
        self,
        error: BaseException,
        *,
        status_code: Optional[int] = None,
        status_reason: Optional[str] = None,
        message: Optional[str] = None,
        retry_after: Optional[float] = None,
    ) -> CompletionResponse:
        """Build the normalized error payload for ``error``.

        Missing fields default to status 500, reason ``UNKNOWN_ERROR`` and the
        exception text (or ``"Unknown provider error"``).
        """
        return CompletionResponse(
            id=f"error_{int(time.time() * 1000)}",
            content=message or str(error) or "Unknown provider error",
            status_code=status_code if status_code is not None else 500,
            usage=UsageData.empty(self.model_name),
            finish_reason="error",
            status_reason=status_reason or "UNKNOWN_ERROR",
            raw_provider_error=OpaquePayload(error),
            retry_after_seconds=retry_after,
        )

    def _handle_error(self, error: Exception) -> LLMError:
        """Normalize and translate a native exception (never raises)."""
        try:
            normalized = self.parse_provider_error(error)
        except Exception as parse_exc:
            log_event(
                self._logger,
                "llm.parse_error_failed",
                LogContext.for_call(self._provider, self.model_name),
                level=logging.WARNING,
                error_type=type(parse_exc).__name__,
                detail=str(parse_exc),
            )
            normalized = self._fallback_error_response(error)
        return translate_provider_error(normalized, self._provider)

    def _report_error(self, error: LLMError, operation: str) -> None:
        self._observer.on_error(error, self.model_name, operation)

    def _unsupported(self, operation: str) -> UnsupportedOperationError:
        """Error for an operation this adapter does not implement."""
        return UnsupportedOperationError(
            operation,
            self._provider,
            get_string(
                "LLM_ERROR_UNSUPPORTED_OPERATION",
                {"operation": operation, "provider": self.provider_name},
            ),
        )

    # ---- template methods ----------------------------------------------------------

    async def _dispatch(
        self,
        operation: str,
        request: CompletionRequest,
        invoke: Callable[[CompletionRequest], Awaitable[Any]],
    ) -> Any:
        """Check, notify and perform the vendor call, applying the failure policy."""
        if operation not in self.capabilities:
            raise self._unsupported(operation)
        self._preflight(operation, request)
        self._observer.on_request(self._provider, self.model_name, request, operation)
        try:
            return await invoke(request)
        except LLMError as err:
            self._report_error(err, operation)
            raise
        except Exception as exc:
            translated = self._handle_error(exc)
            self._report_error(translated, operation)
            raise translated from exc

    async def _execute(
        self,
        operation: str,
        request: CompletionRequest,
        invoke: Callable[[CompletionRequest], Awaitable[Any]],
        translate: Callable[[Any], R],
    ) -> R:
        """Run one request/response operation.

        Order: pre-dispatch checks, ``on_request``, ``invoke``, ``translate``,
        ``on_response``. Taxonomy errors raised by ``translate`` (for example
        ``StructuredOutputError``) are reported and re-raised; any other
        exception from ``translate`` goes through the failure policy.
        """
        raw = await self._dispatch(operation, request, invoke)
        try:
            response = translate(raw)
        except LLMError as err:
            self._report_error(err, operation)
            raise
        except Exception as exc:
            translated = self._handle_error(exc)
            self._report_error(translated, operation)
            raise translated from exc
        self._observer.on_response(self._provider, self.model_name, response, operation)
        return response

    async def _open_stream(
        self,
        request: CompletionRequest,
        invoke: Callable[[CompletionRequest], Awaitable[Any]],
        chunks: Callable[[Any], AsyncIterator[StreamChunk]],
    ) -> StreamResponse:
        """Open a vendor stream and wrap it in a ``StreamResponse``.

        Failures while opening follow the regular failure policy. Failures
        while iterating become ``StreamingError``. Closing the returned stream
        early also closes the vendor stream.
        """
        raw_stream = await self._dispatch(OP_STREAM, request, invoke)
        return StreamResponse(
            chunks(raw_stream),
            provider=self._provider,
            model=self.model_name,
            on_error=self._stream_failure,
            on_complete=lambda response: self._observer.on_response(
                self._provider, self.model_name, response, OP_STREAM
            ),
            on_close=lambda: close_vendor_stream(raw_stream),
        )

    def _stream_failure(self, error: Exception) -> StreamingError:
        """Map a mid-stream failure to ``StreamingError`` and report it.

        Status and retryability come from the translated vendor error.
        """
        if isinstance(error, StreamingError):
            failure = error
        else:
            translated = error if isinstance(error, LLMError) else self._handle_error(error)
            failure = StreamingError(
                get_string("LLM_ERROR_STREAMING_FAILED", {"provider": self.provider_name}),
                self._provider,
                status_code=translated.status_code,
                retryable=translated.retryable,
                original_error=translated,
            )
        self._report_error(failure, OP_STREAM)
        return failure


__all__ = [
    "AbstractLLMProvider",
    "OP_COMPLETE",
    "OP_STREAM",
    "OP_STRUCTURED",
    "OP_TOOLS",
    "ALL_OPERATIONS",
]
