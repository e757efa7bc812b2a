"""
Provider error translation and error logging.

``translate_provider_error`` maps a normalized error ``CompletionResponse``
(the output of an adapter's ``parse_provider_error``) onto the error taxonomy.
It is pure and total: every status code yields exactly one error.

Precedence (first match wins):

====================  ======================  ==========================
status                error                   retryable
====================  ======================  ==========================
401, 403              AuthenticationError     no
429                   RateLimitError          yes (``retry_after`` hint)
400                   ValidationError         no (message has details)
anything else         LLMError                iff status >= 500
====================  ======================  ==========================

The helpers ``extract_status_code`` and ``extract_retry_after`` are used by
adapters to read status and retry hints from native SDK exceptions.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterator, Optional, Union

from ...i18n import get_string
from ..log_support import LogContext
from ..logging import get_logger, log_event
from ..models_parts.completion_response import CompletionResponse
from ..models_parts.provider import LLMProvider
from .authentication_error import AuthenticationError
from .error_kind import ErrorKind
from .llm_error import LLMError
from .rate_limit_error import RateLimitError
from .validation_error import ValidationError

_PROTO_DURATION_RE = re.compile(r"^(\d+(?:\.\d+)?)s$")

_LOG_LABELS: Dict[ErrorKind, str] = {
    ErrorKind.AUTHENTICATION: "LOG_LLM_AUTHENTICATION_ERROR",
    ErrorKind.RATE_LIMIT: "LOG_LLM_RATE_LIMIT_ERROR",
    ErrorKind.VALIDATION: "LOG_LLM_VALIDATION_ERROR",
    ErrorKind.STREAMING: "LOG_LLM_STREAMING_ERROR",
    ErrorKind.STRUCTURED_OUTPUT: "LOG_LLM_STRUCTURED_OUTPUT_ERROR",
    ErrorKind.UNSUPPORTED: "LOG_LLM_UNSUPPORTED_OPERATION_ERROR",
}


def _provider_text(provider: Union[LLMProvider, str]) -> str:
    return provider.value if isinstance(provider, LLMProvider) else str(provider)


def translate_provider_error(
    response: CompletionResponse, provider: Union[LLMProvider, str]
) -> LLMError:
    """Translate a normalized error payload into a taxonomy error.

    Parameters
    ----------
    response: CompletionResponse
        Normalized error payload. Kept as the error's ``original_error``.
    provider: LLMProvider | str
        Provider the failure came from.

    Returns
    -------
    LLMError
        The translated error (never raised here).
    """
    status = response.status_code
    name = _provider_text(provider)

    if status in (401, 403):
        return AuthenticationError(
            get_string("LLM_ERROR_AUTHENTICATION_FAILED", {"provider": name}),
            provider,
            status_code=status,
            original_error=response,
        )

    if status == 429:
        message = get_string("LLM_ERROR_RATE_LIMIT", {"provider": name})
        if response.retry_after_seconds is not None:
            hint = get_string("LLM_ERROR_RETRY_AFTER", {"seconds": f"{response.retry_after_seconds:g}"})
            message = f"{message}. {hint}"
        return RateLimitError(
            message,
            provider,
            status_code=status,
            retry_after=response.retry_after_seconds,
            original_error=response,
        )

    if status == 400:
        return ValidationError(
            get_string("LLM_ERROR_VALIDATION_FAILED", {"provider": name, "details": response.content or ""}),
            provider,
            status_code=status,
            original_error=response,
        )

    return LLMError(
        get_string("LLM_ERROR_PROVIDER_ERROR", {"provider": name, "status": status}),
        provider,
        status_code=status,
        retryable=status >= 500,
        original_error=response,
    )


def log_llm_error(
    error: LLMError,
    logger: Optional[logging.Logger] = None,
    **context: Any,
) -> None:
    """Emit one structured ``llm.error`` event for ``error``.

    Rate limits are logged at WARNING, every other kind at ERROR. The event
    ``label`` is the catalog string matching the error kind. Extra ``context``
    fields (model, operation ...) are merged into the payload.
    """
    log = logger or get_logger("unified_llm.errors")
    level = logging.WARNING if error.kind is ErrorKind.RATE_LIMIT else logging.ERROR
    label = get_string(_LOG_LABELS.get(error.kind, "LOG_LLM_ERROR"))
    ctx = LogContext.for_call(error.provider_name, context.pop("model", None), context.pop("operation", None))
    fields = error.to_dict()
    fields.pop("provider", None)
    fields.update(context)
    log_event(log, "llm.error", ctx, level=level, label=label, **fields)


def _walk_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield ``exc`` and its causes/contexts once each."""
    seen: set[int] = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def _valid_status(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool) and 100 <= value <= 599:
        return value
    return None


def extract_status_code(exc: BaseException) -> Optional[int]:
    """Walk the exception chain to find an HTTP status code.

    Checked per exception: ``status_code``, ``status``, ``code`` and
    ``response.status_code``. Only integers in 100..599 count.
    """
    for e in _walk_exception_chain(exc):
        for attr in ("status_code", "status", "code"):
            status = _valid_status(getattr(e, attr, None))
            if status is not None:
                return status
        status = _valid_status(getattr(getattr(e, "response", None), "status_code", None))
        if status is not None:
            return status
    return None


def _retry_info_seconds(exc: BaseException) -> Optional[float]:
    """Read a Google ``RetryInfo.retryDelay`` (``"8s"``, ``"1.5s"``) from ``exc.details``.

    The Gemini SDK exposes the parsed error body shaped like
    ``{"error": {"details": [{"@type": "...RetryInfo", "retryDelay": "8s"}]}}``.
    """
    details = getattr(exc, "details", None)
    if not isinstance(details, dict):
        return None
    error = details.get("error", details)
    entries = error.get("details") if isinstance(error, dict) else None
    if not isinstance(entries, list):
        return None
    for entry in entries:
        if not isinstance(entry, dict) or "RetryInfo" not in str(entry.get("@type", "")):
            continue
        match = _PROTO_DURATION_RE.match(str(entry.get("retryDelay", "")))
        if match:
            return float(match.group(1))
    return None


def _header_seconds(exc: BaseException) -> Optional[float]:
    headers = getattr(getattr(exc, "response", None), "headers", None)
    if headers is None or not hasattr(headers, "get"):
        return None
    raw = headers.get("retry-after") or headers.get("Retry-After")
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        seconds = float(raw)
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


def extract_retry_after(exc: BaseException) -> Optional[float]:
    """Walk the exception chain to find a retry delay in seconds.

    Sources, per exception: a ``Retry-After`` response header, then a Google
    ``RetryInfo`` detail. Returns ``None`` when no hint is present.
    """
    for e in _walk_exception_chain(exc):
        seconds = _header_seconds(e)
        if seconds is None:
            seconds = _retry_info_seconds(e)
        if seconds is not None:
            return seconds
    return None


__all__ = [
    "translate_provider_error",
    "log_llm_error",
    "extract_status_code",
    "extract_retry_after",
]
