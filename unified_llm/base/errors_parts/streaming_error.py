"""Failure while consuming a provider stream. Retryable unless told otherwise."""
from __future__ import annotations

from typing import ClassVar

from .error_kind import ErrorKind
from .llm_error import LLMError


class StreamingError(LLMError):
    """Raised when a stream breaks after it was opened."""

    kind: ClassVar[ErrorKind] = ErrorKind.STREAMING
    default_retryable: ClassVar[bool] = True


__all__ = ["StreamingError"]
