"""Validation failure: bad construction parameters, bad request, HTTP 400."""
from __future__ import annotations

from typing import Any, ClassVar, Optional, Union

from ..models_parts.provider import LLMProvider
from .error_kind import ErrorKind
from .llm_error import LLMError


class ValidationError(LLMError):
    """Raised before dispatch for invalid input, or for provider 400 responses."""

    kind: ClassVar[ErrorKind] = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        provider: Union[LLMProvider, str],
        *,
        status_code: Optional[int] = None,
        original_error: Any = None,
    ) -> None:
        super().__init__(
            message,
            provider,
            status_code=status_code,
            retryable=False,
            original_error=original_error,
        )


__all__ = ["ValidationError"]
