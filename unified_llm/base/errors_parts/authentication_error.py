"""Authentication failure (HTTP 401/403). Never retryable."""
from __future__ import annotations

from typing import Any, ClassVar, Optional, Union

from ..models_parts.provider import LLMProvider
from .error_kind import ErrorKind
from .llm_error import LLMError


class AuthenticationError(LLMError):
    """Raised when the provider rejects the credentials."""

    kind: ClassVar[ErrorKind] = ErrorKind.AUTHENTICATION

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


__all__ = ["AuthenticationError"]
