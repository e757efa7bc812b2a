"""Rate limit failure (HTTP 429). Always retryable."""
from __future__ import annotations

from typing import Any, ClassVar, Dict, Optional, Union

from ..models_parts.provider import LLMProvider
from .error_kind import ErrorKind
from .llm_error import LLMError


class RateLimitError(LLMError):
    """Raised when the provider throttles the caller.

    Attributes:
        retry_after: Seconds the provider asked the caller to wait, when known.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.RATE_LIMIT

    def __init__(
        self,
        message: str,
        provider: Union[LLMProvider, str],
        *,
        status_code: Optional[int] = None,
        retry_after: Optional[float] = None,
        original_error: Any = None,
    ) -> None:
        super().__init__(
            message,
            provider,
            status_code=status_code,
            retryable=True,
            original_error=original_error,
        )
        self.retry_after = retry_after

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["retry_after"] = self.retry_after
        return data


__all__ = ["RateLimitError"]
