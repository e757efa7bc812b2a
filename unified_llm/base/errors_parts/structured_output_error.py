"""Structured output that does not satisfy the requested schema."""
from __future__ import annotations

from typing import Any, ClassVar, Dict, Mapping, Optional, Union

from ..models_parts.provider import LLMProvider
from .error_kind import ErrorKind
from .llm_error import LLMError


class StructuredOutputError(LLMError):
    """Raised when model output cannot be parsed or validated.

    Attributes:
        validation_details: Mapping describing what failed (parse error,
            missing keys, mismatched types).
    """

    kind: ClassVar[ErrorKind] = ErrorKind.STRUCTURED_OUTPUT

    def __init__(
        self,
        message: str,
        provider: Union[LLMProvider, str],
        *,
        status_code: Optional[int] = None,
        validation_details: Optional[Mapping[str, Any]] = None,
        original_error: Any = None,
    ) -> None:
        super().__init__(
            message,
            provider,
            status_code=status_code,
            retryable=False,
            original_error=original_error,
        )
        self.validation_details: Optional[Dict[str, Any]] = (
            dict(validation_details) if validation_details is not None else None
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["validation_details"] = self.validation_details
        return data


__all__ = ["StructuredOutputError"]
