"""
Provider and model identifiers.

``LLMProvider`` is the closed set of supported vendors. Each vendor has an
enumeration of known model ids; ``SupportedModel`` also admits any plain
string so unlisted models can be used without a code change.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union


class LLMProvider(str, Enum):
    """Canonical provider identifiers."""

    OPENAI = "openai"
    GEMINI = "gemini"

    @classmethod
    def parse(cls, value: Any) -> Optional["LLMProvider"]:
        """Return the member matching ``value`` or ``None``.

        Accepts a member or its value text (case-insensitive, surrounding
        whitespace ignored). Anything else yields ``None``.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return None
        return None


class OpenAIModel(str, Enum):
    """Known OpenAI chat model ids."""

    GPT_4O_MINI = "gpt-4o-mini-2024-07-18"
    GPT_4 = "gpt-4"
    GPT_4_TURBO = "gpt-4-turbo-preview"
    GPT_35_TURBO = "gpt-3.5-turbo"


class GeminiModel(str, Enum):
    """Known Gemini model ids."""

    GEMINI_PRO = "gemini-pro"
    GEMINI_PRO_VISION = "gemini-pro-vision"
    GEMINI_2_FLASH = "gemini-2.0-flash"
    GEMINI_2_FLASH_LITE = "gemini-2.0-flash-lite"


class APIKeyConfig(str, Enum):
    """Where the builder takes the API key from.

    - ``ENVIRONMENT``: resolve from the provider's environment variable.
    - ``PARAMETER``: the key passed to ``set_api_key``.
    - ``HEADER``: the passed key, additionally sent as a static request header
      (``api_key_header`` config entry) for gateways in front of the vendor.
    """

    ENVIRONMENT = "environment"
    PARAMETER = "parameter"
    HEADER = "header"


SupportedModel = Union[OpenAIModel, GeminiModel, str]


def model_id(model: SupportedModel) -> str:
    """Return the plain string id for an enum member or raw model string."""
    if isinstance(model, Enum):
        return str(model.value)
    return str(model)


__all__ = [
    "LLMProvider",
    "OpenAIModel",
    "GeminiModel",
    "APIKeyConfig",
    "SupportedModel",
    "model_id",
]
