"""unified_llm.config.defaults
============================

Small, stable default values used across the package. They can be
overridden through environment variables or the external config file.

This module imports nothing from the rest of the package so it can be used
from any layer without circular imports.
"""

from __future__ import annotations

# Provider chosen when none is given (also the tag of construction errors
# raised before a provider is known).
DEFAULT_PROVIDER = "openai"

OPENAI_DEFAULT_MODEL = "gpt-4o-mini-2024-07-18"
GEMINI_DEFAULT_MODEL = "gemini-2.0-flash"

# Header used to forward the API key when ``APIKeyConfig.HEADER`` is selected.
DEFAULT_API_KEY_HEADER = "x-api-key"

# Language of the message catalog when UNIFIED_LLM_LANG is unset.
DEFAULT_LANGUAGE = "en"

# Truthy spellings accepted by boolean environment toggles.
TRUTHY_VALUES = frozenset({"1", "true", "yes", "on"})

__all__ = [
    "DEFAULT_PROVIDER",
    "OPENAI_DEFAULT_MODEL",
    "GEMINI_DEFAULT_MODEL",
    "DEFAULT_API_KEY_HEADER",
    "DEFAULT_LANGUAGE",
    "TRUTHY_VALUES",
]
