"""unified_llm.config.env
======================

Environment variable mapping and helpers for provider credentials.

Purpose
-------
- Single source of truth mapping provider identifiers to the environment
  variables holding their API keys (canonical name and aliases).
- Small helpers to look up keys the same way everywhere (builder, config
  layer, tests).

Failure Modes
-------------
Helpers never raise on unknown providers or unset variables. They return
``None`` and let the caller decide (the builder reports a missing
``api_key``).
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

from .defaults import TRUTHY_VALUES

# Canonical provider → env var mapping
ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    # Gemini keys are published under both names; GEMINI_API_KEY wins.
    "gemini": "GEMINI_API_KEY",
}

# Provider → ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
}

USE_MOCKS_ENV = "UNIFIED_LLM_USE_MOCKS"
LANGUAGE_ENV = "UNIFIED_LLM_LANG"
CONFIG_FILE_ENV = "UNIFIED_LLM_CONFIG_FILE"


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder rather than a real key.

    Heuristics (case-insensitive): contains ``placeholder``, ``changeme`` or
    ``example``, or starts with ``test_``.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical environment variable name for a provider, if known."""
    return ENV_MAP.get(provider.lower()) if provider else None


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable environment variable names, canonical first."""
    p = (provider or "").lower()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for a provider from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first candidate that is neither
        blank nor a placeholder (see ``is_placeholder``), or ``(None, None)``
        when no candidate qualifies.
    """
    for name in get_env_var_candidates(provider):
        val = os.environ.get(name)
        if val and val.strip() and not is_placeholder(val):
            return val, name
    return None, None


def env_flag(name: str) -> bool:
    """Return True when the environment variable holds a truthy value."""
    return (os.environ.get(name) or "").strip().lower() in TRUTHY_VALUES


def use_mocks() -> bool:
    """Whether the factory should route every provider to the mock adapter."""
    return env_flag(USE_MOCKS_ENV)


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "USE_MOCKS_ENV",
    "LANGUAGE_ENV",
    "CONFIG_FILE_ENV",
    "is_placeholder",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
    "env_flag",
    "use_mocks",
]
