"""Unified configuration layer.

Merge order for ``get_provider_config`` (later wins):

1. Built-in defaults (``config.defaults``)
2. Optional external file (JSON or YAML) at ``UNIFIED_LLM_CONFIG_FILE``
3. Environment variables ``<PROVIDER>_MODEL`` and ``<PROVIDER>_API_KEY``
   (Gemini also accepts ``GOOGLE_API_KEY``)
4. Explicit overrides passed by the caller

External file example::

    openai:
      model: gpt-4o-mini-2024-07-18
      client_options:
        timeout: 30
    gemini:
      model: gemini-2.0-flash

Public API
----------
* get_provider_config(provider, overrides=None) -> dict
* get_model(provider) -> str | None
* get_language() -> str
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import DEFAULT_LANGUAGE, GEMINI_DEFAULT_MODEL, OPENAI_DEFAULT_MODEL
from .env import CONFIG_FILE_ENV, LANGUAGE_ENV, resolve_provider_key

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"model": OPENAI_DEFAULT_MODEL},
    "gemini": {"model": GEMINI_DEFAULT_MODEL},
}

_FILE_CACHE: Optional[Dict[str, Any]] = None


def _load_external_config() -> Dict[str, Any]:
    """Load and cache the file named by ``UNIFIED_LLM_CONFIG_FILE``.

    JSON is tried first, then YAML. A missing file or a document that is
    not a mapping yields an empty config. A file that parses as neither
    raises ``yaml.YAMLError``.
    """
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path or not Path(path).is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        data = yaml.safe_load(text) or {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Forget the cached external config so the next lookup re-reads the file."""
    global _FILE_CACHE
    _FILE_CACHE = None


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    model = os.getenv(f"{provider.upper()}_MODEL")
    if model:
        out["model"] = model
    key, _ = resolve_provider_key(provider)
    if key:
        out["api_key"] = key
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    ``None`` values in ``overrides`` are ignored.
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}
    cfg |= DEFAULTS.get(name, {})

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


def get_language() -> str:
    """Return the message catalog language from ``UNIFIED_LLM_LANG`` (default ``en``)."""
    value = (os.getenv(LANGUAGE_ENV) or "").strip().lower()
    return value or DEFAULT_LANGUAGE


__all__ = [
    "DEFAULTS",
    "get_provider_config",
    "get_model",
    "get_language",
    "reset_config_cache",
]
