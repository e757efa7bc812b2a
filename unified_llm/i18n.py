"""Message catalog.

Every user-facing error message and log label is looked up by key from JSON
bundles packaged under ``unified_llm/resources/strings`` (``en.json``,
``es.json``). Templates use ``{name}`` placeholders.

Lookup order for ``get_string``: requested language (default from
``UNIFIED_LLM_LANG``) -> ``en`` -> the key itself. A key missing from every
bundle is logged at WARNING and returned unchanged so lookups never raise.
"""
from __future__ import annotations

import json
import logging
from functools import lru_cache
from importlib import resources
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .config import get_language
from .config.defaults import DEFAULT_LANGUAGE

_BUNDLE_PACKAGE = "unified_llm.resources.strings"


class _SafeDict(dict):
    """Return the original ``{key}`` text for placeholders without a value."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def _safe_format(template: str, context: Mapping[str, Any]) -> str:
    """Brace-style templating that leaves unknown placeholders intact.

    Values are coerced to strings. A template that is not a valid format
    string (stray braces) is returned unchanged.
    """
    try:
        return template.format_map(_SafeDict({k: str(v) for k, v in context.items()}))
    except (ValueError, IndexError):
        return template


@lru_cache(maxsize=None)
def load_bundle(language: str) -> Mapping[str, str]:
    """Return the read-only bundle for ``language`` (empty when none is packaged)."""
    resource = resources.files(_BUNDLE_PACKAGE).joinpath(f"{language}.json")
    if not resource.is_file():
        return MappingProxyType({})
    data = json.loads(resource.read_text(encoding="utf-8"))
    return MappingProxyType({str(k): str(v) for k, v in data.items()})


def available_languages() -> tuple[str, ...]:
    """Return the languages with a packaged bundle, sorted."""
    names = (entry.name for entry in resources.files(_BUNDLE_PACKAGE).iterdir())
    return tuple(sorted(n[: -len(".json")] for n in names if n.endswith(".json")))


def _warn_missing(key: str, language: str) -> None:
    # Local import: base.logging lives in a package whose import chain
    # reaches this module.
    from .base.logging import get_logger, log_event

    log_event(
        get_logger("unified_llm.i18n"),
        "i18n.missing_key",
        level=logging.WARNING,
        key=key,
        language=language,
    )


def get_string(
    key: str,
    args: Optional[Mapping[str, Any]] = None,
    language: Optional[str] = None,
) -> str:
    """Return the catalog message for ``key`` formatted with ``args``.

    Parameters
    ----------
    key: str
        Message key, e.g. ``LLM_ERROR_RATE_LIMIT``.
    args: Optional[Mapping[str, Any]]
        Placeholder values. Placeholders without a value stay as ``{name}``.
    language: Optional[str]
        Bundle language. Defaults to ``get_language()``.

    Returns
    -------
    str
        The formatted message, or ``key`` itself when no bundle defines it.
    """
    lang = (language or get_language()).strip().lower()
    template = load_bundle(lang).get(key)
    if template is None and lang != DEFAULT_LANGUAGE:
        template = load_bundle(DEFAULT_LANGUAGE).get(key)
    if template is None:
        _warn_missing(key, lang)
        return key
    return _safe_format(template, args or {})


__all__ = ["get_string", "load_bundle", "available_languages"]
