"""Provider factory.

Purpose
-------
Validate construction parameters and create the adapter for a provider.
Adapters are imported lazily with ``importlib`` so a vendor SDK is loaded
only when its adapter is requested.

Validation order
----------------
1. provider present (else tagged with the default ``openai``) and a known
   ``LLMProvider`` member or value (else tagged with the raw value),
2. API key present and non-blank,
3. model present and, when textual, non-blank.

Each failure is a ``ValidationError``. An adapter module that cannot be
imported raises ``LLMError`` chained to the ``ImportError``.

Mock routing
------------
When ``UNIFIED_LLM_USE_MOCKS`` is truthy every provider is served by
``unified_llm.mock.MockProvider`` (tagged with the requested provider).

No timeouts, retries or fallbacks are introduced here.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from ..config.defaults import DEFAULT_PROVIDER
from ..config.env import use_mocks
from ..i18n import get_string
from .abstract_provider import AbstractLLMProvider
from .dto.provider_config import ProviderConfig
from .errors_parts.llm_error import LLMError
from .errors_parts.validation_error import ValidationError
from .models_parts.provider import LLMProvider, SupportedModel
from .observer import ProviderObserver

_MOCK_SPEC: Tuple[str, str] = ("unified_llm.mock.client", "MockProvider")


class LLMClientFactory:
    """Create provider adapters from validated parameters."""

    # Map providers to adapter import paths and class names
    _PROVIDERS: Dict[LLMProvider, Tuple[str, str]] = {
        LLMProvider.OPENAI: ("unified_llm.openai.client", "OpenAIProvider"),
        LLMProvider.GEMINI: ("unified_llm.gemini.client", "GeminiProvider"),
    }

    @classmethod
    def create_provider(
        cls,
        provider: Any,
        api_key: Optional[str],
        model: Optional[SupportedModel],
        config: Optional[Mapping[str, Any]] = None,
        *,
        observer: Optional[ProviderObserver] = None,
    ) -> AbstractLLMProvider:
        """Validate the parameters and construct the matching adapter.

        Parameters
        ----------
        provider:
            ``LLMProvider`` member or its value text.
        api_key:
            Vendor credential.
        model:
            Model enum member or raw model id.
        config:
            Adapter options forwarded to the constructor.
        observer:
            Optional lifecycle observer.

        Returns
        -------
        AbstractLLMProvider
            The constructed adapter.

        Raises
        ------
        ValidationError
            For a missing/unknown provider, a missing API key or a missing model.
        LLMError
            When the adapter module cannot be imported.
        """
        resolved = cls.validate_provider(provider)
        if api_key is None or not str(api_key).strip():
            raise ValidationError(get_string("LLM_ERROR_MISSING_API_KEY"), resolved)
        if model is None or (isinstance(model, str) and not model.strip()):
            raise ValidationError(get_string("LLM_ERROR_MISSING_MODEL"), resolved)

        if use_mocks():
            module_path, class_name = _MOCK_SPEC
        else:
            spec = cls._PROVIDERS.get(resolved)
            if spec is None:
                raise ValidationError(
                    get_string("LLM_ERROR_UNSUPPORTED_PROVIDER", {"provider": resolved.value}),
                    resolved,
                )
            module_path, class_name = spec

        klass = cls._load_adapter(module_path, class_name, resolved)
        return klass(api_key, model, resolved, dict(config or {}), observer=observer)

    @classmethod
    def create_from_config(
        cls,
        provider_config: ProviderConfig,
        *,
        observer: Optional[ProviderObserver] = None,
    ) -> AbstractLLMProvider:
        """Create an adapter from a builder snapshot."""
        return cls.create_provider(
            provider_config.provider,
            provider_config.api_key,
            provider_config.model,
            provider_config.config,
            observer=observer,
        )

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the supported provider values in deterministic order."""
        return tuple(p.value for p in cls._PROVIDERS)

    @staticmethod
    def validate_provider(provider: Any) -> LLMProvider:
        """Return the ``LLMProvider`` for ``provider`` or raise ``ValidationError``."""
        if provider is None or (isinstance(provider, str) and not provider.strip()):
            raise ValidationError(get_string("LLM_ERROR_MISSING_PROVIDER"), LLMProvider(DEFAULT_PROVIDER))
        resolved = LLMProvider.parse(provider)
        if resolved is None:
            raw = str(provider)
            raise ValidationError(get_string("LLM_ERROR_UNSUPPORTED_PROVIDER", {"provider": raw}), raw)
        return resolved

    @staticmethod
    def _load_adapter(module_path: str, class_name: str, provider: LLMProvider) -> Type[AbstractLLMProvider]:
        try:
            module = import_module(module_path)
        except ImportError as exc:
            raise LLMError(
                get_string("LLM_ERROR_PROVIDER_UNAVAILABLE", {"provider": provider.value, "details": exc}),
                provider,
                retryable=False,
                original_error=exc,
            ) from exc
        return getattr(module, class_name)


__all__ = ["LLMClientFactory"]
