"""Fluent builder for ``LLMClient``.

Setters store one field each and return the builder, so calls chain in any
order and the last write wins. ``build()`` resolves the API key (for
``APIKeyConfig.ENVIRONMENT``), reports every missing field at once, snapshots
the fields into an immutable ``ProviderConfig`` and hands it to the factory.
A builder can be reused; later changes do not affect clients already built.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..base.dto.provider_config import ProviderConfig
from ..base.errors_parts.validation_error import ValidationError
from ..base.factory import LLMClientFactory
from ..base.models_parts.provider import APIKeyConfig, LLMProvider, SupportedModel
from ..base.observer import ProviderObserver
from ..config import get_provider_config
from ..config.defaults import DEFAULT_API_KEY_HEADER, DEFAULT_PROVIDER
from ..config.env import resolve_provider_key
from ..i18n import get_string
from .llm_client import LLMClient


class LLMClientBuilder:
    """Collects construction parameters for one ``LLMClient``."""

    def __init__(self) -> None:
        self._provider: Optional[LLMProvider] = None
        self._model: Optional[SupportedModel] = None
        self._api_key: Optional[str] = None
        self._config: Dict[str, Any] = {}
        self._api_key_config: APIKeyConfig = APIKeyConfig.PARAMETER
        self._observer: Optional[ProviderObserver] = None

    @classmethod
    def from_env(cls, provider: LLMProvider) -> "LLMClientBuilder":
        """Builder preloaded from the merged provider configuration.

        Sets ``provider``, the configured model and environment key lookup.
        Every other configured key (``client_options``, ``api_key_header`` ...)
        becomes the adapter config. The key itself is resolved at ``build()``.
        """
        builder = cls().set_provider(provider).set_api_key_config(APIKeyConfig.ENVIRONMENT)
        merged = get_provider_config(provider.value)
        model = merged.pop("model", None)
        merged.pop("api_key", None)
        if model:
            builder.set_model(model)
        if merged:
            builder.set_config(merged)
        return builder

    def set_provider(self, provider: LLMProvider) -> "LLMClientBuilder":
        self._provider = provider
        return self

    def set_model(self, model: SupportedModel) -> "LLMClientBuilder":
        self._model = model
        return self

    def set_api_key(self, api_key: str) -> "LLMClientBuilder":
        self._api_key = api_key
        return self

    def set_config(self, config: Mapping[str, Any]) -> "LLMClientBuilder":
        self._config = dict(config)
        return self

    def set_api_key_config(self, api_key_config: APIKeyConfig) -> "LLMClientBuilder":
        self._api_key_config = api_key_config
        return self

    def set_observer(self, observer: ProviderObserver) -> "LLMClientBuilder":
        self._observer = observer
        return self

    def _resolved_api_key(self) -> Optional[str]:
        if self._api_key is not None and self._api_key.strip():
            return self._api_key
        if self._api_key_config is APIKeyConfig.ENVIRONMENT and self._provider is not None:
            provider = LLMProvider.parse(self._provider)
            if provider is not None:
                key, _ = resolve_provider_key(provider.value)
                return key
        return self._api_key

    def _resolved_config(self) -> Dict[str, Any]:
        config = dict(self._config)
        if self._api_key_config is APIKeyConfig.HEADER:
            config.setdefault("api_key_header", DEFAULT_API_KEY_HEADER)
        return config

    def build(self) -> LLMClient:
        """Validate the collected fields and construct the client.

        Raises
        ------
        ValidationError
            Listing every missing field (``provider``, ``model``, ``api_key``),
            or raised by the factory for invalid values.
        """
        api_key = self._resolved_api_key()
        missing: List[str] = []
        if self._provider is None:
            missing.append("provider")
        if self._model is None or (isinstance(self._model, str) and not self._model.strip()):
            missing.append("model")
        if api_key is None or not api_key.strip():
            missing.append("api_key")
        if missing:
            raise ValidationError(
                get_string("LLM_ERROR_MISSING_FIELDS", {"fields": ", ".join(missing)}),
                self._provider if self._provider is not None else LLMProvider(DEFAULT_PROVIDER),
            )

        snapshot = ProviderConfig(
            provider=LLMClientFactory.validate_provider(self._provider),
            model=self._model,
            api_key=api_key,
            api_key_config=self._api_key_config,
            config=self._resolved_config(),
        )
        return LLMClient(LLMClientFactory.create_from_config(snapshot, observer=self._observer))


__all__ = ["LLMClientBuilder"]
