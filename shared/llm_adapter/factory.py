"""
Provider registry and factory.

The orchestrator selects an adapter by ProviderId through a ProviderRegistry
built once at startup. Adapters are constructed eagerly so that a missing
credential stops the process before it serves any request.

Supported providers:

  openai      OpenAI Chat Completions -- needs OPENAI_API_KEY (or LLM_API_KEY)
  mock        Built-in deterministic mock, no API key needed

``anthropic`` is a known provider id without an adapter; asking for it
raises UnsupportedProviderError.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, Optional

from shared.errors import UnsupportedProviderError
from shared.llm_adapter.base import LLMProvider
from shared.llm_adapter.mock_provider import MockProvider
from shared.llm_adapter.models import ProviderId

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[], LLMProvider]

_PROVIDERS: dict[ProviderId, ProviderFactory] = {
    ProviderId.MOCK: MockProvider,
}


def _openai_factory() -> LLMProvider:
    from shared.llm_adapter.openai_provider import OpenAIProvider

    return OpenAIProvider()


_PROVIDERS[ProviderId.OPENAI] = _openai_factory


def parse_provider_id(value: ProviderId | str) -> ProviderId:
    """Normalize a provider name; unknown names raise UnsupportedProviderError."""
    if isinstance(value, ProviderId):
        return value
    try:
        return ProviderId(str(value).strip().lower())
    except ValueError:
        raise UnsupportedProviderError(str(value)) from None


class ProviderRegistry:
    """
    In-memory mapping of provider id to adapter instance.

    Populated during startup and read concurrently afterwards.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._providers: dict[ProviderId, LLMProvider] = {}

    def register(self, provider_id: ProviderId | str, provider: LLMProvider) -> None:
        """Register or overwrite the adapter for a provider id."""
        with self._lock:
            self._providers[parse_provider_id(provider_id)] = provider

    def get(self, provider_id: ProviderId | str) -> Optional[LLMProvider]:
        try:
            key = parse_provider_id(provider_id)
        except UnsupportedProviderError:
            return None
        with self._lock:
            return self._providers.get(key)

    def require(self, provider_id: ProviderId | str) -> LLMProvider:
        """Like get(), but raises UnsupportedProviderError when absent."""
        provider = self.get(provider_id)
        if provider is None:
            raise UnsupportedProviderError(getattr(provider_id, "value", str(provider_id)))
        return provider

    def ids(self) -> list[ProviderId]:
        with self._lock:
            return list(self._providers)


def create_provider(name: ProviderId | str) -> LLMProvider:
    """Instantiate the adapter for one provider id."""
    provider_id = parse_provider_id(name)
    factory = _PROVIDERS.get(provider_id)
    if factory is None:
        raise UnsupportedProviderError(provider_id.value)
    return factory()


def build_provider_registry(names: Iterable[ProviderId | str]) -> ProviderRegistry:
    """
    Build a registry holding one adapter per requested provider.

    Raises MissingCredentialError (from the adapter) if a provider has no key,
    and UnsupportedProviderError for ids without an adapter.
    """
    registry = ProviderRegistry()
    for name in names:
        provider_id = parse_provider_id(name)
        registry.register(provider_id, create_provider(provider_id))
        logger.info("LLM provider registered: %s", provider_id.value)
    return registry
