from __future__ import annotations

import pytest

from shared.llm_adapter import ProviderId, ProviderRegistry
from services.tutor_service.orchestrator import TutorOrchestrator
from services.tutor_service.renderer import TemplateRenderer
from services.tutor_service.templates import TemplateStore
from tests.stubs import StubProvider


@pytest.fixture
def store() -> TemplateStore:
    return TemplateStore.with_defaults()


@pytest.fixture
def renderer(store: TemplateStore) -> TemplateRenderer:
    return TemplateRenderer(store)


@pytest.fixture
def stub_provider() -> StubProvider:
    return StubProvider()


@pytest.fixture
def registry(stub_provider: StubProvider) -> ProviderRegistry:
    registry = ProviderRegistry()
    registry.register(ProviderId.OPENAI, stub_provider)
    return registry


@pytest.fixture
def orchestrator(registry: ProviderRegistry, renderer: TemplateRenderer) -> TutorOrchestrator:
    return TutorOrchestrator(registry, renderer, default_provider=ProviderId.OPENAI)


@pytest.fixture
def no_credentials(monkeypatch):
    for key in ("OPENAI_API_KEY", "LLM_API_KEY"):
        monkeypatch.delenv(key, raising=False)
