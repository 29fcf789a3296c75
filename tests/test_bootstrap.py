import pytest

from shared.errors import MissingCredentialError, UnsupportedProviderError
from shared.llm_adapter import MockProvider, ProviderId
from services.tutor_service.bootstrap import build_orchestrator
from services.tutor_service.config import TutorServiceConfig
from services.tutor_service.prompt_catalog import DEFAULT_TEMPLATES


@pytest.fixture
def clean_env(monkeypatch):
    for key in ("SERVICE_NAME", "LOG_LEVEL", "DEFAULT_AI_PROVIDER", "STRICT_TEMPLATES"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestConfig:

    def test_defaults(self, clean_env):
        cfg = TutorServiceConfig.from_env()
        assert cfg.service_name == "tutor_service"
        assert cfg.log_level == "INFO"
        assert cfg.default_provider == "openai"
        assert cfg.strict_templates is False

    def test_overrides(self, clean_env):
        clean_env.setenv("DEFAULT_AI_PROVIDER", "MOCK")
        clean_env.setenv("STRICT_TEMPLATES", "true")
        clean_env.setenv("LOG_LEVEL", "DEBUG")
        cfg = TutorServiceConfig.from_env()
        assert cfg.default_provider == "mock"
        assert cfg.strict_templates is True
        assert cfg.log_level == "DEBUG"


class TestBuildOrchestrator:

    def test_mock_provider(self, clean_env):
        clean_env.setenv("DEFAULT_AI_PROVIDER", "mock")
        clean_env.setenv("STRICT_TEMPLATES", "1")
        orchestrator = build_orchestrator(configure_logging=False)
        assert orchestrator.get_default_provider() is ProviderId.MOCK
        assert isinstance(orchestrator.providers.require("mock"), MockProvider)
        assert len(orchestrator.renderer.store) == len(DEFAULT_TEMPLATES)

    @pytest.mark.asyncio
    async def test_mock_provider_serves_requests(self, clean_env):
        clean_env.setenv("DEFAULT_AI_PROVIDER", "mock")
        orchestrator = build_orchestrator(configure_logging=False)
        result = await orchestrator.generate_tutor_response("Bonjour", [])
        assert result.content.startswith("[MOCK] ")
        assert await orchestrator.validate_provider_connection() is True

    def test_missing_openai_key_fails_at_startup(self, clean_env, no_credentials):
        with pytest.raises(MissingCredentialError) as exc_info:
            build_orchestrator(configure_logging=False)
        assert exc_info.value.config_key == "OPENAI_API_KEY"

    def test_unknown_provider(self, clean_env):
        clean_env.setenv("DEFAULT_AI_PROVIDER", "skynet")
        with pytest.raises(UnsupportedProviderError):
            build_orchestrator(configure_logging=False)
