"""Tests for the end-to-end demo chat flow."""

from unittest.mock import patch

import pytest

from shared.llm_adapter import ProviderId, ProviderRegistry
from services.tutor_service import demo
from services.tutor_service.demo import ChatMode, chat_demo, quick_test
from services.tutor_service.orchestrator import TutorOrchestrator
from services.tutor_service.renderer import TemplateRenderer
from tests.stubs import StubProvider


def _orchestrator(provider: StubProvider, renderer: TemplateRenderer) -> TutorOrchestrator:
    registry = ProviderRegistry()
    registry.register(ProviderId.OPENAI, provider)
    return TutorOrchestrator(registry, renderer)


class TestChatDemo:

    @pytest.mark.asyncio
    async def test_tutor_mode(self, renderer):
        provider = StubProvider(content='Corrected version: "I am fine."')
        result = await chat_demo(_orchestrator(provider, renderer), "I are fine.")

        assert result.success is True
        assert result.error is None
        data = result.data
        assert data.corrections.has_errors is True
        assert data.corrections.corrected_text == "I am fine."
        assert data.ai_response == 'Corrected version: "I am fine."'
        assert data.mode is ChatMode.TUTOR

        analysis_messages, analysis_options = provider.calls[0]
        assert "grammatical errors" in analysis_messages[0].content
        assert analysis_options.temperature == 0.3
        tutor_messages, _ = provider.calls[1]
        assert "language tutor" in tutor_messages[0].content
        assert len(tutor_messages) == 2

    @pytest.mark.asyncio
    async def test_partner_mode(self, renderer):
        provider = StubProvider(content="Sounds fun!")
        result = await chat_demo(
            _orchestrator(provider, renderer),
            "I like hiking.",
            language="German",
            level="beginner",
            mode="conversation-partner",
        )
        assert result.success is True
        assert result.data.mode is ChatMode.CONVERSATION_PARTNER
        assert result.data.corrections.has_errors is False
        assert result.data.language == "German"
        assert "conversation partner" in provider.last_messages[0].content
        assert provider.last_options.temperature == 0.8

    @pytest.mark.asyncio
    async def test_failure_is_reported_not_raised(self, renderer):
        provider = StubProvider(error=RuntimeError("network down"))
        result = await chat_demo(_orchestrator(provider, renderer), "Hello")
        assert result.success is False
        assert result.data is None
        assert result.error.message == "Error while processing your message"
        assert result.error.details == "Failed to analyze text"
        assert result.timestamp

    @pytest.mark.asyncio
    async def test_unknown_mode(self, orchestrator, stub_provider):
        result = await chat_demo(orchestrator, "Hello", mode="shouting")
        assert result.success is False
        assert stub_provider.calls == []

    @pytest.mark.asyncio
    async def test_quick_test_sentence(self, orchestrator, stub_provider):
        result = await quick_test(orchestrator)
        assert result.success is True
        assert result.data.user_message == demo.QUICK_TEST_MESSAGE


def test_main_with_mock_provider(monkeypatch, capsys):
    monkeypatch.setenv("DEFAULT_AI_PROVIDER", "mock")
    with patch("services.tutor_service.bootstrap.setup_logging"):
        exit_code = demo.main(["I am learn English", "--mode", "conversation-partner"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert '"success": true' in out
    assert '"mode": "conversation-partner"' in out
