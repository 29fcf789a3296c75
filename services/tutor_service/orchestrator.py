"""
Provider orchestrator: the entry point callers use for every tutor flow.

Each derived operation renders a template, assembles a bounded message
window and forwards it to the adapter selected by provider id:

  generate_tutor_response               conversation_tutor, last 10 history msgs
  generate_conversation_partner_response conversation_friend, last 8, temp 0.8
  analyze_text                           per-type template, one msg, temp 0.3
  generate_conversation_starters         conversation_starter, one msg, temp 0.8

Typed errors (unknown template / provider / analysis type) pass through
unchanged. Anything else is logged with its stack and replaced by an opaque
AIResponseGenerationError or TextAnalysisError.
"""

from __future__ import annotations

from typing import Optional, Sequence

from pydantic import BaseModel

from shared.errors import (
    AIResponseGenerationError,
    TextAnalysisError,
    TutorServiceError,
    UnsupportedAnalysisTypeError,
)
from shared.llm_adapter import (
    AnalysisType,
    CompletionOptions,
    CompletionResult,
    Message,
    MessageRole,
    ProviderId,
    ProviderRegistry,
    parse_provider_id,
)
from shared.logging.logger import get_logger
from shared.observability.metrics import ai_provider_health
from services.tutor_service import prompt_catalog
from services.tutor_service.config import AVAILABLE_MODELS
from services.tutor_service.renderer import (
    DEFAULT_LANGUAGE,
    DEFAULT_LEVEL,
    RenderContext,
    TemplateRenderer,
)

logger = get_logger(__name__, "TutorOrchestrator")

TUTOR_HISTORY_WINDOW = 10
PARTNER_HISTORY_WINDOW = 8
PARTNER_TEMPERATURE = 0.8
ANALYSIS_TEMPERATURE = 0.3
STARTER_TEMPERATURE = 0.8

CONNECTION_TEST_MESSAGE = "Hello, this is a connection test."

ANALYSIS_TEMPLATES: dict[AnalysisType, str] = {
    AnalysisType.GRAMMAR: prompt_catalog.GRAMMAR_CORRECTION,
    AnalysisType.STYLE: prompt_catalog.STYLE_IMPROVEMENT,
    AnalysisType.VOCABULARY: prompt_catalog.VOCABULARY_ANALYSIS,
}


class LearnerContext(BaseModel):
    """Who the learner is and what they practise; all fields optional."""

    language: Optional[str] = None
    level: Optional[str] = None
    user_id: Optional[str] = None
    conversation_id: Optional[str] = None
    topics: Optional[str] = None


class TutorOrchestrator:

    def __init__(
        self,
        providers: ProviderRegistry,
        renderer: TemplateRenderer,
        default_provider: ProviderId | str = ProviderId.OPENAI,
    ) -> None:
        self._providers = providers
        self._renderer = renderer
        self._default_provider = parse_provider_id(default_provider)
        logger.info(
            "Orchestrator initialized with default provider: %s",
            self._default_provider.value,
        )

    @property
    def providers(self) -> ProviderRegistry:
        return self._providers

    @property
    def renderer(self) -> TemplateRenderer:
        return self._renderer

    def get_default_provider(self) -> ProviderId:
        return self._default_provider

    async def generate_chat_response(
        self,
        messages: Sequence[Message],
        options: Optional[CompletionOptions] = None,
    ) -> CompletionResult:
        options = options or CompletionOptions()
        provider_id = options.provider or self._default_provider
        logger.info(
            "Generating chat response using %s provider",
            getattr(provider_id, "value", provider_id),
        )
        try:
            provider = self._providers.require(provider_id)
            return await provider.complete(messages, options)
        except TutorServiceError as exc:
            logger.error("Failed to generate chat response: %s", exc)
            raise
        except Exception as exc:
            logger.exception("Failed to generate chat response: %s", exc)
            raise AIResponseGenerationError() from exc

    async def generate_tutor_response(
        self,
        user_message: str,
        conversation_history: Sequence[Message],
        context: Optional[LearnerContext] = None,
        options: Optional[CompletionOptions] = None,
    ) -> CompletionResult:
        return await self._conversation_turn(
            prompt_catalog.CONVERSATION_TUTOR,
            user_message,
            conversation_history,
            context,
            options,
            window=TUTOR_HISTORY_WINDOW,
        )

    async def generate_conversation_partner_response(
        self,
        user_message: str,
        conversation_history: Sequence[Message],
        context: Optional[LearnerContext] = None,
        options: Optional[CompletionOptions] = None,
    ) -> CompletionResult:
        forced = (options or CompletionOptions()).with_overrides(
            temperature=PARTNER_TEMPERATURE
        )
        return await self._conversation_turn(
            prompt_catalog.CONVERSATION_FRIEND,
            user_message,
            conversation_history,
            context,
            forced,
            window=PARTNER_HISTORY_WINDOW,
        )

    async def _conversation_turn(
        self,
        template_id: str,
        user_message: str,
        conversation_history: Sequence[Message],
        context: Optional[LearnerContext],
        options: Optional[CompletionOptions],
        window: int,
    ) -> CompletionResult:
        context = context or LearnerContext()
        # the rendered prompt is the only system message sent
        history = [
            m for m in conversation_history or [] if m.role != MessageRole.SYSTEM
        ]
        try:
            system_prompt = self._renderer.render(
                template_id,
                RenderContext(
                    user_message=user_message,
                    conversation_history=history,
                    language=context.language or DEFAULT_LANGUAGE,
                    level=context.level or DEFAULT_LEVEL,
                    user_id=context.user_id,
                    conversation_id=context.conversation_id,
                ),
            )
            messages = [
                Message(role=MessageRole.SYSTEM, content=system_prompt),
                *history[-window:],
                Message(role=MessageRole.USER, content=user_message),
            ]
            return await self.generate_chat_response(messages, options)
        except TutorServiceError as exc:
            logger.error("Failed to generate %s response: %s", template_id, exc)
            raise
        except Exception as exc:
            logger.exception("Failed to generate %s response: %s", template_id, exc)
            raise AIResponseGenerationError() from exc

    async def analyze_text(
        self,
        text: str,
        analysis_type: AnalysisType | str,
        context: Optional[LearnerContext] = None,
        options: Optional[CompletionOptions] = None,
    ) -> CompletionResult:
        context = context or LearnerContext()
        options = options or CompletionOptions()
        provider_id = options.provider or self._default_provider
        level = context.level or DEFAULT_LEVEL
        logger.info(
            "Analyzing text for %s using %s",
            getattr(analysis_type, "value", analysis_type),
            getattr(provider_id, "value", provider_id),
        )
        try:
            try:
                kind = AnalysisType(analysis_type)
            except ValueError:
                raise UnsupportedAnalysisTypeError(str(analysis_type)) from None

            prompt = self._renderer.render(
                ANALYSIS_TEMPLATES[kind],
                RenderContext(
                    user_message=text,
                    language=context.language or DEFAULT_LANGUAGE,
                    level=level,
                    additional_context={"text": text, "level": level},
                ),
            )
            provider = self._providers.require(provider_id)
            return await provider.complete(
                [Message(role=MessageRole.USER, content=prompt)],
                options.with_overrides(temperature=ANALYSIS_TEMPERATURE),
            )
        except TutorServiceError as exc:
            logger.error("Failed to analyze text: %s", exc)
            raise
        except Exception as exc:
            logger.exception("Failed to analyze text: %s", exc)
            raise TextAnalysisError() from exc

    async def generate_conversation_starters(
        self,
        context: Optional[LearnerContext] = None,
        options: Optional[CompletionOptions] = None,
    ) -> CompletionResult:
        context = context or LearnerContext()
        try:
            prompt = self._renderer.render(
                prompt_catalog.CONVERSATION_STARTER,
                RenderContext(
                    language=context.language or DEFAULT_LANGUAGE,
                    level=context.level or DEFAULT_LEVEL,
                    additional_context={
                        "topics": context.topics or prompt_catalog.STARTER_TOPICS
                    },
                ),
            )
            forced = (options or CompletionOptions()).with_overrides(
                temperature=STARTER_TEMPERATURE
            )
            return await self.generate_chat_response(
                [Message(role=MessageRole.USER, content=prompt)], forced
            )
        except TutorServiceError as exc:
            logger.error("Failed to generate conversation starters: %s", exc)
            raise
        except Exception as exc:
            logger.exception("Failed to generate conversation starters: %s", exc)
            raise AIResponseGenerationError() from exc

    async def get_available_models(
        self, provider: Optional[ProviderId | str] = None
    ) -> list[str]:
        target = provider or self._default_provider
        key = getattr(target, "value", str(target)).lower()
        return list(AVAILABLE_MODELS.get(key, []))

    async def validate_provider_connection(
        self, provider: Optional[ProviderId | str] = None
    ) -> bool:
        target = provider or self._default_provider
        label = getattr(target, "value", str(target))
        try:
            await self.generate_chat_response(
                [Message(role=MessageRole.USER, content=CONNECTION_TEST_MESSAGE)],
                CompletionOptions(
                    provider=parse_provider_id(target),
                    max_tokens=10,
                    temperature=0,
                ),
            )
        except Exception as exc:
            logger.error("Provider connection validation failed: %s", exc, exc_info=True)
            ai_provider_health.labels(provider=label).set(0)
            return False

        ai_provider_health.labels(provider=label).set(1)
        return True
