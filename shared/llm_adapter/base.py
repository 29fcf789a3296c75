"""Abstract base class that all LLM providers must implement."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from shared.llm_adapter.models import (
    AnalysisType,
    CompletionOptions,
    CompletionResult,
    Message,
    MessageRole,
)

ANALYSIS_TEMPERATURE = 0.3

ANALYSIS_PROMPTS: dict[AnalysisType, str] = {
    AnalysisType.GRAMMAR: """Analyze the following text for important grammatical and vocabulary errors. Focus ONLY on meaningful issues that affect comprehension and language learning.

Text: "{text}"

IMPORTANT GUIDELINES:
- IGNORE capitalization errors (e.g., "hi" vs "Hi")
- IGNORE punctuation spacing (e.g., spaces before question marks)
- IGNORE minor punctuation issues unless they severely affect meaning
- FOCUS ON: verb tenses, subject-verb agreement, word order, vocabulary usage, prepositions, articles (a/an/the)

Please provide:
1. A corrected version with ONLY major grammatical/vocabulary errors fixed
2. Explanation of each SIGNIFICANT error found (ignore capitalization/punctuation)
3. Relevant grammar rules for major issues

Focus on errors that truly impact language learning effectiveness.""",
    AnalysisType.STYLE: """Analyze the following text for writing style and provide suggestions for improvement:

Text: "{text}"

Please provide:
1. Style assessment (formal/informal, clarity, flow)
2. Specific suggestions for improvement
3. Alternative phrasings where appropriate

Focus on making the text more natural and effective.""",
    AnalysisType.VOCABULARY: """Analyze the following text for vocabulary usage and provide enhancement suggestions:

Text: "{text}"

Please provide:
1. Vocabulary level assessment
2. Suggestions for more advanced or appropriate word choices
3. Explanations of word usage and context

Help improve the richness and accuracy of vocabulary.""",
}


class LLMProvider(ABC):
    """
    Contract for LLM providers.

    Every implementation MUST:
    - Send messages in the given order, role and content only
    - Return a CompletionResult with usage and cost whenever the backend
      reports token counts
    - Re-raise backend failures unmodified after logging them
    """

    provider_name: str = "unknown"
    default_model: str = ""

    @abstractmethod
    async def complete(
        self,
        messages: Sequence[Message],
        options: Optional[CompletionOptions] = None,
    ) -> CompletionResult:
        """Send a message list and return the model's reply."""

    async def chat(
        self,
        messages: Sequence[Message],
        system_prompt: Optional[str] = None,
        options: Optional[CompletionOptions] = None,
    ) -> CompletionResult:
        """Prepend a system message when a system prompt is given."""
        enhanced: list[Message] = []
        if system_prompt:
            enhanced.append(Message(role=MessageRole.SYSTEM, content=system_prompt))
        enhanced.extend(messages)
        return await self.complete(enhanced, options)

    async def analyze(
        self,
        text: str,
        analysis_type: AnalysisType,
        options: Optional[CompletionOptions] = None,
    ) -> CompletionResult:
        """Run a fixed analysis instruction over text. Temperature is always 0.3."""
        prompt = ANALYSIS_PROMPTS[AnalysisType(analysis_type)].format(text=text)
        forced = (options or CompletionOptions()).with_overrides(
            temperature=ANALYSIS_TEMPERATURE
        )
        return await self.complete(
            [Message(role=MessageRole.USER, content=prompt)], forced
        )
