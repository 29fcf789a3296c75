from __future__ import annotations

from typing import Optional, Sequence

from shared.llm_adapter import (
    CompletionOptions,
    CompletionResult,
    LLMProvider,
    Message,
    TokenUsage,
)


class StubProvider(LLMProvider):
    """Records every call; returns a canned reply or raises a canned error."""

    provider_name = "openai"
    default_model = "gpt-4o-mini"

    def __init__(self, content: str = "stub reply", error: Optional[Exception] = None):
        self.content = content
        self.error = error
        self.calls: list[tuple[list[Message], CompletionOptions]] = []

    async def complete(
        self,
        messages: Sequence[Message],
        options: Optional[CompletionOptions] = None,
    ) -> CompletionResult:
        self.calls.append((list(messages), options or CompletionOptions()))
        if self.error is not None:
            raise self.error
        return CompletionResult(
            content=self.content,
            model=(options.model if options and options.model else self.default_model),
            finish_reason="stop",
            usage=TokenUsage(prompt_tokens=12, completion_tokens=8, total_tokens=20),
            provider=self.provider_name,
            cost=0.0000066,
        )

    @property
    def last_messages(self) -> list[Message]:
        return self.calls[-1][0]

    @property
    def last_options(self) -> CompletionOptions:
        return self.calls[-1][1]
