"""
Deterministic mock LLM provider for testing and development.

Always returns the same output for the same message list, making the
tutor flows reproducible without network calls or an API key.
"""

from __future__ import annotations

import hashlib
from typing import Optional, Sequence

from shared.llm_adapter.base import LLMProvider
from shared.llm_adapter.models import (
    CompletionOptions,
    CompletionResult,
    Message,
    TokenUsage,
)

_MOCK_PREFIX = "[MOCK] "


class MockProvider(LLMProvider):
    """Keeps only a call counter and the most recent call, so memory stays flat."""

    provider_name = "mock"
    default_model = "mock-deterministic"

    def __init__(self) -> None:
        self._call_count = 0
        self.last_call: Optional[tuple[list[Message], CompletionOptions]] = None

    @property
    def call_count(self) -> int:
        return self._call_count

    async def complete(
        self,
        messages: Sequence[Message],
        options: Optional[CompletionOptions] = None,
    ) -> CompletionResult:
        options = options or CompletionOptions()
        self._call_count += 1
        self.last_call = (list(messages), options)

        transcript = "\n".join(f"{m.role.value}:{m.content}" for m in messages)
        prompt_hash = hashlib.sha256(transcript.encode()).hexdigest()

        content = (
            f"{_MOCK_PREFIX}Deterministic response for prompt hash "
            f"{prompt_hash[:12]}."
        )

        fake_prompt_tokens = len(transcript.split())
        fake_completion_tokens = len(content.split())

        return CompletionResult(
            content=content,
            model=options.model or self.default_model,
            finish_reason="stop",
            usage=TokenUsage(
                prompt_tokens=fake_prompt_tokens,
                completion_tokens=fake_completion_tokens,
                total_tokens=fake_prompt_tokens + fake_completion_tokens,
            ),
            provider=self.provider_name,
            cost=0.0,
        )
