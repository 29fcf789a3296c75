"""
OpenAI-compatible LLM provider.

Works with any API that speaks the OpenAI Chat Completions protocol; the
base URL defaults to OpenAI itself and can be pointed at a compatible
gateway with OPENAI_BASE_URL.

No retries happen here: a failed call is logged and re-raised as-is, and the
orchestrator decides how to surface it.
"""

from __future__ import annotations

import os
import time
from typing import Optional, Sequence

from openai import AsyncOpenAI

from shared.errors import MissingCredentialError
from shared.llm_adapter.base import LLMProvider
from shared.llm_adapter.models import (
    CompletionOptions,
    CompletionResult,
    Message,
    TokenUsage,
)
from shared.llm_adapter.pricing import compute_cost
from shared.logging.logger import get_logger
from shared.observability.metrics import (
    ai_costs,
    ai_request_duration,
    ai_requests,
    ai_tokens,
)

logger = get_logger(__name__, "OpenAIProvider")

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000


class OpenAIProvider(LLMProvider):
    """
    OpenAI Chat Completions adapter.

    Reads from env when arguments are omitted:
      OPENAI_API_KEY        -- API key (LLM_API_KEY is accepted too)
      OPENAI_ORGANIZATION   -- optional organization id
      OPENAI_DEFAULT_MODEL  -- model used when a call does not name one
      OPENAI_BASE_URL       -- optional compatible endpoint
      LLM_REQUEST_TIMEOUT   -- seconds, default 60
    """

    provider_name = "openai"

    def __init__(
        self,
        api_key: str | None = None,
        organization: str | None = None,
        default_model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._api_key = (
            api_key
            or os.environ.get("OPENAI_API_KEY", "")
            or os.environ.get("LLM_API_KEY", "")
        )
        if not self._api_key:
            raise MissingCredentialError(self.provider_name, "OPENAI_API_KEY")

        self.default_model = (
            default_model
            or os.environ.get("OPENAI_DEFAULT_MODEL", "")
            or DEFAULT_MODEL
        )

        if timeout is None:
            timeout = float(os.environ.get("LLM_REQUEST_TIMEOUT", "60"))

        self._client = AsyncOpenAI(
            api_key=self._api_key,
            organization=organization or os.environ.get("OPENAI_ORGANIZATION") or None,
            base_url=base_url or os.environ.get("OPENAI_BASE_URL") or None,
            timeout=timeout,
            max_retries=0,
        )
        logger.info("OpenAI provider initialized (default_model=%s)", self.default_model)

    async def complete(
        self,
        messages: Sequence[Message],
        options: Optional[CompletionOptions] = None,
    ) -> CompletionResult:
        options = options or CompletionOptions()
        model = options.model or self.default_model
        temperature = (
            options.temperature if options.temperature is not None else DEFAULT_TEMPERATURE
        )
        max_tokens = options.max_tokens or DEFAULT_MAX_TOKENS

        logger.info("Generating completion with %d messages", len(messages))
        started = time.perf_counter()
        try:
            response = await self._client.chat.completions.create(
                model=model,
                messages=[m.to_wire() for m in messages],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except Exception as exc:
            ai_requests.labels(provider=self.provider_name, model=model, status="error").inc()
            logger.exception("Failed to generate completion: %s", exc)
            raise
        finally:
            ai_request_duration.labels(provider=self.provider_name, model=model).observe(
                time.perf_counter() - started
            )

        result = self._to_result(response)
        self._record_usage(result)

        logger.info(
            "Completion generated successfully, tokens used: %d",
            result.usage.total_tokens if result.usage else 0,
        )
        return result

    def _to_result(self, response) -> CompletionResult:
        choice = response.choices[0] if response.choices else None
        content = ""
        finish_reason = None
        if choice is not None:
            content = (choice.message.content if choice.message else None) or ""
            finish_reason = choice.finish_reason or None

        usage = None
        cost = None
        if response.usage is not None:
            usage = TokenUsage(
                prompt_tokens=response.usage.prompt_tokens,
                completion_tokens=response.usage.completion_tokens,
                total_tokens=response.usage.total_tokens,
            )
            cost = compute_cost(
                response.model, usage.prompt_tokens, usage.completion_tokens
            )

        return CompletionResult(
            content=content,
            model=response.model,
            finish_reason=finish_reason,
            usage=usage,
            provider=self.provider_name,
            cost=cost,
        )

    def _record_usage(self, result: CompletionResult) -> None:
        labels = {"provider": self.provider_name, "model": result.model}
        ai_requests.labels(status="success", **labels).inc()
        if result.usage is None:
            return
        ai_tokens.labels(direction="prompt", **labels).inc(result.usage.prompt_tokens)
        ai_tokens.labels(direction="completion", **labels).inc(
            result.usage.completion_tokens
        )
        if result.cost:
            ai_costs.labels(**labels).inc(result.cost)
