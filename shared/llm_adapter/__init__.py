from shared.llm_adapter.base import LLMProvider
from shared.llm_adapter.factory import (
    ProviderRegistry,
    build_provider_registry,
    create_provider,
    parse_provider_id,
)
from shared.llm_adapter.models import (
    AnalysisType,
    CompletionOptions,
    CompletionResult,
    Message,
    MessageRole,
    ProviderId,
    TokenUsage,
)
from shared.llm_adapter.mock_provider import MockProvider
from shared.llm_adapter.pricing import MODEL_PRICES, PriceEntry, compute_cost

__all__ = [
    "LLMProvider",
    "AnalysisType",
    "CompletionOptions",
    "CompletionResult",
    "Message",
    "MessageRole",
    "ProviderId",
    "TokenUsage",
    "MockProvider",
    "ProviderRegistry",
    "build_provider_registry",
    "create_provider",
    "parse_provider_id",
    "MODEL_PRICES",
    "PriceEntry",
    "compute_cost",
]
