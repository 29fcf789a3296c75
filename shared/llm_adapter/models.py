"""Data models for the LLM adapter layer."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MessageRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ProviderId(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    MOCK = "mock"


class AnalysisType(str, Enum):
    GRAMMAR = "grammar"
    STYLE = "style"
    VOCABULARY = "vocabulary"


class Message(BaseModel):
    role: MessageRole
    content: str
    timestamp: Optional[datetime] = None

    def to_wire(self) -> dict[str, str]:
        """Role and content only; timestamps never leave the process."""
        return {"role": self.role.value, "content": self.content}


class CompletionOptions(BaseModel):
    """
    Per-call sampling options. Unset fields fall back to adapter defaults.

    user_id / conversation_id are carried for accounting only and are never
    sent to the provider.
    """

    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(default=None, ge=1, le=4000)
    model: Optional[str] = None
    provider: Optional[ProviderId] = None
    user_id: Optional[str] = None
    conversation_id: Optional[str] = None

    def with_overrides(self, **overrides) -> CompletionOptions:
        return self.model_copy(update=overrides)


class TokenUsage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class CompletionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str
    model: str
    finish_reason: Optional[str] = None
    usage: Optional[TokenUsage] = None
    provider: Optional[str] = None
    cost: Optional[float] = None
