"""
Template rendering against a per-request context.

Resolution order for each declared variable:

  language             context.language, else "English"
  level                context.level, else "intermediate"
  userMessage, text    context.user_message, else ""
  conversationHistory  transcript of the last 5 messages
  topics               additional_context["topics"], else a default phrase
  anything else        additional_context[name], else ""

Unresolved variables become the empty string; rendering never validates.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from pydantic import BaseModel, Field

from shared.errors import TemplateNotFoundError
from shared.llm_adapter.models import Message, MessageRole
from services.tutor_service.prompt_catalog import DEFAULT_TOPICS, NO_HISTORY_SENTENCE
from services.tutor_service.templates import TemplateStore

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "English"
DEFAULT_LEVEL = "intermediate"
HISTORY_WINDOW = 5


class RenderContext(BaseModel):
    language: Optional[str] = None
    level: Optional[str] = None
    user_message: Optional[str] = None
    conversation_history: Optional[list[Message]] = None
    user_id: Optional[str] = None
    conversation_id: Optional[str] = None
    additional_context: dict[str, Any] = Field(default_factory=dict)


def format_conversation_history(messages: Optional[Sequence[Message]]) -> str:
    if not messages:
        return NO_HISTORY_SENTENCE
    return "\n".join(
        f"{'Student' if m.role == MessageRole.USER else 'Tutor'}: {m.content}"
        for m in list(messages)[-HISTORY_WINDOW:]
    )


class TemplateRenderer:

    def __init__(self, store: TemplateStore) -> None:
        self._store = store

    @property
    def store(self) -> TemplateStore:
        return self._store

    def render(self, template_id: str, context: Optional[RenderContext] = None) -> str:
        template = self._store.get(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)

        context = context or RenderContext()
        rendered = template.template
        for variable in template.variables:
            value = self._resolve(variable, context)
            rendered = rendered.replace(f"{{{{{variable}}}}}", value)

        logger.debug("Rendered template %s (%d chars)", template_id, len(rendered))
        return rendered

    @staticmethod
    def _resolve(variable: str, context: RenderContext) -> str:
        extra = context.additional_context or {}
        if variable == "language":
            return context.language or DEFAULT_LANGUAGE
        if variable == "level":
            return context.level or DEFAULT_LEVEL
        if variable in ("userMessage", "text"):
            return context.user_message or ""
        if variable == "conversationHistory":
            return format_conversation_history(context.conversation_history)
        if variable == "topics":
            return _as_text(extra.get("topics")) or DEFAULT_TOPICS
        return _as_text(extra.get(variable))


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
