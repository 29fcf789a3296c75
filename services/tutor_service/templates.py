"""
Prompt template store.

The store is the single source of truth for PromptTemplate instances. It is
created once at startup, seeded with the built-in catalog, and passed by
reference to the renderer and orchestrator.

Registration is lenient by default: templates are stored without running
validate(), matching how the render path never validates either. Pass
strict=True (or construct the store with strict=True) to reject templates
whose body references undeclared placeholders.
"""

from __future__ import annotations

import re
import threading
from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from shared.errors import TemplateValidationError
from shared.logging.logger import get_logger

logger = get_logger(__name__, "TemplateStore")

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")


class TemplateCategory(str, Enum):
    CONVERSATION = "conversation"
    CORRECTION = "correction"
    ANALYSIS = "analysis"
    SYSTEM = "system"


class PromptTemplate(BaseModel):
    id: str
    name: str
    description: str = ""
    template: str
    variables: list[str] = Field(default_factory=list)
    category: TemplateCategory
    language: Optional[str] = None
    level: Optional[str] = None


def extract_placeholders(body: str) -> list[str]:
    """Distinct ``{{name}}`` placeholders in order of first appearance."""
    seen: list[str] = []
    for name in PLACEHOLDER_PATTERN.findall(body or ""):
        if name not in seen:
            seen.append(name)
    return seen


def validate_template(template: PromptTemplate) -> list[str]:
    """Return human-readable problems with a template; empty when valid."""
    errors: list[str] = []

    if not template.id or not template.id.strip():
        errors.append("Template ID is required")
    if not template.name or not template.name.strip():
        errors.append("Template name is required")
    if not template.template or not template.template.strip():
        errors.append("Template content is required")

    variables = template.variables
    if not isinstance(variables, (list, tuple)):
        errors.append("Template variables must be an array")
        variables = []

    undeclared = [
        name for name in extract_placeholders(template.template) if name not in variables
    ]
    if undeclared:
        errors.append(f"Undeclared variables found: {', '.join(undeclared)}")

    return errors


class TemplateStore:
    """
    In-memory registry of prompt templates keyed by id.

    Writes are serialized with a lock; reads after startup are effectively
    read-only and safe from concurrent requests.
    """

    def __init__(self, strict: bool = False) -> None:
        self._lock = threading.Lock()
        self._templates: dict[str, PromptTemplate] = {}
        self._strict = strict

    @classmethod
    def with_defaults(cls, strict: bool = False) -> TemplateStore:
        from services.tutor_service.prompt_catalog import DEFAULT_TEMPLATES

        store = cls(strict=strict)
        store.register_many(DEFAULT_TEMPLATES)
        logger.info("Initialized %d default prompt templates", len(DEFAULT_TEMPLATES))
        return store

    def register(self, template: PromptTemplate, strict: Optional[bool] = None) -> None:
        """Insert or overwrite a template by id."""
        if self._strict if strict is None else strict:
            errors = validate_template(template)
            if errors:
                raise TemplateValidationError(template.id, errors)
        with self._lock:
            self._templates[template.id] = template
        logger.debug("Registered template: %s", template.id)

    def register_many(self, templates: Iterable[PromptTemplate]) -> None:
        for template in templates:
            self.register(template)

    def get(self, template_id: str) -> Optional[PromptTemplate]:
        with self._lock:
            return self._templates.get(template_id)

    def list(self) -> list[PromptTemplate]:
        with self._lock:
            return list(self._templates.values())

    def list_by_category(self, category: TemplateCategory | str) -> list[PromptTemplate]:
        """Templates in a category; an unknown category name matches nothing."""
        try:
            category = TemplateCategory(category)
        except ValueError:
            return []
        return [t for t in self.list() if t.category == category]

    def validate(self, template: PromptTemplate) -> list[str]:
        return validate_template(template)

    def __contains__(self, template_id: object) -> bool:
        with self._lock:
            return template_id in self._templates

    def __len__(self) -> int:
        with self._lock:
            return len(self._templates)
