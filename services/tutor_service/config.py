from __future__ import annotations

import os
from dataclasses import dataclass


SERVICE_NAME = "tutor_service"

AVAILABLE_MODELS: dict[str, list[str]] = {
    "openai": [
        "gpt-4o-mini",
        "gpt-4o",
        "gpt-4-turbo",
        "gpt-4",
        "gpt-3.5-turbo",
        "gpt-3.5-turbo-16k",
    ],
    "mock": ["mock-deterministic"],
}


@dataclass(frozen=True)
class TutorServiceConfig:
    service_name: str
    log_level: str
    default_provider: str
    strict_templates: bool

    @classmethod
    def from_env(cls) -> TutorServiceConfig:
        return cls(
            service_name=os.environ.get("SERVICE_NAME", SERVICE_NAME),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            default_provider=os.environ.get("DEFAULT_AI_PROVIDER", "openai").lower(),
            strict_templates=os.environ.get("STRICT_TEMPLATES", "false").lower()
            in ("1", "true", "yes", "on"),
        )
