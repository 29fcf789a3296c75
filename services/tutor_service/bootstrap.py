"""
Startup wiring for the tutor service core.

Builds the single per-process template store, renderer, provider registry
and orchestrator. A missing provider credential raises
MissingCredentialError here, before any request can be served.
"""

from __future__ import annotations

import logging
from typing import Optional

from shared.llm_adapter import build_provider_registry
from shared.logging.logger import setup_logging
from services.tutor_service.config import TutorServiceConfig
from services.tutor_service.orchestrator import TutorOrchestrator
from services.tutor_service.renderer import TemplateRenderer
from services.tutor_service.templates import TemplateStore

logger = logging.getLogger(__name__)


def build_orchestrator(
    cfg: Optional[TutorServiceConfig] = None,
    configure_logging: bool = True,
) -> TutorOrchestrator:
    cfg = cfg or TutorServiceConfig.from_env()
    if configure_logging:
        setup_logging(cfg.service_name, cfg.log_level)

    store = TemplateStore.with_defaults(strict=cfg.strict_templates)
    providers = build_provider_registry([cfg.default_provider])
    orchestrator = TutorOrchestrator(
        providers=providers,
        renderer=TemplateRenderer(store),
        default_provider=cfg.default_provider,
    )
    logger.info(
        "Tutor service ready (provider=%s, templates=%d)",
        cfg.default_provider,
        len(store),
    )
    return orchestrator
