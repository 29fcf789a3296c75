"""
Structured JSON logging for the tutor service.

One JSON object per line on stdout. Besides level, logger and message, every
entry names the service and, when known, the component that emitted it:

    {"timestamp": "...", "level": "ERROR", "service": "tutor_service",
     "logger": "shared.llm_adapter.openai_provider", "context": "OpenAIProvider",
     "message": "Failed to generate completion: ...", "exception": "Traceback ..."}

Modules tag their records with get_logger(__name__, "ComponentName").
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Optional, Union

QUIET_LOGGERS = ("httpx", "httpcore", "openai")


class JSONFormatter(logging.Formatter):
    """Single-line JSON; an ``_extra`` dict on the record is nested under "extra"."""

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
        }

        context = getattr(record, "context", None)
        if context:
            entry["context"] = context
        entry["message"] = record.getMessage()

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        elif record.stack_info:
            entry["stack"] = self.formatStack(record.stack_info)

        extra = getattr(record, "_extra", None)
        if extra:
            entry["extra"] = extra

        return json.dumps(entry, default=str, ensure_ascii=False)


class ComponentLogger(logging.LoggerAdapter):
    """Stamps ``context`` on every record without dropping the caller's extras."""

    def process(self, msg, kwargs):
        merged = dict(self.extra)
        merged.update(kwargs.get("extra") or {})
        kwargs["extra"] = merged
        return msg, kwargs


def setup_logging(service_name: str, level_name: Optional[str] = None) -> logging.Logger:
    """
    Route the root logger to stdout through JSONFormatter.

    Called once from services.tutor_service.bootstrap. The level comes from
    the argument, else LOG_LEVEL, else INFO; unknown names mean INFO.
    """
    level_name = (level_name or os.environ.get("LOG_LEVEL", "INFO")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter(service_name))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # SDK request logs repeat what the adapter already logs
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    service_logger = logging.getLogger(service_name)
    service_logger.info("Logging initialized", extra={"_extra": {"level": level_name}})
    return service_logger


def get_logger(
    name: str, context: Optional[str] = None
) -> Union[logging.Logger, ComponentLogger]:
    if context is None:
        return logging.getLogger(name)
    return ComponentLogger(logging.getLogger(name), {"context": context})
