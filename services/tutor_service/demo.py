"""
Demo flow: grammar check plus a tutor (or conversation-partner) reply.

Used to show the whole pipeline end to end. Corrections come from the
heuristic extractor in corrections.py and are advisory only.

    python -m services.tutor_service.demo "I am learn English every day"
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from shared.llm_adapter import AnalysisType, CompletionOptions
from services.tutor_service.corrections import CorrectionReport, extract_corrections
from services.tutor_service.orchestrator import LearnerContext, TutorOrchestrator

logger = logging.getLogger(__name__)

QUICK_TEST_MESSAGE = "Hello, I want practice English conversation with you!"


class ChatMode(str, Enum):
    TUTOR = "tutor"
    CONVERSATION_PARTNER = "conversation-partner"


class DemoChatData(BaseModel):
    user_message: str
    corrections: CorrectionReport
    ai_response: str
    language: str
    level: str
    mode: ChatMode


class DemoError(BaseModel):
    message: str
    details: str = ""


class DemoChatResult(BaseModel):
    success: bool
    data: Optional[DemoChatData] = None
    error: Optional[DemoError] = None
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )


async def chat_demo(
    orchestrator: TutorOrchestrator,
    message: str,
    language: str = "English",
    level: str = "intermediate",
    mode: ChatMode | str = ChatMode.TUTOR,
) -> DemoChatResult:
    context = LearnerContext(language=language, level=level)
    try:
        mode = ChatMode(mode)
        analysis = await orchestrator.analyze_text(
            message,
            AnalysisType.GRAMMAR,
            context,
            CompletionOptions(temperature=0.3),
        )
        corrections = extract_corrections(analysis.content, message)

        if mode is ChatMode.CONVERSATION_PARTNER:
            reply = await orchestrator.generate_conversation_partner_response(
                message, [], context
            )
        else:
            reply = await orchestrator.generate_tutor_response(message, [], context)
    except Exception as exc:
        logger.error("Demo chat failed: %s", exc, exc_info=True)
        return DemoChatResult(
            success=False,
            error=DemoError(
                message="Error while processing your message", details=str(exc)
            ),
        )

    return DemoChatResult(
        success=True,
        data=DemoChatData(
            user_message=message,
            corrections=corrections,
            ai_response=reply.content,
            language=language,
            level=level,
            mode=mode,
        ),
    )


async def quick_test(orchestrator: TutorOrchestrator) -> DemoChatResult:
    """Run the demo once with a fixed sentence containing a known mistake."""
    return await chat_demo(orchestrator, QUICK_TEST_MESSAGE)


def main(argv: Optional[list[str]] = None) -> int:
    from services.tutor_service.bootstrap import build_orchestrator

    parser = argparse.ArgumentParser(description="Run the tutor demo chat once.")
    parser.add_argument("message", nargs="?", default=QUICK_TEST_MESSAGE)
    parser.add_argument("--language", default="English")
    parser.add_argument("--level", default="intermediate")
    parser.add_argument(
        "--mode", choices=[m.value for m in ChatMode], default=ChatMode.TUTOR.value
    )
    args = parser.parse_args(argv)

    orchestrator = build_orchestrator()
    result = asyncio.run(
        chat_demo(orchestrator, args.message, args.language, args.level, args.mode)
    )
    print(result.model_dump_json(indent=2))
    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
