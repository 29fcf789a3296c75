"""
Heuristic extraction of corrections from a free-form grammar analysis.

This is best-effort text mining over an LLM's natural-language output, not a
parser: results are advisory only and may miss or misquote corrections.

Precedence, applied in order once a marker word is found in the reply:

  1. CORRECTED_TEXT_PATTERNS   first pattern that matches supplies the
                               corrected text
  2. ERROR_PATTERNS            every match of every pattern is collected as an
                               error description (10-200 chars kept)
  3. SUGGESTION_PATTERNS       only when step 1 found nothing and step 2 found
                               errors; first match supplies the corrected text
  4. PHRASE_FIXES              only when the text is still unchanged; known
                               learner mistakes are substituted directly

Nothing here raises: any failure yields the "unavailable" report.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Pattern

from pydantic import BaseModel, Field

from shared.logging.logger import get_logger

logger = get_logger(__name__, "CorrectionExtractor")

MARKER_WORDS: tuple[str, ...] = (
    "corrected",
    "error",
    "mistake",
    "should be",
    "change",
    "fix",
)

CORRECTED_TEXT_PATTERNS: tuple[Pattern[str], ...] = (
    re.compile(r"(?:corrected version|corrected text|correction):\s*[\"']([^\"']+)[\"']", re.I),
    re.compile(r"(?:corrected version|corrected text|should be):\s*([^\n.]+)", re.I),
    re.compile(r"(?:correct version|fixed version):\s*[\"']([^\"']+)[\"']", re.I),
    re.compile(r"here.{0,20}corrected:\s*[\"']([^\"']+)[\"']", re.I),
)

ERROR_PATTERNS: tuple[Pattern[str], ...] = (
    re.compile(r"(?:errors?|mistakes?):\s*(.*?)(?:\n\n|$)", re.I | re.S),
    re.compile(r"(?:problems?|issues?):\s*(.*?)(?:\n\n|$)", re.I | re.S),
    re.compile(r"\d+\.\s+([^\n]+(?:error|mistake|wrong|incorrect)[^\n]*)", re.I),
    re.compile(r"([^\n]*(?:should be|change to|replace with)[^\n]*)", re.I),
)

SUGGESTION_PATTERNS: tuple[Pattern[str], ...] = (
    re.compile(r"should be:\s*[\"']([^\"']+)[\"']", re.I),
    re.compile(r"change to:\s*[\"']([^\"']+)[\"']", re.I),
    re.compile(r"correct:\s*[\"']([^\"']+)[\"']", re.I),
)

PHRASE_FIXES: tuple[tuple[Pattern[str], str], ...] = (
    (re.compile(r"\bI am learn\b", re.I), "I am learning"),
    (re.compile(r"\bI want practice\b", re.I), "I want to practice"),
)

MIN_ERROR_LENGTH = 10
MAX_ERROR_LENGTH = 200
MAX_ERRORS = 3

LOOKS_CORRECT = "Your text looks correct!"
SOME_IMPROVEMENTS = "A few improvements were made to your text."
NOT_EXTRACTED = (
    "The AI detected that improvements are needed, but the details could not "
    "be extracted automatically."
)
UNAVAILABLE = "Correction analysis unavailable."


class CorrectionReport(BaseModel):
    has_errors: bool
    corrected_text: str
    errors: list[str] = Field(default_factory=list)
    explanation: str


def has_correction_markers(reply: str) -> bool:
    lowered = reply.lower()
    return any(marker in lowered for marker in MARKER_WORDS)


def first_capture(patterns: Iterable[Pattern[str]], text: str) -> Optional[str]:
    """Group 1 of the first pattern that matches, stripped; None otherwise."""
    for pattern in patterns:
        match = pattern.search(text)
        if match and match.group(1):
            return match.group(1).strip()
    return None


def collect_errors(reply: str) -> list[str]:
    errors: list[str] = []
    for pattern in ERROR_PATTERNS:
        for match in pattern.finditer(reply):
            if not match.group(1):
                continue
            candidate = match.group(1).strip()
            if MIN_ERROR_LENGTH < len(candidate) < MAX_ERROR_LENGTH and candidate not in errors:
                errors.append(candidate)
    return errors


def apply_phrase_fixes(text: str) -> tuple[str, list[str]]:
    fixed = text
    notes: list[str] = []
    for pattern, replacement in PHRASE_FIXES:
        match = pattern.search(fixed)
        if match:
            notes.append(f'"{match.group(0)}" should be "{replacement}"')
            fixed = pattern.sub(replacement, fixed)
    return fixed, notes


def extract_corrections(reply: str, original_text: str) -> CorrectionReport:
    try:
        return _extract(reply, original_text)
    except Exception as exc:
        logger.error("Failed to parse corrections: %s", exc, exc_info=True)
        return CorrectionReport(
            has_errors=False,
            corrected_text=original_text,
            errors=[],
            explanation=UNAVAILABLE,
        )


def _extract(reply: str, original_text: str) -> CorrectionReport:
    if not has_correction_markers(reply):
        return CorrectionReport(
            has_errors=False,
            corrected_text=original_text,
            errors=[],
            explanation=LOOKS_CORRECT,
        )

    corrected = first_capture(CORRECTED_TEXT_PATTERNS, reply) or original_text
    errors = collect_errors(reply)

    if corrected == original_text and errors:
        corrected = first_capture(SUGGESTION_PATTERNS, reply) or original_text

    if corrected == original_text:
        corrected, notes = apply_phrase_fixes(original_text)
        errors.extend(notes)

    errors = errors[:MAX_ERRORS]
    if errors:
        explanation = f"{len(errors)} correction(s) suggested to improve your text."
    elif corrected != original_text:
        explanation = SOME_IMPROVEMENTS
    else:
        explanation = NOT_EXTRACTED

    logger.debug(
        "Extracted corrections: changed=%s errors=%d",
        corrected != original_text,
        len(errors),
    )
    return CorrectionReport(
        has_errors=True,
        corrected_text=corrected,
        errors=errors,
        explanation=explanation,
    )
