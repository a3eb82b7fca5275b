"""Heuristic prompt-quality analysis.

Pure domain function -- plain string inspection, no external calls.
Each check runs independently and appends to strengths or issues in the
order below.
"""

import re
from dataclasses import dataclass, field

AMBIGUOUS_TERMS: tuple[str, ...] = ("best", "good", "recent", "many", "some", "often")
AMBIGUITY_ESCAPES: tuple[str, ...] = ("specific", "define")
FRAMING_MARKERS: tuple[str, ...] = ("context of", "in terms of")
STRUCTURE_MARKERS: tuple[str, ...] = ("1.", "•", "include:")
ACTION_VERB_PATTERN = re.compile(r"explain|describe|analyze", re.IGNORECASE)

MIN_LENGTH = 10
MAX_LENGTH = 500
FRAMING_MIN_LENGTH = 20

ISSUE_AMBIGUOUS = "Contains potentially ambiguous terms that may need clarification"
ISSUE_NO_FRAMING = "Consider adding contextual framing for better results"
ISSUE_MULTIPLE_QUESTIONS = "Multiple questions detected - consider breaking into separate prompts"
ISSUE_TOO_SHORT = "Prompt may be too short for complex responses"
ISSUE_TOO_LONG = "Prompt may be too long - consider simplifying"

STRENGTH_FRAMING = "Includes contextual framing"
STRENGTH_ACTION_VERBS = "Uses clear action verbs"
STRENGTH_STRUCTURED = "Well-structured with clear requirements"
STRENGTH_LENGTH = "Appropriate length for clear communication"


@dataclass
class AnalysisResult:
    """Strengths and issues detected in one composed prompt."""

    strengths: list[str] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)


def analyze(prompt: str) -> AnalysisResult | None:
    """Run every heuristic against ``prompt``.

    Returns:
        None when the prompt is blank, otherwise an AnalysisResult

    Rules:
        - ambiguity: a vague term (best, good, ...) without "specific"/"define"
        - framing: "context of"/"in terms of" is a strength; its absence is an
          issue only for prompts longer than 20 characters
        - multiple questions: two or more "?"
        - action verbs: explain / describe / analyze, any case
        - structure: "1.", a bullet, or "include:"
        - length: exactly one of too short (<10), too long (>500), appropriate
    """
    trimmed = prompt.strip()
    if not trimmed:
        return None

    result = AnalysisResult()
    lowered = prompt.lower()

    if any(term in lowered for term in AMBIGUOUS_TERMS) and not any(
        escape in prompt for escape in AMBIGUITY_ESCAPES
    ):
        result.issues.append(ISSUE_AMBIGUOUS)

    if any(marker in prompt for marker in FRAMING_MARKERS):
        result.strengths.append(STRENGTH_FRAMING)
    elif len(prompt) > FRAMING_MIN_LENGTH:
        result.issues.append(ISSUE_NO_FRAMING)

    if prompt.count("?") >= 2:
        result.issues.append(ISSUE_MULTIPLE_QUESTIONS)

    if ACTION_VERB_PATTERN.search(prompt):
        result.strengths.append(STRENGTH_ACTION_VERBS)

    if any(marker in prompt for marker in STRUCTURE_MARKERS):
        result.strengths.append(STRENGTH_STRUCTURED)

    if len(trimmed) < MIN_LENGTH:
        result.issues.append(ISSUE_TOO_SHORT)
    elif len(trimmed) > MAX_LENGTH:
        result.issues.append(ISSUE_TOO_LONG)
    else:
        result.strengths.append(STRENGTH_LENGTH)

    return result
