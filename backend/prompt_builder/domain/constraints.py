"""Constraint kinds, constraints and guidelines attached to a prompt draft.

ConstraintKind is a closed set. Every kind has a display label (used when the
constraint is rendered into the composed prompt) and an input placeholder.
Building a kind from any other string raises UnknownConstraintKindError.
"""

import uuid
from dataclasses import dataclass, field
from enum import StrEnum

from prompt_builder.core.exceptions import UnknownConstraintKindError


class ConstraintKind(StrEnum):
    """Limitation categories a constraint can express."""

    LENGTH = "length"
    FORMAT = "format"
    AUDIENCE = "audience"
    STYLE = "style"
    SCOPE = "scope"
    ETHICAL = "ethical"

    @classmethod
    def parse(cls, value: "ConstraintKind | str") -> "ConstraintKind":
        """Return the kind for ``value`` or raise UnknownConstraintKindError."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownConstraintKindError(value) from None

    @property
    def label(self) -> str:
        return CONSTRAINT_LABELS[self]

    @property
    def placeholder(self) -> str:
        return CONSTRAINT_PLACEHOLDERS[self]


CONSTRAINT_LABELS: dict[ConstraintKind, str] = {
    ConstraintKind.LENGTH: "Word/Character Limit",
    ConstraintKind.FORMAT: "Format Requirement",
    ConstraintKind.AUDIENCE: "Target Audience",
    ConstraintKind.STYLE: "Writing Style",
    ConstraintKind.SCOPE: "Scope Limitation",
    ConstraintKind.ETHICAL: "Ethical Guidelines",
}

CONSTRAINT_PLACEHOLDERS: dict[ConstraintKind, str] = {
    ConstraintKind.LENGTH: "e.g., 500 words maximum",
    ConstraintKind.FORMAT: "e.g., bullet points, formal tone",
    ConstraintKind.AUDIENCE: "e.g., beginners, experts, children",
    ConstraintKind.STYLE: "e.g., academic, conversational, technical",
    ConstraintKind.SCOPE: "e.g., focus on last 5 years, US only",
    ConstraintKind.ETHICAL: "e.g., avoid bias, include diverse perspectives",
}


def new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Constraint:
    """A labeled limitation. An empty value is kept but not rendered."""

    kind: ConstraintKind
    value: str = ""
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        self.kind = ConstraintKind.parse(self.kind)


@dataclass
class Guideline:
    """A free-text instruction appended to the prompt. Empty text is not rendered."""

    text: str = ""
    id: str = field(default_factory=new_id)
