"""Prompt composition.

Pure function from a PromptDraft to one normalized prompt string. No I/O,
fully deterministic.
"""

from prompt_builder.domain.constraints import ConstraintKind
from prompt_builder.domain.draft import PromptDraft

SECTION_SEPARATOR = "\n\n"
CONSTRAINTS_HEADER = "Constraints:"
GUIDELINES_HEADER = "Additional Guidelines:"


def compose(draft: PromptDraft) -> str:
    """Assemble the final prompt text from a draft.

    Sections, in order, each only when non-empty after trimming:
        - "User context: <user_context>"
        - "Context: <background_context>"
        - the main instruction, unlabeled
        - "Constraints:" followed by "- <label>: <value>" per constraint
        - "Additional Guidelines:" followed by "- <text>" per guideline

    Sections are separated by one blank line. Constraints and guidelines keep
    their insertion order; entries with blank values are skipped.

    Returns:
        The composed prompt, or "" when every field is blank

    Raises:
        UnknownConstraintKindError: If a constraint's kind is not a ConstraintKind
    """
    sections: list[str] = []

    user_context = draft.user_context.strip()
    if user_context:
        sections.append(f"User context: {user_context}")

    background_context = draft.background_context.strip()
    if background_context:
        sections.append(f"Context: {background_context}")

    main_instruction = draft.main_instruction.strip()
    if main_instruction:
        sections.append(main_instruction)

    constraint_lines: list[str] = []
    for constraint in draft.constraints:
        # Kind is checked for blank entries too
        label = ConstraintKind.parse(constraint.kind).label
        value = constraint.value.strip()
        if value:
            constraint_lines.append(f"- {label}: {value}")
    if constraint_lines:
        sections.append("\n".join([CONSTRAINTS_HEADER, *constraint_lines]))

    guideline_lines = [f"- {g.text.strip()}" for g in draft.guidelines if g.text.strip()]
    if guideline_lines:
        sections.append("\n".join([GUIDELINES_HEADER, *guideline_lines]))

    return SECTION_SEPARATOR.join(sections)
