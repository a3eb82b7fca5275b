"""Static prompt template catalog.

Read-only reference data. Loading a template copies its example text into the
draft's main instruction; the bracketed template shape is shown as guidance.
"""

from dataclasses import dataclass
from enum import StrEnum


class TemplateKey(StrEnum):
    """Catalog keys for the built-in templates."""

    CONTEXTUAL = "contextual"
    SPECIFIC_QUESTION = "specific-question"
    CREATIVE_WRITING = "creative-writing"
    ANALYSIS = "analysis"
    STEP_BY_STEP = "step-by-step"


@dataclass(frozen=True)
class Template:
    key: TemplateKey
    display_name: str
    template_shape: str
    example_text: str


TEMPLATES: dict[TemplateKey, Template] = {
    TemplateKey.CONTEXTUAL: Template(
        key=TemplateKey.CONTEXTUAL,
        display_name="Contextual Prompt",
        template_shape="In the context of [DOMAIN], [MAIN_REQUEST]. Consider [CONTEXT_DETAILS].",
        example_text=(
            "In the context of space exploration, explain the concept of black holes. "
            "Consider recent discoveries and their implications for future missions."
        ),
    ),
    TemplateKey.SPECIFIC_QUESTION: Template(
        key=TemplateKey.SPECIFIC_QUESTION,
        display_name="Specific Question",
        template_shape=(
            "[SPECIFIC_QUESTION] Please provide [DETAIL_LEVEL] explanation including [REQUIRED_ELEMENTS]."
        ),
        example_text=(
            "What are the key principles of supply and demand in economics? "
            "Please provide a detailed explanation including real-world examples "
            "and current market applications."
        ),
    ),
    TemplateKey.CREATIVE_WRITING: Template(
        key=TemplateKey.CREATIVE_WRITING,
        display_name="Creative Writing",
        template_shape='Write a [FORMAT] that [CREATIVE_GOAL]. Begin with: "[OPENING_LINE]"',
        example_text=(
            "Write a short story that explores themes of redemption and hope. "
            'Begin with: "The old lighthouse had been dark for thirty years."'
        ),
    ),
    TemplateKey.ANALYSIS: Template(
        key=TemplateKey.ANALYSIS,
        display_name="Analysis & Comparison",
        template_shape=(
            "Analyze and compare [SUBJECT_A] and [SUBJECT_B] in terms of [CRITERIA]. "
            "Focus on [SPECIFIC_ASPECTS]."
        ),
        example_text=(
            "Analyze and compare renewable energy and fossil fuels in terms of environmental impact. "
            "Focus on long-term sustainability and economic implications."
        ),
    ),
    TemplateKey.STEP_BY_STEP: Template(
        key=TemplateKey.STEP_BY_STEP,
        display_name="Step-by-Step Guide",
        template_shape=(
            "Provide a step-by-step guide for [PROCESS]. Include [REQUIREMENTS] "
            "and address [POTENTIAL_CHALLENGES]."
        ),
        example_text=(
            "Provide a step-by-step guide for implementing sustainable practices in small businesses. "
            "Include cost considerations and address common implementation challenges."
        ),
    ),
}


def get_template(key: TemplateKey | str) -> Template:
    """Return the catalog entry for ``key``.

    Raises:
        ValueError: If key is not a known template key
    """
    try:
        template_key = TemplateKey(key)
    except ValueError:
        raise ValueError(f"Unknown template key: {key!r}") from None
    return TEMPLATES[template_key]
