"""PromptDraft: the mutable working state a composed prompt is derived from."""

import copy
from dataclasses import dataclass, field

from prompt_builder.domain.constraints import Constraint, Guideline
from prompt_builder.domain.templates import TemplateKey


@dataclass
class PromptDraft:
    """All composer inputs. Every field defaults to empty."""

    user_context: str = ""
    background_context: str = ""
    main_instruction: str = ""
    constraints: list[Constraint] = field(default_factory=list)
    guidelines: list[Guideline] = field(default_factory=list)
    template_key: TemplateKey | None = None

    def copy(self) -> "PromptDraft":
        """Deep copy, so the result shares no Constraint/Guideline objects."""
        return copy.deepcopy(self)
