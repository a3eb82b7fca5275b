"""PromptSession — owns one PromptDraft and everything derived from it.

Responsibilities:
- Named draft mutations (context fields, constraints, guidelines, templates)
- Pull-based recomputation: every mutation ends with recompute(), which
  rebuilds final_prompt and analysis from the draft
- In-memory saved prompts (append/remove only, snapshots never alias the draft)
- Main-instruction generation through GeneratorRelay, with the local demo
  fallback after a relay failure
"""

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime

import structlog

from prompt_builder.core.exceptions import GenerationFailedError
from prompt_builder.domain.analyzer import AnalysisResult, analyze
from prompt_builder.domain.composer import compose
from prompt_builder.domain.constraints import Constraint, ConstraintKind, Guideline, new_id
from prompt_builder.domain.draft import PromptDraft
from prompt_builder.domain.fallback import build_demo_prompt
from prompt_builder.domain.templates import TemplateKey, get_template
from prompt_builder.services.generation_relay import GeneratorRelay

logger = structlog.get_logger(__name__)

EXPORT_FILENAME = "prompt.txt"
FALLBACK_DELAY_SECONDS: float = 3.0


@dataclass(frozen=True)
class SavedPrompt:
    """Frozen snapshot of a composed prompt."""

    name: str
    content: str
    template_key: TemplateKey | None = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class PromptSession:
    """Single-owner controller for a draft, its composition and saved prompts."""

    def __init__(self, draft: PromptDraft | None = None):
        self.draft = draft or PromptDraft()
        self.final_prompt: str = ""
        self.analysis: AnalysisResult | None = None
        self.last_error: str | None = None
        self._saved: list[SavedPrompt] = []
        self.recompute()

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------

    def recompute(self) -> str:
        """Rebuild final_prompt and analysis from the current draft."""
        self.final_prompt = compose(self.draft)
        self.analysis = analyze(self.final_prompt)
        return self.final_prompt

    # ------------------------------------------------------------------
    # Text fields
    # ------------------------------------------------------------------

    def set_user_context(self, text: str) -> str:
        self.draft.user_context = text
        return self.recompute()

    def set_background_context(self, text: str) -> str:
        self.draft.background_context = text
        return self.recompute()

    def set_main_instruction(self, text: str) -> str:
        self.draft.main_instruction = text
        return self.recompute()

    def load_template(self, key: TemplateKey | str) -> str:
        """Use the template's example as the main instruction.

        Raises:
            ValueError: If key is not a known template key
        """
        template = get_template(key)
        self.draft.template_key = template.key
        self.draft.main_instruction = template.example_text
        return self.recompute()

    def clear_all(self) -> str:
        """Reset the draft. Saved prompts are kept."""
        self.draft = PromptDraft()
        self.last_error = None
        return self.recompute()

    # ------------------------------------------------------------------
    # Constraints and guidelines
    # ------------------------------------------------------------------

    def add_constraint(self, kind: ConstraintKind | str, value: str = "") -> Constraint:
        """Append a constraint.

        Raises:
            UnknownConstraintKindError: If kind is not a ConstraintKind
        """
        constraint = Constraint(kind=kind, value=value)
        self.draft.constraints.append(constraint)
        self.recompute()
        return constraint

    def update_constraint(self, constraint_id: str, value: str) -> str:
        self._find(self.draft.constraints, constraint_id).value = value
        return self.recompute()

    def remove_constraint(self, constraint_id: str) -> str:
        self.draft.constraints.remove(self._find(self.draft.constraints, constraint_id))
        return self.recompute()

    def add_guideline(self, text: str = "") -> Guideline:
        guideline = Guideline(text=text)
        self.draft.guidelines.append(guideline)
        self.recompute()
        return guideline

    def update_guideline(self, guideline_id: str, text: str) -> str:
        self._find(self.draft.guidelines, guideline_id).text = text
        return self.recompute()

    def remove_guideline(self, guideline_id: str) -> str:
        self.draft.guidelines.remove(self._find(self.draft.guidelines, guideline_id))
        return self.recompute()

    @staticmethod
    def _find(entries, entry_id: str):
        for entry in entries:
            if entry.id == entry_id:
                return entry
        raise KeyError(entry_id)

    # ------------------------------------------------------------------
    # Saved prompts
    # ------------------------------------------------------------------

    @property
    def saved_prompts(self) -> tuple[SavedPrompt, ...]:
        return tuple(self._saved)

    def save_prompt(self, name: str | None = None) -> SavedPrompt | None:
        """Snapshot the current composed prompt. Returns None if it is blank."""
        if not self.final_prompt.strip():
            return None
        saved = SavedPrompt(
            name=name or f"Prompt {len(self._saved) + 1}",
            content=self.final_prompt,
            template_key=self.draft.template_key,
        )
        self._saved.append(saved)
        logger.debug("prompt_saved", prompt_id=saved.id, name=saved.name)
        return saved

    def delete_saved_prompt(self, prompt_id: str) -> None:
        """Remove a saved prompt.

        Raises:
            KeyError: If no saved prompt has that id
        """
        self._saved.remove(self._find(self._saved, prompt_id))

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_text(self) -> str:
        """Composed prompt exactly as rendered, for clipboard or file download."""
        return self.final_prompt

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def generate_main_instruction(
        self,
        relay: GeneratorRelay,
        description: str,
        fallback_delay: float = FALLBACK_DELAY_SECONDS,
    ) -> str:
        """Fill the main instruction from the relay.

        Uses the draft's user and background context as the relay's context
        fields. When the relay raises GenerationFailedError, last_error is set,
        and after ``fallback_delay`` seconds a local demo prompt is used
        instead.

        Returns:
            The new main instruction

        Raises:
            PromptValidationError: If description is blank
        """
        self.last_error = None
        try:
            generated = await relay.request_generation(
                description,
                user_context=self.draft.user_context,
                additional_context=self.draft.background_context,
            )
        except GenerationFailedError as exc:
            self.last_error = exc.message
            logger.info("demo_fallback_scheduled", delay_seconds=fallback_delay, error=exc.message)
            await asyncio.sleep(fallback_delay)
            generated = build_demo_prompt(description)

        self.set_main_instruction(generated)
        return generated
