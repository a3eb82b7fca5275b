"""Tests for PromptSession.

Coverage:
- Every mutation recomputes final_prompt and analysis
- Constraint/guideline add, update, remove by id
- Template loading and clear_all
- Saved prompt snapshots (naming, immutability, no aliasing, delete)
- Main-instruction generation with the demo fallback on relay failure
"""

import dataclasses
from unittest.mock import AsyncMock, patch

import pytest

from prompt_builder.core.exceptions import PromptValidationError, UnknownConstraintKindError
from prompt_builder.domain.analyzer import STRENGTH_ACTION_VERBS
from prompt_builder.domain.constraints import ConstraintKind
from prompt_builder.domain.draft import PromptDraft
from prompt_builder.domain.fallback import build_demo_prompt
from prompt_builder.domain.templates import TEMPLATES, TemplateKey
from prompt_builder.services.generation_relay import GeneratorRelay
from prompt_builder.services.prompt_session import EXPORT_FILENAME, PromptSession

pytestmark = pytest.mark.unit


class TestRecompute:
    def test_new_session_is_empty(self, session):
        assert session.final_prompt == ""
        assert session.analysis is None

    def test_initial_draft_is_composed(self):
        session = PromptSession(PromptDraft(main_instruction="Explain tides"))
        assert session.final_prompt == "Explain tides"
        assert STRENGTH_ACTION_VERBS in session.analysis.strengths

    def test_text_setters_recompute(self, session):
        session.set_user_context("I am a teacher")
        session.set_background_context("Grade 4")
        result = session.set_main_instruction("Describe fractions")
        assert result == session.final_prompt
        assert session.final_prompt == "User context: I am a teacher\n\nContext: Grade 4\n\nDescribe fractions"
        assert session.analysis is not None

    def test_clearing_last_field_drops_analysis(self, session):
        session.set_main_instruction("Explain tides")
        session.set_main_instruction("   ")
        assert session.final_prompt == ""
        assert session.analysis is None


class TestConstraintsAndGuidelines:
    def test_add_empty_constraint_is_kept_but_not_rendered(self, session):
        session.set_main_instruction("Summarize the report.")
        constraint = session.add_constraint(ConstraintKind.LENGTH)
        assert session.draft.constraints == [constraint]
        assert "Constraints:" not in session.final_prompt

    def test_update_constraint_renders_it(self, session):
        constraint = session.add_constraint("length")
        session.update_constraint(constraint.id, "500 words maximum")
        assert session.final_prompt == "Constraints:\n- Word/Character Limit: 500 words maximum"

    def test_remove_constraint(self, session):
        kept = session.add_constraint("audience", "experts")
        dropped = session.add_constraint("style", "casual")
        session.remove_constraint(dropped.id)
        assert session.draft.constraints == [kept]
        assert "casual" not in session.final_prompt

    def test_add_unknown_kind_fails_fast(self, session):
        with pytest.raises(UnknownConstraintKindError):
            session.add_constraint("tone", "friendly")
        assert session.draft.constraints == []

    def test_guideline_lifecycle(self, session):
        first = session.add_guideline("Cite sources")
        second = session.add_guideline()
        session.update_guideline(second.id, "Use plain language")
        assert session.final_prompt.endswith("- Cite sources\n- Use plain language")
        session.remove_guideline(first.id)
        assert session.final_prompt == "Additional Guidelines:\n- Use plain language"

    def test_unknown_ids_raise_key_error(self, session):
        with pytest.raises(KeyError):
            session.update_constraint("missing", "x")
        with pytest.raises(KeyError):
            session.remove_guideline("missing")


class TestTemplates:
    def test_load_template_sets_main_instruction(self, session):
        session.load_template("analysis")
        assert session.draft.template_key is TemplateKey.ANALYSIS
        assert session.final_prompt == TEMPLATES[TemplateKey.ANALYSIS].example_text

    def test_load_unknown_template(self, session):
        with pytest.raises(ValueError):
            session.load_template("sonnet")

    def test_clear_all_resets_draft_but_keeps_saved(self, session):
        session.load_template(TemplateKey.CONTEXTUAL)
        session.add_guideline("Be brief")
        session.save_prompt()
        session.clear_all()
        assert session.draft == PromptDraft()
        assert session.final_prompt == ""
        assert session.analysis is None
        assert len(session.saved_prompts) == 1


class TestSavedPrompts:
    def test_save_blank_prompt_is_noop(self, session):
        assert session.save_prompt() is None
        assert session.saved_prompts == ()

    def test_default_names_are_numbered(self, session):
        session.set_main_instruction("Explain tides")
        first = session.save_prompt()
        second = session.save_prompt()
        named = session.save_prompt("Tides v3")
        assert [p.name for p in (first, second, named)] == ["Prompt 1", "Prompt 2", "Tides v3"]

    def test_snapshot_does_not_follow_draft(self, session):
        session.set_main_instruction("Explain tides")
        guideline = session.add_guideline("Use diagrams")
        saved = session.save_prompt()

        session.update_guideline(guideline.id, "No diagrams")
        session.set_main_instruction("Explain waves")

        assert saved.content == "Explain tides\n\nAdditional Guidelines:\n- Use diagrams"
        assert session.saved_prompts[0].content == saved.content

    def test_snapshot_records_template_key(self, session):
        session.load_template("step-by-step")
        saved = session.save_prompt()
        assert saved.template_key is TemplateKey.STEP_BY_STEP
        assert saved.created_at.tzinfo is not None

    def test_saved_prompt_is_immutable(self, session):
        session.set_main_instruction("Explain tides")
        saved = session.save_prompt()
        with pytest.raises(dataclasses.FrozenInstanceError):
            saved.content = "edited"

    def test_delete_saved_prompt(self, session):
        session.set_main_instruction("Explain tides")
        first = session.save_prompt()
        second = session.save_prompt()
        session.delete_saved_prompt(first.id)
        assert session.saved_prompts == (second,)
        with pytest.raises(KeyError):
            session.delete_saved_prompt(first.id)


class TestExport:
    def test_export_is_composed_text_unchanged(self, session):
        session.set_user_context("  me ")
        session.set_main_instruction("Explain tides")
        assert session.export_text() == session.final_prompt
        assert EXPORT_FILENAME == "prompt.txt"


class TestGenerateMainInstruction:
    async def test_success_sets_main_instruction(self, session, settings_factory, provider_fake):
        relay = GeneratorRelay(settings=settings_factory(), provider=provider_fake)
        session.set_user_context("I am a teacher")
        session.set_background_context("Grade 4")

        result = await session.generate_main_instruction(relay, "teach fractions")

        assert result == "Generated prompt text."
        assert session.draft.main_instruction == "Generated prompt text."
        assert session.final_prompt.endswith("Generated prompt text.")
        _, user = provider_fake.calls[0]
        assert "User context: I am a teacher" in user
        assert "Additional context: Grade 4" in user

    async def test_keyless_relay_uses_deterministic_fallback(self, session, keyless_relay):
        result = await session.generate_main_instruction(keyless_relay, "Plan a trip")
        assert "Goal: Plan a trip" in result
        assert session.last_error is None

    async def test_failure_falls_back_to_demo_prompt(self, session, settings_factory, provider_fake_failing):
        relay = GeneratorRelay(settings=settings_factory(), provider=provider_fake_failing)

        with patch("prompt_builder.services.prompt_session.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            result = await session.generate_main_instruction(relay, "Please analyze customer churn", fallback_delay=3.0)

        mock_sleep.assert_awaited_once_with(3.0)
        assert result == build_demo_prompt("Please analyze customer churn")
        assert session.draft.main_instruction == result
        assert "upstream exploded" in session.last_error
        assert len(provider_fake_failing.calls) == 1

    async def test_validation_error_propagates(self, session, keyless_relay):
        session.set_main_instruction("keep me")
        with pytest.raises(PromptValidationError):
            await session.generate_main_instruction(keyless_relay, "   ")
        assert session.draft.main_instruction == "keep me"
