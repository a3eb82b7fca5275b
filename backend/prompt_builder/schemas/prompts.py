"""Pydantic schemas for the prompt builder HTTP API.

JSON bodies use camelCase keys (the browser client's convention); models are
populated by field name in Python. Defines:
- Generation relay request/response and the shared error body
- Compose/analyze request and response
- Template and constraint-kind catalog entries
"""

from pydantic import BaseModel, ConfigDict, Field

from prompt_builder.domain.analyzer import AnalysisResult
from prompt_builder.domain.constraints import Constraint, ConstraintKind, Guideline
from prompt_builder.domain.draft import PromptDraft
from prompt_builder.domain.templates import Template


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ==================== GENERATION ====================


class GeneratePromptRequest(CamelModel):
    """Request body for POST /api/generate-prompt."""

    description: str = Field("", description="What the generated prompt should achieve")
    user_context: str = Field("", alias="userContext", description="Who the user is")
    additional_context: str = Field("", alias="additionalContext", description="Extra background")


class GeneratePromptResponse(BaseModel):
    prompt: str = Field(..., description="Generated, ready-to-use prompt")


class ErrorResponse(BaseModel):
    """Body of every >=400 response."""

    error: str = Field(..., description="Machine-readable error code")
    message: str | None = Field(None, description="Human-readable explanation")
    debug_id: str | None = Field(None, description="Server-side log reference")


# ==================== COMPOSE / ANALYZE ====================


class ConstraintInput(BaseModel):
    kind: str = Field(..., description="length | format | audience | style | scope | ethical")
    value: str = ""


class ComposeRequest(CamelModel):
    """A full draft, composed and analyzed in one call."""

    user_context: str = Field("", alias="userContext")
    background_context: str = Field("", alias="backgroundContext")
    main_instruction: str = Field("", alias="mainInstruction")
    constraints: list[ConstraintInput] = Field(default_factory=list)
    guidelines: list[str] = Field(default_factory=list)

    def to_draft(self) -> PromptDraft:
        """Build a PromptDraft.

        Raises:
            UnknownConstraintKindError: If any constraint kind is unknown
        """
        return PromptDraft(
            user_context=self.user_context,
            background_context=self.background_context,
            main_instruction=self.main_instruction,
            constraints=[Constraint(kind=c.kind, value=c.value) for c in self.constraints],
            guidelines=[Guideline(text=text) for text in self.guidelines],
        )


class AnalysisSchema(BaseModel):
    strengths: list[str]
    issues: list[str]

    @classmethod
    def from_result(cls, result: AnalysisResult | None) -> "AnalysisSchema | None":
        if result is None:
            return None
        return cls(strengths=list(result.strengths), issues=list(result.issues))


class ComposeResponse(BaseModel):
    prompt: str
    analysis: AnalysisSchema | None


class AnalyzeRequest(BaseModel):
    prompt: str = ""


class AnalyzeResponse(BaseModel):
    analysis: AnalysisSchema | None


# ==================== CATALOGS ====================


class TemplateSchema(CamelModel):
    key: str
    display_name: str = Field(..., alias="displayName")
    template_shape: str = Field(..., alias="templateShape")
    example_text: str = Field(..., alias="exampleText")

    @classmethod
    def from_template(cls, template: Template) -> "TemplateSchema":
        return cls(
            key=template.key.value,
            display_name=template.display_name,
            template_shape=template.template_shape,
            example_text=template.example_text,
        )


class ConstraintKindSchema(BaseModel):
    kind: str
    label: str
    placeholder: str

    @classmethod
    def from_kind(cls, kind: ConstraintKind) -> "ConstraintKindSchema":
        return cls(kind=kind.value, label=kind.label, placeholder=kind.placeholder)
