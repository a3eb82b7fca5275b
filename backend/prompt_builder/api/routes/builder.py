"""Compose, analyze and catalog endpoints -- thin wrappers over the pure domain functions."""

from fastapi import APIRouter

from prompt_builder.domain.analyzer import analyze
from prompt_builder.domain.composer import compose
from prompt_builder.domain.constraints import ConstraintKind
from prompt_builder.domain.templates import TEMPLATES
from prompt_builder.schemas.prompts import (
    AnalysisSchema,
    AnalyzeRequest,
    AnalyzeResponse,
    ComposeRequest,
    ComposeResponse,
    ConstraintKindSchema,
    ErrorResponse,
    TemplateSchema,
)

router = APIRouter()


@router.post("/compose", response_model=ComposeResponse, responses={422: {"model": ErrorResponse}})
async def compose_prompt(request: ComposeRequest):
    """Compose a draft into the final prompt and analyze it.

    Raises:
        UnknownConstraintKindError (422): If a constraint kind is unknown
    """
    prompt = compose(request.to_draft())
    return ComposeResponse(prompt=prompt, analysis=AnalysisSchema.from_result(analyze(prompt)))


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_prompt(request: AnalyzeRequest):
    """Analyze an already composed prompt. analysis is null for blank input."""
    return AnalyzeResponse(analysis=AnalysisSchema.from_result(analyze(request.prompt)))


@router.get("/templates", response_model=list[TemplateSchema])
async def list_templates():
    return [TemplateSchema.from_template(t) for t in TEMPLATES.values()]


@router.get("/constraint-kinds", response_model=list[ConstraintKindSchema])
async def list_constraint_kinds():
    return [ConstraintKindSchema.from_kind(kind) for kind in ConstraintKind]
