"""Generation relay endpoint."""

from fastapi import APIRouter, Depends

from prompt_builder.middleware.rate_limit import enforce_rate_limit
from prompt_builder.schemas.prompts import ErrorResponse, GeneratePromptRequest, GeneratePromptResponse
from prompt_builder.services.generation_relay import GeneratorRelay

router = APIRouter()


def get_relay() -> GeneratorRelay:
    """Dependency that provides the relay. Override in tests via app.dependency_overrides."""
    return GeneratorRelay()


@router.post(
    "/generate-prompt",
    response_model=GeneratePromptResponse,
    dependencies=[Depends(enforce_rate_limit)],
    responses={
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def generate_prompt(
    request: GeneratePromptRequest,
    relay: GeneratorRelay = Depends(get_relay),
):
    """Draft a main instruction from a free-text description.

    Without provider credentials the response is a deterministic fallback
    prompt, still with status 200.

    Raises:
        PromptValidationError (400): If description is blank
        RateLimitExceededError (429): If the caller's IP is over its ceiling
        GenerationFailedError (502): If the upstream provider call fails
    """
    prompt = await relay.request_generation(
        request.description,
        user_context=request.user_context,
        additional_context=request.additional_context,
    )
    return GeneratePromptResponse(prompt=prompt)
