"""GeneratorRelay — one upstream call that drafts a main instruction.

Architecture:
- Validates the description locally; an empty one never reaches the network
- No API key for the selected provider: returns a deterministic fallback
  prompt built from the trimmed inputs (a defined branch, not an error).
  Blank optional fields render as "(none provided)"
- With a key: exactly one provider call, bounded by asyncio.wait_for
- Any upstream failure, timeout or empty text raises GenerationFailedError;
  there are no retries
"""

import asyncio

import structlog

from prompt_builder.core.config import Settings, get_settings
from prompt_builder.core.exceptions import GenerationFailedError, PromptValidationError
from prompt_builder.services.llm_providers import PromptProvider, build_provider

logger = structlog.get_logger(__name__)

NOT_PROVIDED = "(none provided)"

_SYSTEM_PROMPT: str = (
    "You create excellent, safe, well-structured prompts. "
    "Return exactly ONE ready-to-use prompt for a language model. "
    "Do NOT add a preamble, explanation, headings about the prompt, or any commentary."
)


def build_generation_messages(
    description: str, user_context: str, additional_context: str
) -> tuple[str, str]:
    """Build the system prompt and the single user message for the provider.

    Returns:
        Tuple of (system_prompt, user_content)
    """
    user_content = (
        f"Description: {description}\n"
        f"User context: {user_context}\n"
        f"Additional context: {additional_context}\n\n"
        "Write one optimized prompt only."
    )
    return _SYSTEM_PROMPT, user_content


def build_fallback_prompt(description: str, user_context: str, additional_context: str) -> str:
    """Deterministic prompt used when no provider credential is configured.

    Inputs are embedded as given (callers pass them trimmed); a blank
    user_context or additional_context is replaced by NOT_PROVIDED.
    """
    return (
        "Write a single, ready-to-use prompt for a language model based on the details below.\n\n"
        f"Goal: {description}\n"
        f"User context: {user_context or NOT_PROVIDED}\n"
        f"Extra context: {additional_context or NOT_PROVIDED}\n\n"
        "The prompt should state the task clearly, reflect the user context, and ask for a "
        "well-structured answer with clear sections, numbered steps, and concrete examples. "
        "Return only the prompt."
    )


class GeneratorRelay:
    """Mediates a single outbound generation request.

    Public API:
        request_generation(description, user_context, additional_context) -> str

    Raises PromptValidationError for an empty description and
    GenerationFailedError when a configured provider fails.
    """

    def __init__(self, settings: Settings | None = None, provider: PromptProvider | None = None):
        """
        Args:
            settings: Settings to read provider config from (defaults to get_settings())
            provider: Explicit provider, bypassing credential lookup (tests, custom vendors)
        """
        self.settings = settings or get_settings()
        self._provider = provider

    def resolve_provider(self) -> PromptProvider | None:
        if self._provider is not None:
            return self._provider
        return build_provider(self.settings)

    async def request_generation(
        self,
        description: str,
        user_context: str = "",
        additional_context: str = "",
    ) -> str:
        """Return a generated prompt for ``description``.

        Args:
            description: What the prompt should achieve (required)
            user_context: Who the user is, optional
            additional_context: Extra background, optional

        Returns:
            The generated (or fallback) prompt text, stripped

        Raises:
            PromptValidationError: If description is blank
            GenerationFailedError: If the configured provider call fails
        """
        description = (description or "").strip()
        user_context = (user_context or "").strip()
        additional_context = (additional_context or "").strip()

        if not description:
            raise PromptValidationError("A description is required to generate a prompt.")

        provider = self.resolve_provider()
        if provider is None:
            logger.info(
                "generation_fallback_used",
                reason="no_credentials",
                provider=self.settings.llm_provider,
            )
            return build_fallback_prompt(description, user_context, additional_context)

        system, user_content = build_generation_messages(description, user_context, additional_context)
        timeout = self.settings.generation_timeout_seconds

        logger.info("generation_requested", provider=provider.name, model=provider.model)
        try:
            text = await asyncio.wait_for(provider.complete(system, user_content), timeout=timeout)
        except TimeoutError as exc:
            logger.warning("generation_failed", provider=provider.name, error_type="TimeoutError")
            raise GenerationFailedError(
                f"{provider.name} did not respond within {timeout:g} seconds."
            ) from exc
        except GenerationFailedError as exc:
            logger.warning(
                "generation_failed",
                provider=provider.name,
                upstream_status=exc.upstream_status,
                error=exc.message,
            )
            raise

        text = (text or "").strip()
        if not text:
            logger.warning("generation_failed", provider=provider.name, reason="empty_response")
            raise GenerationFailedError(f"{provider.name} returned an empty prompt.")

        logger.info("generation_succeeded", provider=provider.name, length=len(text))
        return text
