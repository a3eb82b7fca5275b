"""Language-model provider adapters used by the generation relay.

Each adapter makes exactly one SDK call per ``complete()`` (SDK-level retries
are disabled) and converts SDK failures into GenerationFailedError. A fresh
client is built per call, so adapters hold no connection state.
"""

from typing import Protocol, runtime_checkable

import anthropic
import openai
from anthropic import APIConnectionError as AnthropicConnectionError
from anthropic import APIError as AnthropicAPIError
from anthropic import APIStatusError as AnthropicStatusError
from openai import APIConnectionError as OpenAIConnectionError
from openai import APIError as OpenAIAPIError
from openai import APIStatusError as OpenAIStatusError

from prompt_builder.core.config import Settings
from prompt_builder.core.exceptions import GenerationFailedError

ANTHROPIC = "anthropic"
OPENAI = "openai"


@runtime_checkable
class PromptProvider(Protocol):
    """One upstream language-model vendor."""

    name: str
    model: str

    async def complete(self, system: str, user: str) -> str:
        """Send a system/user message pair and return the generated text.

        Raises:
            GenerationFailedError: On any upstream failure
        """
        ...


class AnthropicProvider:
    """Anthropic Messages API adapter."""

    name = ANTHROPIC

    def __init__(self, api_key: str, model: str, max_tokens: int, temperature: float):
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def complete(self, system: str, user: str) -> str:
        client = anthropic.AsyncAnthropic(api_key=self.api_key, max_retries=0)
        try:
            response = await client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=system,
                messages=[{"role": "user", "content": user}],
            )
        except AnthropicStatusError as exc:
            raise GenerationFailedError(
                f"Anthropic error {exc.status_code}: {exc.message}",
                upstream_status=exc.status_code,
            ) from exc
        except AnthropicConnectionError as exc:
            raise GenerationFailedError(f"Could not reach Anthropic: {exc}") from exc
        except AnthropicAPIError as exc:
            raise GenerationFailedError(f"Anthropic error: {exc}") from exc

        # Non-text blocks (tool_use, thinking) carry no prompt text
        text = "".join(block.text for block in response.content if getattr(block, "type", None) == "text")
        return text.strip()


class OpenAIProvider:
    """OpenAI Chat Completions adapter."""

    name = OPENAI

    def __init__(self, api_key: str, model: str, max_tokens: int, temperature: float):
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def complete(self, system: str, user: str) -> str:
        client = openai.AsyncOpenAI(api_key=self.api_key, max_retries=0)
        try:
            response = await client.chat.completions.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
            )
        except OpenAIStatusError as exc:
            raise GenerationFailedError(
                f"OpenAI error {exc.status_code}: {exc.message}",
                upstream_status=exc.status_code,
            ) from exc
        except OpenAIConnectionError as exc:
            raise GenerationFailedError(f"Could not reach OpenAI: {exc}") from exc
        except OpenAIAPIError as exc:
            raise GenerationFailedError(f"OpenAI error: {exc}") from exc

        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()


def build_provider(settings: Settings) -> PromptProvider | None:
    """Return the configured provider, or None when its API key is not set."""
    if settings.llm_provider == OPENAI:
        if not settings.openai_api_key:
            return None
        return OpenAIProvider(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            max_tokens=settings.generation_max_tokens,
            temperature=settings.generation_temperature,
        )

    if not settings.anthropic_api_key:
        return None
    return AnthropicProvider(
        api_key=settings.anthropic_api_key,
        model=settings.anthropic_model,
        max_tokens=settings.generation_max_tokens,
        temperature=settings.generation_temperature,
    )
