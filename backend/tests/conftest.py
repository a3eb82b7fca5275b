"""Shared test fixtures for all test groups."""

import asyncio

import pytest

from prompt_builder.core.config import Settings
from prompt_builder.core.exceptions import GenerationFailedError
from prompt_builder.services.generation_relay import GeneratorRelay
from prompt_builder.services.prompt_session import PromptSession


class ProviderFake:
    """Deterministic PromptProvider test double.

    Scenarios:
    - happy_path: returns ``text``
    - upstream_error: raises GenerationFailedError with upstream status 500
    - empty_response: returns whitespace only
    - slow: sleeps ``delay`` seconds before answering
    """

    VALID_SCENARIOS = {"happy_path", "upstream_error", "empty_response", "slow"}

    name = "fake"
    model = "fake-model"

    def __init__(self, scenario: str = "happy_path", text: str = "Generated prompt text.", delay: float = 1.0):
        if scenario not in self.VALID_SCENARIOS:
            raise ValueError(f"Unknown scenario: {scenario}")
        self.scenario = scenario
        self.text = text
        self.delay = delay
        self.calls: list[tuple[str, str]] = []

    async def complete(self, system: str, user: str) -> str:
        self.calls.append((system, user))
        if self.scenario == "upstream_error":
            raise GenerationFailedError("fake error 500: upstream exploded", upstream_status=500)
        if self.scenario == "empty_response":
            return "   "
        if self.scenario == "slow":
            await asyncio.sleep(self.delay)
        return self.text


def make_settings(**overrides) -> Settings:
    """Settings isolated from the process environment's API keys and .env."""
    values = {
        "anthropic_api_key": "",
        "openai_api_key": "",
        "llm_provider": "anthropic",
        "generation_timeout_seconds": 5.0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def no_key_settings():
    return make_settings()


@pytest.fixture
def keyless_relay(no_key_settings):
    """Relay with no provider credentials -- always takes the fallback branch."""
    return GeneratorRelay(settings=no_key_settings)


@pytest.fixture
def provider_fake():
    return ProviderFake(scenario="happy_path")


@pytest.fixture
def provider_fake_failing():
    return ProviderFake(scenario="upstream_error")


@pytest.fixture
def session():
    """Fresh PromptSession with an empty draft."""
    return PromptSession()


@pytest.fixture
def provider_factory():
    """Build ProviderFake instances with a chosen scenario."""
    return ProviderFake


@pytest.fixture
def settings_factory():
    """Build isolated Settings with overrides."""
    return make_settings
