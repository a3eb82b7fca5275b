"""API-specific test fixtures."""

import pytest
from fastapi.testclient import TestClient

from prompt_builder.api.routes.generation import get_relay
from prompt_builder.main import create_app
from prompt_builder.middleware import rate_limit
from prompt_builder.middleware.rate_limit import SlidingWindowRateLimiter
from prompt_builder.services.generation_relay import GeneratorRelay


@pytest.fixture(autouse=True)
def fresh_rate_limiter(monkeypatch):
    """Generous limiter per test so request counts never leak between tests."""
    limiter = SlidingWindowRateLimiter(max_requests=1000, window_seconds=60)
    monkeypatch.setattr(rate_limit, "_limiter", limiter)
    return limiter


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client_factory(app):
    """Build a TestClient whose relay is the given GeneratorRelay."""

    def _make(relay: GeneratorRelay | None = None, **client_kwargs) -> TestClient:
        if relay is not None:
            app.dependency_overrides[get_relay] = lambda: relay
        return TestClient(app, **client_kwargs)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def api_client(client_factory, keyless_relay):
    """Client whose relay has no credentials configured."""
    return client_factory(keyless_relay)
