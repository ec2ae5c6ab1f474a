"""
Pytest Configuration and Fixtures
"""

import pytest
from fastapi.testclient import TestClient

from api.deps import get_provider_manager
from api.main import app
from api.rate_limiter import limiter
from tests.fakes import FakeClock, FakeProvider, make_manager, make_settings


@pytest.fixture(autouse=True)
def disable_inbound_rate_limit():
    """Route tests hit the same endpoints many times per process."""
    previous = limiter.enabled
    limiter.enabled = False
    yield
    limiter.enabled = previous


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def fake_providers():
    return {
        "openai": FakeProvider("openai"),
        "claude": FakeProvider("claude"),
        "gemini": FakeProvider("gemini"),
    }


@pytest.fixture
def route_manager(fake_providers):
    """Manager for route tests: no cooldowns, no consistency threshold."""
    settings = make_settings(success_cooldown_seconds=0.0, failure_cooldown_seconds=0.0)
    return make_manager(fake_providers, settings=settings, consistency_threshold=0.0)


@pytest.fixture
def client(route_manager):
    app.dependency_overrides[get_provider_manager] = lambda: route_manager
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
