"""Service test fixtures — FastAPI test client with the model client overridden.

Invariants:
    - No test ever reaches the real Anthropic API
    - mock_client is installed via dependency_overrides and cleared afterwards

Design Decisions:
    - httpx ASGITransport: exercises routing, validation and error handlers in-process
    - Fixture returns a setter so each test chooses its own response sequence
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.infrastructure.anthropic_client import get_completion_client
from app.main import app

from tests.services.mock_anthropic import MockAnthropicClient


@pytest.fixture
def use_mock_client():
    """Install a MockAnthropicClient with the given responses; returns it."""

    def _install(responses, configured=True):
        mock = MockAnthropicClient(responses, configured=configured)
        app.dependency_overrides[get_completion_client] = lambda: mock
        return mock

    yield _install
    app.dependency_overrides.clear()


@pytest.fixture
async def client():
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
