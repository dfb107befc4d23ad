"""
tests/conftest.py — Shared pytest fixtures
"""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from loguru import logger

from siteguard.core.auth import verify_api_key
from siteguard.core.rate_limiter import limiter as request_limiter
from siteguard.main import app
from siteguard.services.auth_rate_limit import (
    AuthRateLimiter,
    InMemoryRateLimitStore,
    set_auth_rate_limiter,
)


class FakeClock:
    """Manually advanced time source, in seconds."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> InMemoryRateLimitStore:
    return InMemoryRateLimitStore()


@pytest.fixture
def auth_limiter(store, clock) -> AuthRateLimiter:
    return AuthRateLimiter(store=store, clock=clock)


@pytest.fixture
def default_auth_limiter(auth_limiter):
    """Install an isolated limiter as the process default for the test."""
    set_auth_rate_limiter(auth_limiter)
    yield auth_limiter
    set_auth_rate_limiter(None)


@pytest.fixture
def client(default_auth_limiter) -> TestClient:
    """API client with the API key check bypassed and fresh request throttling."""
    request_limiter.reset()
    app.dependency_overrides[verify_api_key] = lambda: True
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def unauthenticated_client(default_auth_limiter) -> TestClient:
    request_limiter.reset()
    return TestClient(app)


@pytest.fixture
def log_messages():
    """Collect loguru output emitted during the test."""
    messages: list[str] = []
    handler_id = logger.add(messages.append, format="{message}", level="DEBUG")
    yield messages
    logger.remove(handler_id)
