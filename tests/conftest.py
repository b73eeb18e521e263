"""
Shared fixtures for the Dreamscribe test suite.

Provides a controllable clock for the pacer and builders for provider
responses so tests never touch the network.
"""

from typing import Any, Dict, Optional
from unittest.mock import AsyncMock

import pytest

from dreamscribe.api.base_client import HTTPResponse
from dreamscribe.api.gemini_client import GeminiClient
from dreamscribe.api.rate_limiter import RequestPacer


class FakeClock:
    """Monotonic clock whose sleep advances time instantly."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def pacer(fake_clock) -> RequestPacer:
    """Pacer with a 500 ms spacing driven by the fake clock."""
    return RequestPacer(min_interval=0.5, clock=fake_clock, sleep=fake_clock.sleep)


@pytest.fixture
def backoff_sleep() -> AsyncMock:
    """Records backoff waits without sleeping."""
    return AsyncMock()


@pytest.fixture
def ok_response():
    """Build a well-formed 200 generateContent response."""
    def _build(text: str) -> HTTPResponse:
        return HTTPResponse(
            status=200,
            headers={"Content-Type": "application/json"},
            data={"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}
        )
    return _build


@pytest.fixture
def error_response():
    """Build a non-2xx response."""
    def _build(
        status: int,
        headers: Optional[Dict[str, str]] = None,
        data: Any = None
    ) -> HTTPResponse:
        return HTTPResponse(
            status=status,
            headers=headers or {},
            data=data if data is not None else {"error": {"code": status, "message": "boom"}}
        )
    return _build


@pytest.fixture
def gemini_client(pacer, backoff_sleep) -> GeminiClient:
    """Gemini client whose transport is replaced with an AsyncMock."""
    client = GeminiClient(api_key="test-key", rate_limiter=pacer, sleep=backoff_sleep)
    client._send_request = AsyncMock()
    return client
