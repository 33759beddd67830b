"""Unit test fixtures with HTTP and clock fakes."""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import pytest
import respx

from netinsight.core.exceptions import ProviderFailure
from netinsight.resolution.base import ResolutionConfig

# ============================================================================
# HTTP Mocking Fixtures
# ============================================================================


@pytest.fixture
def respx_mock():
    """Provide a respx mock router for HTTP mocking.

    Use this when you need fine-grained control over mocked responses.
    The mock is automatically started and stopped by respx.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


Outcome = bytes | BaseException | Callable[[], Awaitable[bytes]]


class FakeFetcher:
    """
    In-memory fetch capability.

    Each URL maps to a body, an exception to raise, or an async callable
    producing the body. A list of outcomes is consumed one call at a time.
    Unknown URLs fail like an unreachable host.
    """

    def __init__(self, responses: Mapping[str, Outcome | list[Outcome]] | None = None) -> None:
        self.responses: dict[str, Any] = dict(responses or {})
        self.calls: list[str] = []
        self.timeouts: list[float] = []
        self.headers: list[dict[str, str]] = []
        self.closed = False

    async def fetch(
        self,
        url: str,
        timeout: float,
        headers: Mapping[str, str] | None = None,
    ) -> bytes:
        self.calls.append(url)
        self.timeouts.append(timeout)
        self.headers.append(dict(headers or {}))

        outcome = self.responses.get(url)
        if isinstance(outcome, list):
            outcome = outcome.pop(0) if outcome else None
        if outcome is None:
            raise ProviderFailure(message="Connection refused", provider=url)
        if isinstance(outcome, BaseException):
            raise outcome
        if callable(outcome):
            return await outcome()
        return outcome

    def count(self, url: str) -> int:
        return self.calls.count(url)

    async def close(self) -> None:
        self.closed = True


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_fetcher() -> Callable[..., FakeFetcher]:
    """Factory fixture building a FakeFetcher from a URL -> outcome map."""

    def _build(responses: Mapping[str, Any] | None = None) -> FakeFetcher:
        return FakeFetcher(responses)

    return _build


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def as_json() -> Callable[[Any], bytes]:
    """Encode a payload the way a provider would send it."""

    def _encode(data: Any) -> bytes:
        return json.dumps(data).encode()

    return _encode


# ============================================================================
# Resolution Configuration Fixtures
# ============================================================================


@pytest.fixture
def resolution_config() -> ResolutionConfig:
    """Create a resolution config for testing."""
    return ResolutionConfig(
        timeout=1.0,
        max_retries=3,
        retry_base_delay=0.0,
        cache_enabled=True,
        cache_ttl=300.0,
        health_check_timeout=1.0,
    )


@pytest.fixture
def uncached_config() -> ResolutionConfig:
    """Create a resolution config with caching disabled."""
    return ResolutionConfig(timeout=1.0, cache_enabled=False)
