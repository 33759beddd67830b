"""Integration test fixtures: a real service over mocked provider HTTP."""

from __future__ import annotations

from typing import AsyncIterator

import pytest
import respx

from netinsight.config import NetInsightSettings
from netinsight.resolution.base import HttpxFetcher, ResolutionConfig
from netinsight.resolution.registry import ProviderRegistry
from netinsight.services.network import NetworkService


# ============================================================================
# HTTP Fixtures
# ============================================================================


@pytest.fixture
def provider_http():
    """Mock router for every provider host.

    Each test registers the responses it needs; unregistered hosts are a
    test error.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def integration_settings() -> NetInsightSettings:
    return NetInsightSettings(
        _env_file=None,
        request_timeout=1.0,
        retry_base_delay=0.0,
        health_check_timeout=1.0,
        ipinfo_token="integration-token",
    )


@pytest.fixture
async def service(
    integration_settings: NetInsightSettings,
    sample_interfaces,
) -> AsyncIterator[NetworkService]:
    """Service wired from settings with the real httpx fetcher."""
    service = NetworkService(
        config=ResolutionConfig.from_settings(integration_settings),
        registry=ProviderRegistry.from_settings(integration_settings),
        fetcher=HttpxFetcher(user_agent=integration_settings.user_agent),
        interface_lister=lambda: sample_interfaces,
    )
    async with service:
        yield service
