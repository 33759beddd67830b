"""Tests for the httpx-backed fetcher."""

from __future__ import annotations

import httpx
import pytest

from netinsight.core.exceptions import ProviderFailure, ProviderTimeoutError
from netinsight.resolution.base import HttpxFetcher

URL = "https://api.example.test/ip"


class TestHttpxFetcher:
    """Tests for HttpxFetcher."""

    async def test_returns_body(self, respx_mock):
        respx_mock.get(URL).mock(return_value=httpx.Response(200, text="203.0.113.7\n"))

        async with HttpxFetcher() as fetcher:
            body = await fetcher.fetch(URL, timeout=1.0)

        assert body == b"203.0.113.7\n"

    async def test_sends_user_agent_and_extra_headers(self, respx_mock):
        route = respx_mock.get(URL).mock(return_value=httpx.Response(200, text="ok"))

        async with HttpxFetcher(user_agent="tests/1.0") as fetcher:
            await fetcher.fetch(URL, timeout=1.0, headers={"Authorization": "Bearer abc"})

        request = route.calls.last.request
        assert request.headers["User-Agent"] == "tests/1.0"
        assert request.headers["Authorization"] == "Bearer abc"

    async def test_http_error_status(self, respx_mock):
        respx_mock.get(URL).mock(return_value=httpx.Response(503))

        async with HttpxFetcher() as fetcher:
            with pytest.raises(ProviderFailure) as exc_info:
                await fetcher.fetch(URL, timeout=1.0)

        assert exc_info.value.status_code == 503
        assert exc_info.value.provider == "api.example.test"

    async def test_timeout(self, respx_mock):
        respx_mock.get(URL).mock(side_effect=httpx.ConnectTimeout)

        async with HttpxFetcher() as fetcher:
            with pytest.raises(ProviderTimeoutError):
                await fetcher.fetch(URL, timeout=1.0)

    async def test_connection_error(self, respx_mock):
        respx_mock.get(URL).mock(side_effect=httpx.ConnectError)

        async with HttpxFetcher() as fetcher:
            with pytest.raises(ProviderFailure) as exc_info:
                await fetcher.fetch(URL, timeout=1.0)

        assert not isinstance(exc_info.value, ProviderTimeoutError)
        assert exc_info.value.status_code is None

    async def test_malformed_url(self):
        async with HttpxFetcher() as fetcher:
            with pytest.raises(ProviderFailure) as exc_info:
                await fetcher.fetch("https://api.example.test:notaport/ip", timeout=1.0)

        assert exc_info.value.message.startswith("Invalid URL")
        assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)

    async def test_close_releases_client(self, respx_mock):
        respx_mock.get(URL).mock(return_value=httpx.Response(200, text="ok"))
        fetcher = HttpxFetcher()

        await fetcher.fetch(URL, timeout=1.0)
        await fetcher.close()

        assert fetcher._client is None

    async def test_close_without_client(self):
        await HttpxFetcher().close()
