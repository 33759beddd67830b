"""Provider base class, resolution config, and the HTTP fetch capability."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, ClassVar, Generic, Protocol, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, Field

from netinsight.core.exceptions import (
    InvalidParameterError,
    ProviderFailure,
    ProviderTimeoutError,
)

if TYPE_CHECKING:
    from netinsight.config import NetInsightSettings

ValueT = TypeVar("ValueT")


class ResolutionConfig(BaseModel):
    """
    Immutable configuration shared by the resolvers of one service.

    Changing configuration means building new resolvers (and caches) from a
    new instance; in-flight lookups keep the one they started with.
    """

    model_config = ConfigDict(frozen=True)

    timeout: float = Field(default=10.0, gt=0, description="Per-attempt timeout in seconds")
    max_retries: int = Field(
        default=3,
        ge=1,
        description="Attempts per provider, for providers that opt into retrying",
    )
    retry_base_delay: float = Field(default=1.0, ge=0, description="First backoff delay in seconds")
    cache_enabled: bool = True
    cache_ttl: float = Field(default=300.0, ge=0, description="Cache TTL in seconds")
    interfaces_cache_ttl: float = Field(default=60.0, ge=0)
    health_check_timeout: float = Field(default=5.0, gt=0)

    @classmethod
    def from_settings(cls, settings: "NetInsightSettings") -> "ResolutionConfig":
        return cls(
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
            retry_base_delay=settings.retry_base_delay,
            cache_enabled=settings.cache_enabled,
            cache_ttl=settings.cache_ttl,
            interfaces_cache_ttl=settings.interfaces_cache_ttl,
            health_check_timeout=settings.health_check_timeout,
        )


class Fetcher(Protocol):
    """Fetch a URL and return the raw response body."""

    async def fetch(
        self,
        url: str,
        timeout: float,
        headers: Mapping[str, str] | None = None,
    ) -> bytes:
        """Raise ProviderFailure (or ProviderTimeoutError) on any failure."""
        ...

    async def close(self) -> None:
        ...


class HttpxFetcher:
    """Fetcher backed by a shared httpx.AsyncClient."""

    def __init__(
        self,
        user_agent: str = "netinsight/0.1",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._user_agent = user_agent
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers=self._get_default_headers(),
                follow_redirects=True,
            )
        return self._client

    def _get_default_headers(self) -> dict[str, str]:
        return {
            "User-Agent": self._user_agent,
            "Accept": "application/json, text/plain;q=0.9",
        }

    async def fetch(
        self,
        url: str,
        timeout: float,
        headers: Mapping[str, str] | None = None,
    ) -> bytes:
        source = url
        try:
            source = httpx.URL(url).host or url
            client = self._get_client()
            response = await client.get(
                url,
                headers=dict(headers or {}),
                timeout=httpx.Timeout(timeout),
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(
                message=f"Timed out after {timeout}s",
                provider=source,
            ) from e
        except httpx.HTTPStatusError as e:
            raise ProviderFailure(
                message=f"HTTP {e.response.status_code}",
                provider=source,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ProviderFailure(
                message=f"HTTP error: {e}",
                provider=source,
            ) from e
        except httpx.InvalidURL as e:
            raise ProviderFailure(
                message=f"Invalid URL: {e}",
                provider=source,
            ) from e
        return response.content

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpxFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


class Provider(ABC, Generic[ValueT]):
    """
    One entry in a fallback chain.

    Subclasses describe how to build the request URL, how to turn the raw
    body into a candidate value, and how to decide whether that candidate
    can be trusted.
    """

    # Class-level configuration (to be overridden by subclasses)
    NAME: ClassVar[str]
    # URL used when no parameter is given; also the health probe target
    ENDPOINT: ClassVar[str]
    # URL with a "{param}" placeholder, or None if the provider takes none
    ENDPOINT_TEMPLATE: ClassVar[str | None] = None
    # Whether failed attempts should be repeated before falling back
    RETRYABLE: ClassVar[bool] = False

    def __init__(self, api_key: str | None = None) -> None:
        self.api_key = api_key

    @property
    def name(self) -> str:
        return self.NAME

    @property
    def retryable(self) -> bool:
        return self.RETRYABLE

    @property
    def probe_url(self) -> str:
        return self.ENDPOINT

    def build_url(self, param: str | None = None) -> str:
        """Build the request URL for an optional parameter."""
        if param is None:
            return self.ENDPOINT
        if self.ENDPOINT_TEMPLATE is None:
            raise InvalidParameterError(
                f"Provider {self.name} does not take a parameter",
                details={"provider": self.name, "param": param},
            )
        return self.ENDPOINT_TEMPLATE.format(param=quote(param, safe=":"))

    def headers(self) -> dict[str, str]:
        """Extra request headers. Override to add auth."""
        return {}

    @abstractmethod
    def parse(self, body: bytes) -> ValueT:
        """
        Extract a candidate value from a raw response body.

        Raises:
            ValueError, TypeError, KeyError: If the body is unusable.
                Any exception raised here counts as an unusable body.
        """
        ...

    @abstractmethod
    def validate(self, value: ValueT) -> bool:
        """Whether a parsed candidate is well-formed enough to return."""
        ...
