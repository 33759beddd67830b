"""Fallback resolution across an ordered chain of providers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Generic, TypeVar

from netinsight.cache.keys import CacheKeys
from netinsight.cache.memory import TTLCache
from netinsight.core.exceptions import (
    AllProvidersExhaustedError,
    ProviderFailure,
    ProviderTimeoutError,
)
from netinsight.core.types import ResourceKind
from netinsight.resolution.base import Fetcher, Provider, ResolutionConfig
from netinsight.resolution.retry import RetryPolicy

logger = logging.getLogger(__name__)

ValueT = TypeVar("ValueT")


class FallbackResolver(Generic[ValueT]):
    """
    Resolves one resource kind by trying providers in configured order.

    - Read-through cache keyed by resource kind and parameter
    - Providers contacted one at a time, first valid answer wins
    - Transport errors, timeouts, unparseable bodies and rejected values
      all move on to the next provider
    - Providers marked retryable are repeated with backoff first

    No provider health is carried between calls: every resolve starts from
    the top of the chain.
    """

    def __init__(
        self,
        kind: ResourceKind | str,
        providers: Sequence[Provider[ValueT]],
        fetcher: Fetcher,
        config: ResolutionConfig | None = None,
        cache: TTLCache | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        self.kind = kind
        self.config = config or ResolutionConfig()
        self._providers = tuple(providers)
        self._fetcher = fetcher
        self._cache = cache or TTLCache(
            ttl=self.config.cache_ttl,
            enabled=self.config.cache_enabled,
        )
        self._retry_policy = retry_policy or RetryPolicy(retryable_exceptions=(ProviderFailure,))

    @property
    def providers(self) -> tuple[Provider[ValueT], ...]:
        return self._providers

    @property
    def cache(self) -> TTLCache:
        return self._cache

    async def resolve(self, param: str | None = None) -> ValueT:
        """
        Resolve a value, consulting the cache first.

        Raises:
            AllProvidersExhaustedError: If no provider produced a valid value
        """
        cache_key = CacheKeys.resource(self.kind, param)
        cached = self._cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit for {cache_key}")
            return cached

        failed: list[str] = []
        for provider in self._providers:
            try:
                value = await self._try_provider(provider, param)
            except ProviderFailure as e:
                logger.warning(f"Provider {provider.name} failed for {self.kind}: {e.message}")
                failed.append(provider.name)
                continue

            self._cache.set(cache_key, value)
            logger.debug(f"Resolved {self.kind} via {provider.name}")
            return value

        logger.warning(f"All {len(failed)} providers failed for {self.kind}")
        raise AllProvidersExhaustedError(
            kind=str(self.kind),
            attempts=len(failed),
            details={"providers": failed},
        )

    async def _try_provider(
        self,
        provider: Provider[ValueT],
        param: str | None,
    ) -> ValueT:
        """Run one provider, with retries if it asks for them."""
        url = provider.build_url(param)
        if provider.retryable and self.config.max_retries > 1:
            return await self._retry_policy.execute(
                lambda: self._attempt(provider, url),
                max_attempts=self.config.max_retries,
                base_delay=self.config.retry_base_delay,
            )
        return await self._attempt(provider, url)

    async def _attempt(self, provider: Provider[ValueT], url: str) -> ValueT:
        """Fetch, parse and validate a single provider response."""
        body = await self._fetch(provider, url, self.config.timeout)

        try:
            value = provider.parse(body)
        except Exception as e:
            raise ProviderFailure(
                message=f"Unparseable response: {e}",
                provider=provider.name,
            ) from e

        if not provider.validate(value):
            raise ProviderFailure(
                message="Response failed validation",
                provider=provider.name,
            )
        return value

    async def _fetch(self, provider: Provider[ValueT], url: str, timeout: float) -> bytes:
        try:
            async with asyncio.timeout(timeout):
                return await self._fetcher.fetch(url, timeout, headers=provider.headers())
        except TimeoutError as e:
            raise ProviderTimeoutError(
                message=f"Timed out after {timeout}s",
                provider=provider.name,
            ) from e

    async def health_check(self) -> bool:
        """
        Probe the primary provider.

        Raises:
            ProviderFailure: If the probe fails or there are no providers
        """
        if not self._providers:
            raise ProviderFailure(message="No providers configured", provider=str(self.kind))
        primary = self._providers[0]
        await self._fetch(primary, primary.probe_url, self.config.health_check_timeout)
        return True

    def clear_cache(self, param: str | None = None) -> None:
        """Drop the cached value for `param`, or everything when omitted."""
        if param is None:
            self._cache.invalidate()
        else:
            self._cache.invalidate(CacheKeys.resource(self.kind, param))
