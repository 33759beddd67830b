"""Resolution layer for fetching network facts from external providers."""

from netinsight.resolution.base import (
    Fetcher,
    HttpxFetcher,
    Provider,
    ResolutionConfig,
)
from netinsight.resolution.chain import FallbackResolver
from netinsight.resolution.registry import ProviderRegistry
from netinsight.resolution.retry import RetryPolicy

__all__ = [
    # Base
    "Fetcher",
    "HttpxFetcher",
    "Provider",
    "ResolutionConfig",
    # Chain
    "FallbackResolver",
    "RetryPolicy",
    # Registry
    "ProviderRegistry",
]
