"""Netinsight - resilient resolution of public IP, geolocation and interfaces."""

from netinsight.cache import CacheKeys, TTLCache
from netinsight.config import NetInsightSettings, get_settings, setup_logging
from netinsight.core import (
    AggregateResolutionError,
    AggregationPolicy,
    AllProvidersExhaustedError,
    ApiResponse,
    CompositeResult,
    GeolocationData,
    InvalidParameterError,
    NetInsightError,
    NetworkInterfaceInfo,
    ProviderFailure,
    RequestMetadata,
    ResourceKind,
)
from netinsight.resolution import (
    FallbackResolver,
    HttpxFetcher,
    Provider,
    ProviderRegistry,
    ResolutionConfig,
    RetryPolicy,
)
from netinsight.services import (
    NetworkService,
    create_network_service,
    get_network_service,
)

__version__ = "0.1.0"

__all__ = [
    "AggregateResolutionError",
    "AggregationPolicy",
    "AllProvidersExhaustedError",
    "ApiResponse",
    "CacheKeys",
    "CompositeResult",
    "FallbackResolver",
    "GeolocationData",
    "HttpxFetcher",
    "InvalidParameterError",
    "NetInsightError",
    "NetInsightSettings",
    "NetworkInterfaceInfo",
    "NetworkService",
    "Provider",
    "ProviderFailure",
    "ProviderRegistry",
    "RequestMetadata",
    "ResolutionConfig",
    "ResourceKind",
    "RetryPolicy",
    "TTLCache",
    "create_network_service",
    "get_network_service",
    "get_settings",
    "setup_logging",
]
