"""Core types, models, and utilities."""

from .addresses import (
    UNKNOWN_ADDRESS,
    extract_client_ip,
    is_valid_ip,
    is_valid_ipv4,
    is_valid_ipv6,
    normalize_address,
    require_valid_ip,
)
from .exceptions import (
    AggregateResolutionError,
    AllProvidersExhaustedError,
    ConfigurationError,
    InvalidParameterError,
    NetInsightError,
    ProviderFailure,
    ProviderTimeoutError,
    ResolutionError,
)
from .models import (
    ApiResponse,
    CompositeResult,
    FullNetworkInfo,
    GeolocationData,
    HealthStatus,
    NetworkInterfaceInfo,
    NetworkStats,
    RequestMetadata,
)
from .types import AddressFamily, AggregationPolicy, ResourceKind

__all__ = [
    # Types
    "AddressFamily",
    "AggregationPolicy",
    "ResourceKind",
    # Models
    "ApiResponse",
    "CompositeResult",
    "FullNetworkInfo",
    "GeolocationData",
    "HealthStatus",
    "NetworkInterfaceInfo",
    "NetworkStats",
    "RequestMetadata",
    # Addresses
    "UNKNOWN_ADDRESS",
    "extract_client_ip",
    "is_valid_ip",
    "is_valid_ipv4",
    "is_valid_ipv6",
    "normalize_address",
    "require_valid_ip",
    # Exceptions
    "AggregateResolutionError",
    "AllProvidersExhaustedError",
    "ConfigurationError",
    "InvalidParameterError",
    "NetInsightError",
    "ProviderFailure",
    "ProviderTimeoutError",
    "ResolutionError",
]
