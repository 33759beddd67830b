"""Domain models for resolved network facts."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .types import AddressFamily

DataT = TypeVar("DataT")


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class GeolocationData(BaseModel):
    """
    Geolocation for an IP address, normalized across providers.

    Every field is optional so that partial provider payloads still parse;
    whether a payload is usable is decided by the provider's validator.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    ip: str | None = Field(default=None, description="Address that was located")
    city: str | None = None
    region: str | None = None
    region_code: str | None = None
    country: str | None = Field(default=None, description="ISO 3166 alpha-2 code")
    country_name: str | None = None
    continent_code: str | None = None
    postal: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    timezone: str | None = None
    utc_offset: str | None = None
    country_calling_code: str | None = None
    currency: str | None = None
    languages: str | None = None
    asn: str | None = None
    org: str | None = None
    isp: str | None = None
    source: str | None = Field(default=None, description="Provider that answered")


class NetworkInterfaceInfo(BaseModel):
    """One address bound to a local network interface."""

    model_config = ConfigDict(frozen=True)

    address: str
    netmask: str
    family: AddressFamily
    mac: str
    internal: bool
    cidr: str | None = None


class NetworkStats(BaseModel):
    """Counts derived from the local interface listing."""

    total_interfaces: int = 0
    external_addresses: int = 0
    internal_addresses: int = 0


class RequestMetadata(BaseModel):
    """
    Request data used to work out the caller's address.

    Header names are matched case-insensitively; `x-forwarded-for` may be
    a single comma-separated string or a list of them.
    """

    address: str | None = Field(default=None, description="Pre-parsed peer address")
    headers: dict[str, str | list[str]] = Field(default_factory=dict)

    @field_validator("headers")
    @classmethod
    def lowercase_header_names(
        cls, value: dict[str, str | list[str]]
    ) -> dict[str, str | list[str]]:
        return {name.lower(): header for name, header in value.items()}

    def header(self, name: str) -> str | list[str] | None:
        """Get a raw header value by case-insensitive name."""
        return self.headers.get(name.lower())


class CompositeResult(BaseModel):
    """Outcome of resolving several resource kinds in one call."""

    model_config = ConfigDict(frozen=True)

    values: dict[str, Any] = Field(default_factory=dict)
    errors: dict[str, str] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=utc_now)

    @property
    def success(self) -> bool:
        """Whether every requested kind resolved."""
        return not self.errors

    def get(self, kind: str, default: Any = None) -> Any:
        """Resolved value for a kind, or `default` if it failed."""
        return self.values.get(kind, default)


class FullNetworkInfo(BaseModel):
    """Everything known about this machine's network position."""

    public_ip: str
    location: GeolocationData
    interfaces: dict[str, list[NetworkInterfaceInfo]]
    external_addresses: list[str]


class HealthStatus(BaseModel):
    """Reachability of the upstream providers."""

    ip_services: bool
    geolocation_services: bool
    network_info: bool


class ApiResponse(BaseModel, Generic[DataT]):
    """Response envelope handed to the request-handling layer."""

    success: bool
    data: DataT | None = None
    error: str | None = None
    timestamp: datetime = Field(default_factory=utc_now)

    @classmethod
    def ok(cls, data: DataT) -> "ApiResponse[DataT]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "ApiResponse[DataT]":
        return cls(success=False, error=error)
