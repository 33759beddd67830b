"""Network service: concurrent aggregation over the resolution layer."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from netinsight.cache.memory import TTLCache
from netinsight.config import NetInsightSettings, get_settings
from netinsight.core.addresses import extract_client_ip, require_valid_ip
from netinsight.core.exceptions import (
    AggregateResolutionError,
    InvalidParameterError,
    NetInsightError,
)
from netinsight.core.models import (
    ApiResponse,
    CompositeResult,
    FullNetworkInfo,
    GeolocationData,
    HealthStatus,
    NetworkInterfaceInfo,
    NetworkStats,
    RequestMetadata,
)
from netinsight.core.types import AggregationPolicy, ResourceKind
from netinsight.resolution.base import Fetcher, HttpxFetcher, ResolutionConfig
from netinsight.resolution.chain import FallbackResolver
from netinsight.resolution.registry import ProviderRegistry
from netinsight.services.interfaces import (
    InterfaceInspector,
    InterfaceMap,
    list_local_interfaces,
)

logger = logging.getLogger(__name__)

# Kinds answered from local data; these never suspend
LOCAL_KINDS = frozenset(
    {
        ResourceKind.CLIENT_IP,
        ResourceKind.INTERFACES,
        ResourceKind.EXTERNAL_ADDRESSES,
    }
)

FULL_INFO_KINDS = (
    ResourceKind.PUBLIC_IP,
    ResourceKind.LOCATION,
    ResourceKind.INTERFACES,
    ResourceKind.EXTERNAL_ADDRESSES,
)


class NetworkService:
    """
    Resolves facts about this machine's and its callers' network position.

    Owns one FallbackResolver per remote resource kind (each with its own
    cache) plus the local interface inspector. Configuration is immutable:
    `update_config` rebuilds the resolvers and starts from empty caches.
    """

    def __init__(
        self,
        config: ResolutionConfig | None = None,
        registry: ProviderRegistry | None = None,
        fetcher: Fetcher | None = None,
        interface_lister: Callable[[], InterfaceMap] = list_local_interfaces,
    ) -> None:
        """
        Initialize the service.

        Args:
            config: Resolution configuration (defaults if omitted)
            registry: Provider chains; built from settings if omitted
            fetcher: HTTP capability; an httpx-backed one if omitted
            interface_lister: Local interface enumeration capability
        """
        self._config = config or ResolutionConfig()
        self._registry = registry or ProviderRegistry.from_settings(get_settings())
        self._fetcher = fetcher or HttpxFetcher()
        self._interface_lister = interface_lister
        self._build_components()

    @classmethod
    def from_settings(cls, settings: NetInsightSettings) -> "NetworkService":
        return cls(
            config=ResolutionConfig.from_settings(settings),
            registry=ProviderRegistry.from_settings(settings),
            fetcher=HttpxFetcher(user_agent=settings.user_agent),
        )

    def _build_components(self) -> None:
        self._public_ip: FallbackResolver[str] = self._registry.get_public_ip_chain(
            self._fetcher, self._config
        )
        self._location: FallbackResolver[GeolocationData] = self._registry.get_location_chain(
            self._fetcher, self._config
        )
        self._interfaces = InterfaceInspector(
            self._interface_lister,
            cache=TTLCache(
                ttl=self._config.interfaces_cache_ttl,
                enabled=self._config.cache_enabled,
            ),
            ttl=self._config.interfaces_cache_ttl,
        )

    # Single resources

    async def get_public_ip(self) -> str:
        """This machine's public address."""
        return await self._public_ip.resolve()

    def get_client_ip(self, request: RequestMetadata) -> str:
        """The caller's address, or "unknown"."""
        return extract_client_ip(request)

    async def get_location(self, ip: str | None = None) -> GeolocationData:
        """
        Geolocate an address, or this machine's public address if omitted.

        Raises:
            InvalidParameterError: If `ip` is not a valid literal
            AllProvidersExhaustedError: If lookup (or the public IP) failed
        """
        # Both lookups use the resolvers current at call time
        public_ip, location = self._public_ip, self._location
        if ip is not None:
            target = require_valid_ip(ip)
        else:
            target = await public_ip.resolve()
        return await location.resolve(target)

    async def get_current_location(self) -> GeolocationData:
        return await self.get_location()

    def get_network_interfaces(self) -> InterfaceMap:
        return self._interfaces.get_interfaces()

    def get_external_addresses(self) -> list[str]:
        return self._interfaces.get_external_addresses()

    def get_interface_by_name(self, name: str) -> list[NetworkInterfaceInfo] | None:
        return self._interfaces.get_interface_by_name(name)

    def get_network_stats(self) -> NetworkStats:
        return self._interfaces.get_network_stats()

    # Aggregation

    async def resolve_all(
        self,
        kinds: Iterable[ResourceKind | str],
        policy: AggregationPolicy = AggregationPolicy.BEST_EFFORT,
        *,
        ip: str | None = None,
        request: RequestMetadata | None = None,
    ) -> CompositeResult:
        """
        Resolve several kinds at once.

        Local kinds are computed first; remote kinds then run concurrently
        and every one of them is attempted regardless of the others.

        Args:
            kinds: Resource kinds to resolve (duplicates ignored)
            policy: BEST_EFFORT keeps failures in the result;
                ALL_OR_NOTHING raises on the first failed kind
            ip: Address to geolocate; this machine's public IP if omitted
            request: Request metadata for CLIENT_IP

        Raises:
            InvalidParameterError: If a kind is unknown, or `ip` is given and invalid
            AggregateResolutionError: Under ALL_OR_NOTHING, if any kind failed
        """
        requested = list(dict.fromkeys(self._parse_kind(kind) for kind in kinds))
        if ip is not None and ResourceKind.LOCATION in requested:
            ip = require_valid_ip(ip)

        outcomes: dict[str, Any] = {}
        for kind in requested:
            if kind in LOCAL_KINDS:
                outcomes[kind] = self._resolve_local(kind, request)

        remote = [kind for kind in requested if kind not in LOCAL_KINDS]
        if remote:
            results = await asyncio.gather(
                *self._remote_lookups(remote, ip, self._public_ip, self._location),
                return_exceptions=True,
            )
            outcomes.update(zip(remote, results))

        return self._compose([str(kind) for kind in requested], outcomes, policy)

    @staticmethod
    def _parse_kind(kind: ResourceKind | str) -> ResourceKind:
        try:
            return ResourceKind(kind)
        except ValueError as e:
            raise InvalidParameterError(
                f"Unknown resource kind: {kind}",
                details={"kind": str(kind), "known": [str(k) for k in ResourceKind]},
            ) from e

    def _resolve_local(
        self,
        kind: ResourceKind,
        request: RequestMetadata | None,
    ) -> Any:
        """Run a local lookup, returning its exception instead of raising."""
        try:
            if kind == ResourceKind.CLIENT_IP:
                return self.get_client_ip(request or RequestMetadata())
            if kind == ResourceKind.INTERFACES:
                return self.get_network_interfaces()
            return self.get_external_addresses()
        except Exception as e:
            return e

    @classmethod
    def _remote_lookups(
        cls,
        kinds: list[ResourceKind],
        ip: str | None,
        public_ip_chain: FallbackResolver[str],
        location_chain: FallbackResolver[GeolocationData],
    ) -> list[Awaitable[Any]]:
        # One public IP lookup serves both PUBLIC_IP and an implicit LOCATION
        public_ip: asyncio.Future[str] | None = None
        if ResourceKind.PUBLIC_IP in kinds or ip is None:
            public_ip = asyncio.ensure_future(public_ip_chain.resolve())

        lookups: list[Awaitable[Any]] = []
        for kind in kinds:
            if kind == ResourceKind.PUBLIC_IP:
                lookups.append(public_ip)
            elif kind == ResourceKind.LOCATION:
                lookups.append(cls._locate(location_chain, ip, public_ip))
        return lookups

    @staticmethod
    async def _locate(
        location_chain: FallbackResolver[GeolocationData],
        ip: str | None,
        public_ip: Awaitable[str] | None,
    ) -> GeolocationData:
        target = ip if ip is not None else await public_ip
        return await location_chain.resolve(target)

    @staticmethod
    def _compose(
        order: list[str],
        outcomes: dict[str, Any],
        policy: AggregationPolicy,
    ) -> CompositeResult:
        values: dict[str, Any] = {}
        errors: dict[str, str] = {}
        for key in order:
            outcome = outcomes[key]
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                if not isinstance(outcome, NetInsightError):
                    logger.error(f"Unexpected error resolving {key}: {outcome!r}")
                errors[key] = str(outcome)
            else:
                values[key] = outcome

        if policy == AggregationPolicy.ALL_OR_NOTHING and errors:
            failed = next(key for key in order if key in errors)
            raise AggregateResolutionError(kind=failed, errors=errors) from outcomes[failed]

        return CompositeResult(values=values, errors=errors)

    async def get_full_network_info(self) -> ApiResponse[FullNetworkInfo]:
        """Public IP, its location and the local interfaces, or an error."""
        try:
            result = await self.resolve_all(FULL_INFO_KINDS, AggregationPolicy.ALL_OR_NOTHING)
        except AggregateResolutionError as e:
            logger.warning(f"Full network info unavailable: {e.message}")
            return ApiResponse.fail(e.message)

        return ApiResponse.ok(
            FullNetworkInfo(
                public_ip=result.values[ResourceKind.PUBLIC_IP],
                location=result.values[ResourceKind.LOCATION],
                interfaces=result.values[ResourceKind.INTERFACES],
                external_addresses=result.values[ResourceKind.EXTERNAL_ADDRESSES],
            )
        )

    async def health_check(self) -> ApiResponse[HealthStatus]:
        """Probe the primary provider of each chain, best-effort."""
        checks = {
            "ip_services": self._public_ip.health_check(),
            "geolocation_services": self._location.health_check(),
        }
        results = await asyncio.gather(*checks.values(), return_exceptions=True)
        outcomes: dict[str, Any] = dict(zip(checks, results))
        outcomes["network_info"] = self._resolve_local(ResourceKind.INTERFACES, None)

        status = self._compose(list(outcomes), outcomes, AggregationPolicy.BEST_EFFORT)
        for name, reason in status.errors.items():
            logger.warning(f"Health check {name} failed: {reason}")

        return ApiResponse.ok(
            HealthStatus(
                ip_services="ip_services" in status.values,
                geolocation_services="geolocation_services" in status.values,
                network_info="network_info" in status.values,
            )
        )

    # Configuration and lifecycle

    def get_config(self) -> ResolutionConfig:
        return self._config

    def update_config(
        self,
        config: ResolutionConfig | None = None,
        **changes: Any,
    ) -> ResolutionConfig:
        """
        Replace the configuration and rebuild resolvers with empty caches.

        Pass a whole ResolutionConfig, or individual fields as keywords.
        """
        base = config or self._config
        self._config = ResolutionConfig.model_validate({**base.model_dump(), **changes})
        self._build_components()
        logger.info("Configuration updated, resolvers rebuilt")
        return self._config

    def clear_caches(self) -> None:
        self._public_ip.clear_cache()
        self._location.clear_cache()
        self._interfaces.clear_cache()

    async def close(self) -> None:
        """Close the HTTP fetcher."""
        await self._fetcher.close()

    async def __aenter__(self) -> "NetworkService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def create_network_service(
    settings: NetInsightSettings | None = None,
) -> NetworkService:
    """Build a fresh, independently configured service."""
    return NetworkService.from_settings(settings or get_settings())


_default_service: NetworkService | None = None


def get_network_service() -> NetworkService:
    """
    Process-wide convenience instance for embedding applications.

    Built on first use from the cached settings. Nothing in this package
    depends on it.
    """
    global _default_service
    if _default_service is None:
        _default_service = create_network_service()
    return _default_service
