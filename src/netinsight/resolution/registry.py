"""Provider registry for building the fixed fallback chains."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from netinsight.core.exceptions import ConfigurationError
from netinsight.core.models import GeolocationData
from netinsight.core.types import ResourceKind
from netinsight.resolution.base import Fetcher, Provider, ResolutionConfig
from netinsight.resolution.chain import FallbackResolver
from netinsight.resolution.providers import (
    IcanhazipProvider,
    Ipify64Provider,
    IpifyProvider,
    IpapiProvider,
    IpinfoProvider,
    IpwhoisProvider,
)

if TYPE_CHECKING:
    from netinsight.config import NetInsightSettings


class ProviderRegistry:
    """
    Factory for the ordered provider lists of each resource kind.

    Order is fixed at registration time; chains built from the registry
    always try providers in that order.
    """

    KNOWN_PROVIDERS: ClassVar[dict[ResourceKind, dict[str, type[Provider[Any]]]]] = {
        ResourceKind.PUBLIC_IP: {
            IpifyProvider.NAME: IpifyProvider,
            Ipify64Provider.NAME: Ipify64Provider,
            IcanhazipProvider.NAME: IcanhazipProvider,
        },
        ResourceKind.LOCATION: {
            IpapiProvider.NAME: IpapiProvider,
            IpwhoisProvider.NAME: IpwhoisProvider,
            IpinfoProvider.NAME: IpinfoProvider,
        },
    }

    def __init__(self) -> None:
        self._providers: dict[ResourceKind, list[Provider[Any]]] = {}

    def register(self, kind: ResourceKind, provider: Provider[Any]) -> None:
        """Append a provider to the end of a kind's chain."""
        self._providers.setdefault(kind, []).append(provider)

    def providers_for(self, kind: ResourceKind) -> list[Provider[Any]]:
        return list(self._providers.get(kind, []))

    def get_chain(
        self,
        kind: ResourceKind,
        fetcher: Fetcher,
        config: ResolutionConfig | None = None,
    ) -> FallbackResolver[Any]:
        """Build a fresh resolver (with its own cache) for a kind."""
        providers = self.providers_for(kind)
        if not providers:
            raise ConfigurationError(f"No providers registered for {kind}")
        return FallbackResolver(kind, providers, fetcher, config)

    def get_public_ip_chain(
        self,
        fetcher: Fetcher,
        config: ResolutionConfig | None = None,
    ) -> FallbackResolver[str]:
        return self.get_chain(ResourceKind.PUBLIC_IP, fetcher, config)

    def get_location_chain(
        self,
        fetcher: Fetcher,
        config: ResolutionConfig | None = None,
    ) -> FallbackResolver[GeolocationData]:
        return self.get_chain(ResourceKind.LOCATION, fetcher, config)

    @classmethod
    def from_settings(cls, settings: "NetInsightSettings") -> "ProviderRegistry":
        """
        Create a registry with the providers named in settings, in order.

        Raises:
            ConfigurationError: If a provider name is not known
        """
        registry = cls()
        api_keys = {IpinfoProvider.NAME: settings.ipinfo_token}

        chains = {
            ResourceKind.PUBLIC_IP: settings.public_ip_providers,
            ResourceKind.LOCATION: settings.geolocation_providers,
        }
        for kind, names in chains.items():
            known = cls.KNOWN_PROVIDERS[kind]
            for name in names:
                provider_cls = known.get(name)
                if provider_cls is None:
                    raise ConfigurationError(
                        f"Unknown {kind} provider: {name}",
                        details={"known": sorted(known)},
                    )
                registry.register(kind, provider_cls(api_key=api_keys.get(name)))

        return registry
