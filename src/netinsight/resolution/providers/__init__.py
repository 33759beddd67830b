"""Concrete providers for each resolvable resource kind."""

from netinsight.resolution.providers.geolocation import (
    GeolocationProvider,
    IpapiProvider,
    IpinfoProvider,
    IpwhoisProvider,
)
from netinsight.resolution.providers.public_ip import (
    IcanhazipProvider,
    Ipify64Provider,
    IpifyProvider,
    PublicIpProvider,
)

__all__ = [
    # Public IP
    "IcanhazipProvider",
    "Ipify64Provider",
    "IpifyProvider",
    "PublicIpProvider",
    # Geolocation
    "GeolocationProvider",
    "IpapiProvider",
    "IpinfoProvider",
    "IpwhoisProvider",
]
