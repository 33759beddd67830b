"""Local network interface enumeration."""

from __future__ import annotations

import ipaddress
import logging
import socket
from typing import Callable

import psutil

from netinsight.cache.keys import CacheKeys
from netinsight.cache.memory import TTLCache
from netinsight.core.models import NetworkInterfaceInfo, NetworkStats
from netinsight.core.types import AddressFamily

logger = logging.getLogger(__name__)

InterfaceMap = dict[str, list[NetworkInterfaceInfo]]

EMPTY_MAC = "00:00:00:00:00:00"

_FAMILIES = {
    socket.AF_INET: AddressFamily.IPV4,
    socket.AF_INET6: AddressFamily.IPV6,
}


def _prefix_length(netmask: str) -> int | None:
    """Number of leading one bits in a dotted or colon-hex netmask."""
    try:
        bits = int(ipaddress.ip_address(netmask))
    except ValueError:
        return None
    return bin(bits).count("1")


def _is_internal(address: str) -> bool:
    try:
        return ipaddress.ip_address(address).is_loopback
    except ValueError:
        return False


def _copy_map(interfaces: InterfaceMap) -> InterfaceMap:
    # Entries are frozen models, so copying the containers is enough
    return {name: list(infos) for name, infos in interfaces.items()}


def list_local_interfaces() -> InterfaceMap:
    """
    Enumerate interface addresses through psutil.

    Only IPv4 and IPv6 addresses are reported; the link-layer entry of each
    interface supplies its MAC address. IPv6 zone suffixes ("%eth0") are
    dropped from the address.
    """
    result: InterfaceMap = {}
    for name, addrs in psutil.net_if_addrs().items():
        mac = next(
            (a.address for a in addrs if a.family == psutil.AF_LINK and a.address),
            EMPTY_MAC,
        )
        entries = []
        for addr in addrs:
            family = _FAMILIES.get(addr.family)
            if family is None:
                continue
            address = addr.address.split("%", 1)[0]
            netmask = addr.netmask or ""
            prefix = _prefix_length(netmask) if netmask else None
            entries.append(
                NetworkInterfaceInfo(
                    address=address,
                    netmask=netmask,
                    family=family,
                    mac=mac,
                    internal=_is_internal(address),
                    cidr=f"{address}/{prefix}" if prefix is not None else None,
                )
            )
        if entries:
            result[name] = entries
    return result


class InterfaceInspector:
    """
    Read-only view over the local interfaces, cached briefly.

    The OS call is synchronous and local, so nothing here suspends.
    """

    def __init__(
        self,
        lister: Callable[[], InterfaceMap] = list_local_interfaces,
        cache: TTLCache | None = None,
        ttl: float = 60.0,
    ) -> None:
        self._lister = lister
        self._cache = cache or TTLCache(ttl=ttl)
        self._ttl = ttl

    @property
    def cache(self) -> TTLCache:
        return self._cache

    def get_interfaces(self) -> InterfaceMap:
        """
        Interface name to the addresses bound to it.

        Each call returns a new map; the cached listing is never handed out.
        """
        key = CacheKeys.interfaces()
        cached = self._cache.get(key)
        if cached is None:
            cached = _copy_map(self._lister())
            logger.debug(f"Enumerated {len(cached)} local interfaces")
            self._cache.set(key, cached, ttl=self._ttl)
        return _copy_map(cached)

    def get_external_addresses(self) -> list[str]:
        """Non-loopback IPv4 addresses across all interfaces."""
        return [
            info.address
            for infos in self.get_interfaces().values()
            for info in infos
            if not info.internal and info.family == AddressFamily.IPV4
        ]

    def get_interface_by_name(self, name: str) -> list[NetworkInterfaceInfo] | None:
        return self.get_interfaces().get(name)

    def get_network_stats(self) -> NetworkStats:
        interfaces = self.get_interfaces()
        internal = sum(1 for infos in interfaces.values() for info in infos if info.internal)
        total = sum(len(infos) for infos in interfaces.values())
        return NetworkStats(
            total_interfaces=len(interfaces),
            external_addresses=total - internal,
            internal_addresses=internal,
        )

    def clear_cache(self) -> None:
        self._cache.invalidate()
