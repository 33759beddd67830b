"""Cache key builders for consistent key formatting."""

from netinsight.core.types import ResourceKind


class CacheKeys:
    """Cache key builders for consistent key formatting."""

    @classmethod
    def resource(
        cls,
        kind: ResourceKind | str,
        param: str | None = None,
    ) -> str:
        """Key for a resolved resource, optionally qualified by its parameter."""
        if param is None:
            return str(kind)
        return f"{kind}:{param}"

    @classmethod
    def public_ip(cls) -> str:
        """Key for this machine's public address."""
        return cls.resource(ResourceKind.PUBLIC_IP)

    @classmethod
    def location(cls, ip: str) -> str:
        """Key for the geolocation of an address."""
        return cls.resource(ResourceKind.LOCATION, ip)

    @classmethod
    def interfaces(cls) -> str:
        """Key for the local interface listing."""
        return cls.resource(ResourceKind.INTERFACES)
