"""Core enums and type definitions."""

from enum import StrEnum


class ResourceKind(StrEnum):
    """Categories of network facts that can be resolved."""

    PUBLIC_IP = "public_ip"
    CLIENT_IP = "client_ip"
    LOCATION = "location"
    INTERFACES = "interfaces"
    EXTERNAL_ADDRESSES = "external_addresses"


class AggregationPolicy(StrEnum):
    """How a composite resolution treats individual failures."""

    # Any failure fails the whole call
    ALL_OR_NOTHING = "all_or_nothing"

    # Failures are reported next to the successful values
    BEST_EFFORT = "best_effort"


class AddressFamily(StrEnum):
    """Address families reported for local interfaces."""

    IPV4 = "IPv4"
    IPV6 = "IPv6"
