"""IP literal validation and client address extraction."""

from __future__ import annotations

import re
from typing import Iterator

from .exceptions import InvalidParameterError
from .models import RequestMetadata

UNKNOWN_ADDRESS = "unknown"

IPV4_LOOPBACK = "127.0.0.1"
IPV6_LOOPBACK = "::1"
IPV4_MAPPED_PREFIX = "::ffff:"

IPV4_PATTERN = re.compile(r"(\d{1,3})\.(\d{1,3})\.(\d{1,3})\.(\d{1,3})", re.ASCII)
IPV6_CHARSET_PATTERN = re.compile(r"[0-9a-fA-F:]+")
IPV6_GROUP_PATTERN = re.compile(r"[0-9a-fA-F]{1,4}")

# Headers consulted, in order, when the peer address is unusable
FORWARDED_HEADER = "x-forwarded-for"
FALLBACK_HEADERS = ("x-real-ip", "x-client-ip")


def is_valid_ipv4(value: str) -> bool:
    """
    Check for a dotted-quad IPv4 literal.

    Each octet must be in [0, 255] and written canonically, so "01" or
    "001" are rejected rather than reinterpreted.
    """
    match = IPV4_PATTERN.fullmatch(value)
    if not match:
        return False
    for octet in match.groups():
        number = int(octet)
        if number > 255 or str(number) != octet:
            return False
    return True


def is_valid_ipv6(value: str) -> bool:
    """
    Check for a colon-hex IPv6 literal.

    Supports a single `::` zero-run compression; every written group must
    be 1-4 hex digits. Embedded dotted-quad tails and zone ids are not
    accepted.
    """
    if ":" not in value or not IPV6_CHARSET_PATTERN.fullmatch(value):
        return False

    compressions = value.count("::")
    if compressions > 1:
        return False

    if compressions == 1:
        head, tail = value.split("::")
        groups = (head.split(":") if head else []) + (tail.split(":") if tail else [])
        max_groups = 7
    else:
        groups = value.split(":")
        if len(groups) != 8:
            return False
        max_groups = 8

    if len(groups) > max_groups:
        return False
    return all(IPV6_GROUP_PATTERN.fullmatch(group) for group in groups)


def is_valid_ip(value: str) -> bool:
    """Check for either an IPv4 or an IPv6 literal."""
    return is_valid_ipv4(value) or is_valid_ipv6(value)


def require_valid_ip(value: str) -> str:
    """Return the stripped address or raise InvalidParameterError."""
    candidate = value.strip() if isinstance(value, str) else ""
    if not candidate or not is_valid_ip(candidate):
        raise InvalidParameterError(
            f"Invalid IP address: {value}",
            details={"address": value},
        )
    return candidate


def normalize_address(raw: str | None) -> str | None:
    """
    Normalize a textual peer address.

    - `::1` becomes `127.0.0.1`
    - `::ffff:a.b.c.d` is unwrapped to `a.b.c.d`
    - a trailing port is removed from `a.b.c.d:port` and `[v6]:port`

    Returns None for empty input.
    """
    if raw is None:
        return None
    address = raw.strip()
    if not address:
        return None

    if address.startswith("[") and "]" in address:
        address = address[1 : address.index("]")]

    if address == IPV6_LOOPBACK:
        return IPV4_LOOPBACK

    if address.lower().startswith(IPV4_MAPPED_PREFIX):
        embedded = address[len(IPV4_MAPPED_PREFIX) :]
        if is_valid_ipv4(_strip_ipv4_port(embedded)):
            address = embedded

    return _strip_ipv4_port(address)


def _strip_ipv4_port(address: str) -> str:
    """Drop `:port` from an IPv4 address; IPv6 literals pass through."""
    if address.count(":") == 1:
        host, _, port = address.partition(":")
        if port.isdigit() and is_valid_ipv4(host):
            return host
    return address


def _first_forwarded_hop(value: str | list[str] | None) -> str | None:
    """Left-most address of an X-Forwarded-For chain."""
    if not value:
        return None
    if isinstance(value, list):
        value = ",".join(value)
    for hop in value.split(","):
        if hop.strip():
            return hop.strip()
    return None


def _header_text(value: str | list[str] | None) -> str | None:
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _candidate_addresses(request: RequestMetadata) -> Iterator[str | None]:
    yield request.address
    yield _first_forwarded_hop(request.header(FORWARDED_HEADER))
    for header in FALLBACK_HEADERS:
        yield _header_text(request.header(header))


def extract_client_ip(request: RequestMetadata) -> str:
    """
    Work out the caller's address from request metadata.

    Sources are tried in order: the peer address, the first hop of
    `x-forwarded-for`, then `x-real-ip` and `x-client-ip`. The first
    candidate that normalizes to a valid literal wins. This never raises:
    when nothing usable is found the result is "unknown".
    """
    for candidate in _candidate_addresses(request):
        address = normalize_address(candidate)
        if address and is_valid_ip(address):
            return address
    return UNKNOWN_ADDRESS
