"""Shared test fixtures for all tests."""

from __future__ import annotations

from typing import Any

import pytest

from netinsight.core.models import NetworkInterfaceInfo
from netinsight.core.types import AddressFamily


# ============================================================================
# Provider Payload Fixtures
# ============================================================================


@pytest.fixture
def ipapi_response() -> dict[str, Any]:
    """Sample ipapi.co response for 8.8.8.8."""
    return {
        "ip": "8.8.8.8",
        "network": "8.8.8.0/24",
        "version": "IPv4",
        "city": "Mountain View",
        "region": "California",
        "region_code": "CA",
        "country": "US",
        "country_name": "United States",
        "country_code": "US",
        "country_code_iso3": "USA",
        "continent_code": "NA",
        "in_eu": False,
        "postal": "94043",
        "latitude": 37.42301,
        "longitude": -122.083352,
        "timezone": "America/Los_Angeles",
        "utc_offset": "-0700",
        "country_calling_code": "+1",
        "currency": "USD",
        "languages": "en-US,es-US,haw,fr",
        "asn": "AS15169",
        "org": "GOOGLE",
    }


@pytest.fixture
def ipwhois_response() -> dict[str, Any]:
    """Sample ipwho.is response for 8.8.8.8."""
    return {
        "ip": "8.8.8.8",
        "success": True,
        "type": "IPv4",
        "continent": "North America",
        "continent_code": "NA",
        "country": "United States",
        "country_code": "US",
        "region": "California",
        "region_code": "CA",
        "city": "Mountain View",
        "latitude": 37.3860517,
        "longitude": -122.0838511,
        "is_eu": False,
        "postal": "94039",
        "calling_code": "1",
        "capital": "Washington D.C.",
        "borders": "CA,MX",
        "connection": {
            "asn": 15169,
            "org": "Google LLC",
            "isp": "Google LLC",
            "domain": "google.com",
        },
        "timezone": {
            "id": "America/Los_Angeles",
            "abbr": "PDT",
            "is_dst": True,
            "offset": -25200,
            "utc": "-07:00",
        },
    }


@pytest.fixture
def ipinfo_response() -> dict[str, Any]:
    """Sample ipinfo.io response for 8.8.8.8."""
    return {
        "ip": "8.8.8.8",
        "hostname": "dns.google",
        "city": "Mountain View",
        "region": "California",
        "country": "US",
        "loc": "37.4056,-122.0775",
        "org": "AS15169 Google LLC",
        "postal": "94043",
        "timezone": "America/Los_Angeles",
        "anycast": True,
    }


# ============================================================================
# Interface Fixtures
# ============================================================================


@pytest.fixture
def sample_interfaces() -> dict[str, list[NetworkInterfaceInfo]]:
    """Loopback plus one external interface with IPv4 and IPv6 addresses."""
    return {
        "lo": [
            NetworkInterfaceInfo(
                address="127.0.0.1",
                netmask="255.0.0.0",
                family=AddressFamily.IPV4,
                mac="00:00:00:00:00:00",
                internal=True,
                cidr="127.0.0.1/8",
            ),
        ],
        "eth0": [
            NetworkInterfaceInfo(
                address="192.168.1.10",
                netmask="255.255.255.0",
                family=AddressFamily.IPV4,
                mac="02:42:ac:11:00:02",
                internal=False,
                cidr="192.168.1.10/24",
            ),
            NetworkInterfaceInfo(
                address="fe80::42:acff:fe11:2",
                netmask="ffff:ffff:ffff:ffff::",
                family=AddressFamily.IPV6,
                mac="02:42:ac:11:00:02",
                internal=False,
                cidr="fe80::42:acff:fe11:2/64",
            ),
        ],
    }
