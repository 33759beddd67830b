"""Public IP providers: ipify and icanhazip."""

from __future__ import annotations

import json
from typing import ClassVar

from netinsight.core.addresses import is_valid_ip
from netinsight.resolution.base import Provider


class PublicIpProvider(Provider[str]):
    """
    Base for services that echo the caller's public address.

    Bodies are either JSON objects with an "ip" field or the bare address
    as plain text.
    """

    def parse(self, body: bytes) -> str:
        text = body.decode("utf-8").strip()
        if not text.startswith("{"):
            return text

        data = json.loads(text)
        ip = data["ip"]
        if not isinstance(ip, str):
            raise TypeError(f"Expected string ip, got {type(ip).__name__}")
        return ip.strip()

    def validate(self, value: str) -> bool:
        return is_valid_ip(value)


class IpifyProvider(PublicIpProvider):
    """ipify IPv4 endpoint (https://www.ipify.org)."""

    NAME: ClassVar[str] = "ipify"
    ENDPOINT: ClassVar[str] = "https://api.ipify.org?format=json"


class Ipify64Provider(PublicIpProvider):
    """ipify dual-stack endpoint; may answer with an IPv6 address."""

    NAME: ClassVar[str] = "ipify64"
    ENDPOINT: ClassVar[str] = "https://api64.ipify.org?format=json"


class IcanhazipProvider(PublicIpProvider):
    """icanhazip plain-text endpoint."""

    NAME: ClassVar[str] = "icanhazip"
    ENDPOINT: ClassVar[str] = "https://icanhazip.com"
