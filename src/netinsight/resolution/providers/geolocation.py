"""Geolocation providers: ipapi.co, ipwho.is and ipinfo.io."""

from __future__ import annotations

import json
from abc import abstractmethod
from typing import Any, ClassVar

from netinsight.core.addresses import is_valid_ip
from netinsight.core.models import GeolocationData
from netinsight.resolution.base import Provider


def _object_field(data: dict[str, Any], name: str) -> dict[str, Any]:
    """Nested JSON object field, empty if absent."""
    value = data.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TypeError(f"Expected object for {name}, got {type(value).__name__}")
    return value


def _text_field(data: dict[str, Any], name: str) -> str | None:
    value = data.get(name)
    if value is None or isinstance(value, str):
        return value
    raise TypeError(f"Expected string for {name}, got {type(value).__name__}")


class GeolocationProvider(Provider[GeolocationData]):
    """
    Base for IP geolocation services.

    Each subclass maps its own payload onto GeolocationData. A result is
    only trusted if it names a valid address, a country and in-range
    coordinates.
    """

    def parse(self, body: bytes) -> GeolocationData:
        data = json.loads(body)
        if not isinstance(data, dict):
            raise TypeError(f"Expected JSON object, got {type(data).__name__}")
        return GeolocationData.model_validate({**self._normalize(data), "source": self.name})

    @abstractmethod
    def _normalize(self, data: dict[str, Any]) -> dict[str, Any]:
        """Map the provider payload onto GeolocationData field names."""
        ...

    def validate(self, value: GeolocationData) -> bool:
        return (
            value.ip is not None
            and is_valid_ip(value.ip)
            and bool(value.country_name)
            and value.latitude is not None
            and value.longitude is not None
            and -90.0 <= value.latitude <= 90.0
            and -180.0 <= value.longitude <= 180.0
        )


class IpapiProvider(GeolocationProvider):
    """
    ipapi.co resolver (free tier, no API key required).

    API Documentation: https://ipapi.co/api/
    """

    NAME: ClassVar[str] = "ipapi"
    ENDPOINT: ClassVar[str] = "https://ipapi.co/json/"
    ENDPOINT_TEMPLATE: ClassVar[str | None] = "https://ipapi.co/{param}/json/"

    def _normalize(self, data: dict[str, Any]) -> dict[str, Any]:
        # Errors come back as 200s with {"error": true, "reason": ...}
        if data.get("error"):
            raise ValueError(data.get("reason") or "ipapi reported an error")
        return data


class IpwhoisProvider(GeolocationProvider):
    """
    ipwho.is resolver (free, no API key required).

    API Documentation: https://ipwho.is/
    """

    NAME: ClassVar[str] = "ipwhois"
    ENDPOINT: ClassVar[str] = "https://ipwho.is/"
    ENDPOINT_TEMPLATE: ClassVar[str | None] = "https://ipwho.is/{param}"

    def _normalize(self, data: dict[str, Any]) -> dict[str, Any]:
        if data.get("success") is False:
            raise ValueError(data.get("message") or "ipwho.is reported an error")

        connection = _object_field(data, "connection")
        timezone = _object_field(data, "timezone")
        calling_code = data.get("calling_code")
        asn = connection.get("asn")

        return {
            "ip": data.get("ip"),
            "city": data.get("city"),
            "region": data.get("region"),
            "region_code": data.get("region_code"),
            "country": data.get("country_code"),
            "country_name": data.get("country"),
            "continent_code": data.get("continent_code"),
            "postal": data.get("postal"),
            "latitude": data.get("latitude"),
            "longitude": data.get("longitude"),
            "timezone": timezone.get("id"),
            "utc_offset": timezone.get("utc"),
            "country_calling_code": f"+{calling_code}" if calling_code else None,
            "asn": f"AS{asn}" if asn else None,
            "org": connection.get("org"),
            "isp": connection.get("isp"),
        }


class IpinfoProvider(GeolocationProvider):
    """
    ipinfo.io resolver (optional token raises rate limits).

    The free tier only reports the ISO country code, which is used as the
    country name.

    API Documentation: https://ipinfo.io/developers
    """

    NAME: ClassVar[str] = "ipinfo"
    ENDPOINT: ClassVar[str] = "https://ipinfo.io/json"
    ENDPOINT_TEMPLATE: ClassVar[str | None] = "https://ipinfo.io/{param}/json"

    def headers(self) -> dict[str, str]:
        if self.api_key:
            return {"Authorization": f"Bearer {self.api_key}"}
        return {}

    def _normalize(self, data: dict[str, Any]) -> dict[str, Any]:
        if data.get("bogon"):
            raise ValueError(f"Bogon address: {data.get('ip')}")

        latitude = longitude = None
        if loc := _text_field(data, "loc"):
            lat_text, lon_text = loc.split(",", 1)
            latitude, longitude = float(lat_text), float(lon_text)

        # "AS15169 Google LLC" -> ("AS15169", "Google LLC")
        asn = org = None
        if org_text := _text_field(data, "org"):
            head, _, tail = org_text.partition(" ")
            if head.startswith("AS") and tail:
                asn, org = head, tail
            else:
                org = org_text

        return {
            "ip": data.get("ip"),
            "city": data.get("city"),
            "region": data.get("region"),
            "country": data.get("country"),
            "country_name": data.get("country"),
            "postal": data.get("postal"),
            "latitude": latitude,
            "longitude": longitude,
            "timezone": data.get("timezone"),
            "asn": asn,
            "org": org,
        }
