"""Custom exception hierarchy for netinsight."""

from typing import Any


class NetInsightError(Exception):
    """Base exception for all netinsight errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidParameterError(NetInsightError):
    """A caller-supplied parameter failed validation."""

    pass


class ConfigurationError(NetInsightError):
    """Settings could not be turned into a working configuration."""

    pass


class ResolutionError(NetInsightError):
    """Failed to resolve a resource."""

    pass


class ProviderFailure(ResolutionError):
    """A single provider attempt failed."""

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.provider = provider
        self.status_code = status_code


class ProviderTimeoutError(ProviderFailure):
    """A provider attempt exceeded its timeout."""

    pass


class AllProvidersExhaustedError(ResolutionError):
    """Every provider in a fallback chain failed."""

    def __init__(
        self,
        kind: str,
        attempts: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"All providers failed for {kind}", details)
        self.kind = kind
        self.attempts = attempts


class AggregateResolutionError(ResolutionError):
    """A resource failed during all-or-nothing aggregation."""

    def __init__(
        self,
        kind: str,
        errors: dict[str, str],
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(errors.get(kind, f"Resolution failed for {kind}"), details)
        self.kind = kind
        self.errors = errors
