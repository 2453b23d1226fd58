"""Geocoder protocol for address enrichment.

A geocoder turns coordinates into a display address. It reports failures as
an ``AddressResult`` instead of raising, so the caller can keep going with
the address unresolved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, runtime_checkable


class EnrichmentStatus(Enum):
    """Outcome of an address lookup.

    Attributes:
        SUCCESS: An address was resolved.
        FAILED: Transport, status or parse error; address stays unresolved.
    """

    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class AddressResult:
    """Result of a reverse geocoding lookup.

    Attributes:
        status: The outcome of the lookup.
        address: Resolved display name when status is SUCCESS.
        error_message: Error description when status is FAILED.
        duration_ms: Time taken for the lookup in milliseconds.
        metadata: Provider-specific extras.

    Example:
        >>> result = AddressResult.success("10 Downing St, London")
        >>> result.ok
        True
        >>> AddressResult.failure("timeout").address is None
        True
    """

    status: EnrichmentStatus
    address: str | None = None
    error_message: str | None = None
    duration_ms: float = 0.0
    metadata: dict[str, object] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status is EnrichmentStatus.SUCCESS

    @classmethod
    def success(cls, address: str, duration_ms: float = 0.0) -> AddressResult:
        return cls(status=EnrichmentStatus.SUCCESS, address=address, duration_ms=duration_ms)

    @classmethod
    def failure(cls, error_message: str, duration_ms: float = 0.0) -> AddressResult:
        return cls(
            status=EnrichmentStatus.FAILED,
            error_message=error_message,
            duration_ms=duration_ms,
        )


@runtime_checkable
class Geocoder(Protocol):
    """Protocol for reverse geocoding.

    Example:
        >>> class FixedGeocoder:
        ...     async def resolve_address(self, lat: float, lng: float) -> AddressResult:
        ...         return AddressResult.success("Somewhere")
        ...
        ...     async def close(self) -> None:
        ...         pass
    """

    async def resolve_address(self, lat: float, lng: float) -> AddressResult:
        """Resolve coordinates to a display address.

        Must not raise: every failure is reported as a FAILED result.
        """
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...
