"""
Error taxonomy for geocoding and route resolution.

Geocoding errors are raised by the clients. Resolution errors are returned
as values by RouteResolver.resolve and only raised by callers that choose to.
"""

from typing import Optional

from .route import EndpointLabel


class GeocodingError(Exception):
    """Base class for a failed address lookup."""

    kind = "geocoding_error"

    def __init__(self, address: str, message: str):
        super().__init__(message)
        self.address = address
        self.message = message


class NotFoundError(GeocodingError):
    """The service answered but returned zero results for the address."""

    kind = "not_found"

    def __init__(self, address: str, message: Optional[str] = None):
        super().__init__(address, message or f"No results for address: {address!r}")


class ServiceError(GeocodingError):
    """Network, HTTP, provider-status or parse failure. Chains the cause."""

    kind = "service_error"

    def __init__(self, address: str, message: str):
        super().__init__(address, message)


class ResolutionError(Exception):
    """Base class for a route that could not be resolved."""

    kind = "resolution_error"

    @property
    def fields(self) -> tuple[EndpointLabel, ...]:
        return ()


class ValidationError(ResolutionError):
    """One or both endpoint texts were empty; nothing was looked up."""

    kind = "validation_error"

    def __init__(self, fields: tuple[EndpointLabel, ...]):
        if not fields:
            raise ValueError("ValidationError needs at least one field")
        names = " and ".join(label.value for label in fields)
        super().__init__(f"Empty input for: {names}")
        self._fields = tuple(fields)

    @property
    def fields(self) -> tuple[EndpointLabel, ...]:
        return self._fields


class GeocodeFailure(ResolutionError):
    """At least one endpoint failed to geocode. Tags only the failed ones."""

    kind = "geocode_failure"

    def __init__(self, failures: dict[EndpointLabel, GeocodingError]):
        if not failures:
            raise ValueError("GeocodeFailure needs at least one failed endpoint")
        # Keep start before end regardless of insertion order
        self.failures = {
            label: failures[label] for label in EndpointLabel if label in failures
        }
        detail = "; ".join(
            f"{label.value}: {error.message}" for label, error in self.failures.items()
        )
        super().__init__(f"Geocoding failed ({detail})")

    @property
    def fields(self) -> tuple[EndpointLabel, ...]:
        return tuple(self.failures)

    @property
    def service_only(self) -> bool:
        """True when every failure was a service fault (worth retrying as-is)."""
        return all(isinstance(e, ServiceError) for e in self.failures.values())


class SearchInProgressError(Exception):
    """A search was started while the previous one is still outstanding."""
    pass
