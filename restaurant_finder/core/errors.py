"""Error taxonomy for the restaurant search pipeline."""

from typing import Optional


class RestaurantFinderError(RuntimeError):
    """Base class for errors that abort a search request."""

    status_code = 500


class ValidationError(RestaurantFinderError):
    """Raised when the caller supplied a missing or malformed zip code."""

    status_code = 400


class ConfigurationError(RestaurantFinderError):
    """Raised when mandatory configuration such as the Places API key is missing."""


class ProviderError(RestaurantFinderError):
    """Raised when the Places API returns a non-successful status."""

    def __init__(self, status: Optional[str], message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


class NetworkError(RestaurantFinderError):
    """Raised when the Places API could not be reached or returned an unreadable response."""


class ItemEnrichmentFailure(Exception):
    """Raised when details for a single place cannot be fetched; never leaves the enricher."""

    def __init__(self, place_id: Optional[str], reason: str) -> None:
        super().__init__(f"details unavailable for {place_id}: {reason}")
        self.place_id = place_id
        self.reason = reason
