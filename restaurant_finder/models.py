"""Core data models shared by the restaurant search pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

DEFAULT_GENRE = "restaurant"


@dataclass(frozen=True, slots=True)
class RestaurantRecord:
    """A single classified restaurant as returned to callers and cached per zip code."""

    name: str
    genre: str = DEFAULT_GENRE
    price_level: Optional[int] = None
    is_open: Optional[bool] = None

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the API shape; unknown values are omitted rather than sent as false/zero."""
        payload: Dict[str, Any] = {"name": self.name, "genre": self.genre}
        if self.price_level is not None:
            payload["priceLevel"] = self.price_level
        if self.is_open is not None:
            payload["isOpen"] = self.is_open
        return payload


@dataclass(frozen=True, slots=True)
class ZipCodeSnapshot:
    """One immutable aggregated result set for a zip code."""

    id: int
    zip_code: str
    retrieved_at: datetime
    restaurants: Tuple[RestaurantRecord, ...] = ()


@dataclass(frozen=True, slots=True)
class RawPlace:
    """Place summary from a text search page; only lives for one pipeline run."""

    place_id: Optional[str]
    name: str
    category_tags: Tuple[str, ...] = ()
    price_level: Optional[int] = None
    raw: Optional[Dict[str, Any]] = field(default=None, repr=False, compare=False)


@dataclass(frozen=True, slots=True)
class OpeningPeriod:
    """Weekly opening window; days count from Sunday = 0, times are HHMM integers."""

    day_of_week: int
    open_time: int
    close_time: Optional[int] = None


def serialize_restaurants(restaurants: List[RestaurantRecord]) -> List[Dict[str, Any]]:
    return [restaurant.to_payload() for restaurant in restaurants]
