"""Utilities for transforming Google Places responses into pipeline models."""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from restaurant_finder.etl.genre import classify
from restaurant_finder.etl.hours import is_open_now
from restaurant_finder.models import OpeningPeriod, RawPlace, RestaurantRecord

logger = logging.getLogger(__name__)


def _parse_hhmm(value: Any) -> Optional[int]:
    try:
        return int(str(value), 10)
    except (TypeError, ValueError):
        return None


def to_raw_place(result: Dict[str, Any]) -> RawPlace:
    price_level = result.get("price_level")
    return RawPlace(
        place_id=result.get("place_id") or None,
        name=result.get("name") or "",
        category_tags=tuple(result.get("types") or ()),
        price_level=price_level if isinstance(price_level, int) and not isinstance(price_level, bool) else None,
        raw=result,
    )


def parse_periods(periods: Iterable[Dict[str, Any]]) -> List[OpeningPeriod]:
    parsed: List[OpeningPeriod] = []
    for period in periods or []:
        opening = period.get("open") or {}
        day = opening.get("day")
        open_time = _parse_hhmm(opening.get("time"))
        if day is None or open_time is None:
            logger.debug("Skipping opening period without a usable open time: %s", period)
            continue
        closing = period.get("close") or {}
        parsed.append(
            OpeningPeriod(
                day_of_week=int(day),
                open_time=open_time,
                close_time=_parse_hhmm(closing.get("time")) if closing else None,
            )
        )
    return parsed


def extract_open_status(details: Dict[str, Any], now: Optional[datetime] = None) -> Optional[bool]:
    """Resolve open status: current hours flag, then legacy flag, then weekly periods."""
    current_hours = details.get("current_opening_hours") or {}
    legacy_hours = details.get("opening_hours") or {}

    if current_hours.get("open_now") is not None:
        return bool(current_hours["open_now"])
    if legacy_hours.get("open_now") is not None:
        return bool(legacy_hours["open_now"])
    if legacy_hours.get("periods"):
        return is_open_now(parse_periods(legacy_hours["periods"]), now)
    return None


def to_restaurant(place: RawPlace, is_open: Optional[bool] = None) -> RestaurantRecord:
    return RestaurantRecord(
        name=place.name,
        genre=classify(place.name, place.category_tags),
        price_level=place.price_level,
        is_open=is_open,
    )
