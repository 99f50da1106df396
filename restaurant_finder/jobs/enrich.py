"""Adds live open/closed status to search results with bounded concurrency."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import List, Optional, Sequence

from restaurant_finder.core.errors import ItemEnrichmentFailure, RestaurantFinderError
from restaurant_finder.etl.transform import extract_open_status, to_restaurant
from restaurant_finder.models import RawPlace, RestaurantRecord
from restaurant_finder.vendors import google_places

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 10
BATCH_DELAY_SECONDS = 0.1


def fetch_open_status(place: RawPlace, api_key: str, now: Optional[datetime] = None) -> Optional[bool]:
    if not place.place_id:
        raise ItemEnrichmentFailure(None, "missing place_id")
    try:
        details = google_places.place_details(place_id=place.place_id, api_key=api_key)
    except RestaurantFinderError as exc:
        raise ItemEnrichmentFailure(place.place_id, str(exc)) from exc

    if not details.get("opening_hours") and not details.get("current_opening_hours"):
        logger.warning("No opening_hours data for place: %s (%s)", place.name, place.place_id)
    return extract_open_status(details, now)


def enrich_place(place: RawPlace, api_key: str, now: Optional[datetime] = None) -> RestaurantRecord:
    """Build the record for one place; any details failure leaves ``is_open`` unknown."""
    if not place.place_id:
        logger.warning("No place_id found for place: %s", place.name)
        return to_restaurant(place)

    try:
        is_open = fetch_open_status(place, api_key, now)
    except ItemEnrichmentFailure as exc:
        logger.warning("%s", exc)
        return to_restaurant(place)
    except Exception as exc:  # noqa: BLE001
        logger.error("Failed to fetch details for place %s: %s", place.place_id, exc)
        return to_restaurant(place)
    return to_restaurant(place, is_open)


def enrich_places(
    places: Sequence[RawPlace],
    api_key: str,
    batch_size: int = DEFAULT_BATCH_SIZE,
    now: Optional[datetime] = None,
) -> List[RestaurantRecord]:
    """Enrich places batch by batch; the output keeps the input order."""
    if not places:
        return []

    batch_size = max(1, batch_size)
    restaurants: List[Optional[RestaurantRecord]] = [None] * len(places)

    with ThreadPoolExecutor(max_workers=batch_size) as executor:
        for start in range(0, len(places), batch_size):
            batch = places[start:start + batch_size]
            futures = [executor.submit(enrich_place, place, api_key, now) for place in batch]
            for offset, future in enumerate(futures):
                restaurants[start + offset] = future.result()
            logger.debug("Enriched places %d-%d of %d", start + 1, start + len(batch), len(places))

            if start + batch_size < len(places):
                time.sleep(BATCH_DELAY_SECONDS)

    return restaurants
