"""Per zip code snapshot cache backed by the append-only search tables."""

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from restaurant_finder.core import db
from restaurant_finder.models import RestaurantRecord, ZipCodeSnapshot

logger = logging.getLogger(__name__)


def get_snapshot(zip_code: str) -> Optional[ZipCodeSnapshot]:
    """Return the most recent snapshot for ``zip_code`` or None if it was never searched."""
    zip_code = zip_code.strip()
    found = db.fetch_latest_search(zip_code)
    if found is None:
        return None

    (search_id, stored_zip_code, searched_at), rows = found
    restaurants = tuple(
        RestaurantRecord(name=name, genre=genre, price_level=price_level, is_open=is_open)
        for name, genre, price_level, is_open in rows
    )
    return ZipCodeSnapshot(
        id=search_id,
        zip_code=stored_zip_code,
        retrieved_at=searched_at,
        restaurants=restaurants,
    )


def save_snapshot(zip_code: str, restaurants: Sequence[RestaurantRecord]) -> int:
    """Store a new snapshot; earlier snapshots for the zip code are left untouched."""
    zip_code = zip_code.strip()
    rows = [
        {
            "name": restaurant.name,
            "genre": restaurant.genre,
            "price_level": restaurant.price_level,
            "is_open": restaurant.is_open,
        }
        for restaurant in restaurants
    ]
    snapshot_id = db.insert_search(zip_code, datetime.now(timezone.utc), rows)
    logger.info("Cached %d restaurants for zip_code=%s snapshot=%s", len(rows), zip_code, snapshot_id)
    return snapshot_id
