"""Cache-or-fetch pipeline behind a zip code restaurant search."""

import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from restaurant_finder.core import cache
from restaurant_finder.core.config import get_settings
from restaurant_finder.core.errors import ConfigurationError, ValidationError
from restaurant_finder.jobs.enrich import enrich_places
from restaurant_finder.jobs.search import search_places
from restaurant_finder.models import RestaurantRecord, ZipCodeSnapshot

logger = logging.getLogger(__name__)


class PipelineState(str, enum.Enum):
    RECEIVED = "received"
    CACHE_LOOKUP = "cache_lookup"
    CACHE_HIT = "cache_hit"
    CACHE_MISS = "cache_miss"
    SEARCHING = "searching"
    ENRICHING = "enriching"
    PERSISTING = "persisting"
    RESPOND = "respond"
    FAILED = "failed"


@dataclass
class PipelineResult:
    zip_code: str
    restaurants: List[RestaurantRecord] = field(default_factory=list)
    from_cache: bool = False
    snapshot_id: Optional[int] = None
    states: List[PipelineState] = field(default_factory=list)

    def advance(self, state: PipelineState) -> None:
        logger.debug("zip_code=%s -> %s", self.zip_code, state.value)
        self.states.append(state)

    @property
    def state(self) -> Optional[PipelineState]:
        return self.states[-1] if self.states else None


def normalize_zip_code(zip_code: object) -> str:
    if not isinstance(zip_code, str) or not zip_code.strip():
        raise ValidationError("Zip code is required")
    return zip_code.strip()


def _lookup(zip_code: str) -> Optional[ZipCodeSnapshot]:
    try:
        return cache.get_snapshot(zip_code)
    except Exception as exc:  # noqa: BLE001
        logger.error("Cache lookup failed for zip_code=%s, fetching fresh results: %s", zip_code, exc)
        return None


def _persist(result: PipelineResult) -> None:
    if not result.restaurants:
        logger.info("No restaurants found for zip_code=%s; nothing to cache", result.zip_code)
        return
    result.advance(PipelineState.PERSISTING)
    try:
        result.snapshot_id = cache.save_snapshot(result.zip_code, result.restaurants)
    except Exception:  # noqa: BLE001
        logger.exception("Failed to cache restaurants for zip_code=%s", result.zip_code)


def find_restaurants(zip_code: object, now: Optional[datetime] = None) -> PipelineResult:
    """Return restaurants for a zip code, serving a cached snapshot when one has results.

    Raises ValidationError, ConfigurationError, ProviderError or NetworkError; the
    result of a failed run is never cached.
    """
    result = PipelineResult(zip_code=zip_code if isinstance(zip_code, str) else "")
    result.advance(PipelineState.RECEIVED)
    try:
        result.zip_code = normalize_zip_code(zip_code)

        result.advance(PipelineState.CACHE_LOOKUP)
        snapshot = _lookup(result.zip_code)
        if snapshot is not None and snapshot.restaurants:
            result.advance(PipelineState.CACHE_HIT)
            logger.info("Cache hit for zip_code=%s snapshot=%s", result.zip_code, snapshot.id)
            result.restaurants = list(snapshot.restaurants)
            result.from_cache = True
            result.snapshot_id = snapshot.id
            result.advance(PipelineState.RESPOND)
            return result

        result.advance(PipelineState.CACHE_MISS)
        logger.info("Cache miss for zip_code=%s", result.zip_code)
        settings = get_settings()
        if not settings.google_api_key:
            raise ConfigurationError("Google Places API key not configured")

        result.advance(PipelineState.SEARCHING)
        places = search_places(result.zip_code, settings.google_api_key)

        result.advance(PipelineState.ENRICHING)
        result.restaurants = enrich_places(
            places,
            settings.google_api_key,
            batch_size=settings.enrich_batch_size,
            now=now,
        )
    except Exception:
        result.advance(PipelineState.FAILED)
        raise

    _persist(result)
    result.advance(PipelineState.RESPOND)
    return result
