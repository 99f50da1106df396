"""Collects restaurant search results for a zip code across Places result pages."""

import logging
import time
from typing import List

from restaurant_finder.core.errors import ProviderError
from restaurant_finder.etl.transform import to_raw_place
from restaurant_finder.models import RawPlace
from restaurant_finder.vendors import google_places

logger = logging.getLogger(__name__)

MAX_PLACES = 60  # 3 pages x 20 results, the most text search will return
# next_page_token is rejected as INVALID_REQUEST until it has propagated
PAGE_TOKEN_DELAY_SECONDS = 2.0


def build_query(zip_code: str) -> str:
    return f"restaurants in {zip_code}"


def search_places(zip_code: str, api_key: str) -> List[RawPlace]:
    """Fetch up to MAX_PLACES restaurants near ``zip_code`` in page order.

    A failed first page raises ProviderError/NetworkError. A later page that comes
    back without status OK ends pagination and keeps what was collected so far.
    """
    query = build_query(zip_code)
    logger.info("Running Places text search for query=%s", query)

    response = google_places.text_search(query=query, api_key=api_key, place_type="restaurant")
    results = list(response.get("results") or [])
    logger.info("Fetched %d results on page 1", len(results))

    page_token = response.get("next_page_token")
    pages = 1
    while page_token and len(results) < MAX_PLACES:
        time.sleep(PAGE_TOKEN_DELAY_SECONDS)
        try:
            response = google_places.text_search(query=None, api_key=api_key, pagetoken=page_token)
        except ProviderError as exc:
            logger.warning("Stopping pagination after page %d: %s", pages, exc.status)
            break
        if response.get("status") != "OK":
            logger.info("Stopping pagination after page %d: status=%s", pages, response.get("status"))
            break

        page_results = response.get("results") or []
        pages += 1
        results.extend(page_results)
        logger.info("Fetched %d results on page %d", len(page_results), pages)
        page_token = response.get("next_page_token")

    places = [to_raw_place(result) for result in results[:MAX_PLACES]]
    logger.info("Collected %d places for zip_code=%s across %d pages", len(places), zip_code, pages)
    return places
