"""CLI job to look up restaurants for a zip code and print the response payload."""

import argparse
import json
import logging
import sys

from restaurant_finder.core.db import init_schema
from restaurant_finder.core.errors import RestaurantFinderError
from restaurant_finder.jobs.pipeline import find_restaurants
from restaurant_finder.models import serialize_restaurants

logger = logging.getLogger(__name__)


def run_query_job(*, zip_code: str, init_db: bool = False) -> dict:
    if init_db:
        init_schema()

    result = find_restaurants(zip_code)
    logger.info(
        "Completed run: zip_code=%s restaurants=%d cached=%s",
        result.zip_code,
        len(result.restaurants),
        result.from_cache,
    )
    return {"restaurants": serialize_restaurants(result.restaurants)}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find restaurants near a zip code")
    parser.add_argument("--zip", dest="zip_code", required=True, help="Zip code to search around")
    parser.add_argument(
        "--init-db",
        dest="init_db",
        action="store_true",
        help="Create the cache tables before searching",
    )
    return parser


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    parser = build_parser()
    args = parser.parse_args()

    try:
        payload = run_query_job(zip_code=args.zip_code, init_db=args.init_db)
    except RestaurantFinderError as exc:
        logger.error("Search failed: %s", exc)
        raise SystemExit(2 if exc.status_code < 500 else 1) from exc

    json.dump(payload, sys.stdout, indent=2)
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
