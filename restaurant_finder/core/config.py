"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_FRONTEND_URL = "http://localhost:5173"


@dataclass(frozen=True)
class Settings:
    google_api_key: str
    database_url: str
    worker_port: int = 9000
    frontend_url: str = DEFAULT_FRONTEND_URL
    enrich_batch_size: int = 10


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    google_api_key = os.getenv("GOOGLE_PLACES_API_KEY") or os.getenv("GOOGLE_API_KEY", "")
    database_url = os.getenv("DATABASE_URL", "")
    worker_port = int(os.getenv("WORKER_PORT") or os.getenv("PORT") or "9000")
    frontend_url = os.getenv("FRONTEND_URL") or DEFAULT_FRONTEND_URL
    enrich_batch_size = int(os.getenv("ENRICH_BATCH_SIZE", "10"))
    if enrich_batch_size < 1:
        logger.warning("ENRICH_BATCH_SIZE=%d is not positive; falling back to 10.", enrich_batch_size)
        enrich_batch_size = 10

    if not database_url:
        logger.warning("DATABASE_URL is not set; cached results will not be read or stored.")
    if not google_api_key:
        logger.warning("GOOGLE_PLACES_API_KEY is not configured; uncached searches will fail.")

    return Settings(
        google_api_key=google_api_key,
        database_url=database_url,
        worker_port=worker_port,
        frontend_url=frontend_url,
        enrich_batch_size=enrich_batch_size,
    )
