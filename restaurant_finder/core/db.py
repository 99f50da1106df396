"""Database helpers for the zip code result cache."""

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from psycopg2 import pool

from restaurant_finder.core.config import get_settings
from restaurant_finder.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

_connection_pool: Optional[pool.SimpleConnectionPool] = None

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS zip_code_searches (
    id BIGSERIAL PRIMARY KEY,
    zip_code TEXT NOT NULL,
    searched_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
CREATE INDEX IF NOT EXISTS zip_code_searches_by_zip_code
    ON zip_code_searches (zip_code, searched_at DESC, id DESC);

CREATE TABLE IF NOT EXISTS restaurants (
    id BIGSERIAL PRIMARY KEY,
    zip_code_search_id BIGINT NOT NULL REFERENCES zip_code_searches (id),
    position INTEGER NOT NULL,
    name TEXT NOT NULL,
    genre TEXT NOT NULL,
    price_level SMALLINT,
    is_open BOOLEAN
);
CREATE INDEX IF NOT EXISTS restaurants_by_zip_code_search
    ON restaurants (zip_code_search_id, position);
"""

_SELECT_LATEST_SEARCH = """
SELECT id, zip_code, searched_at
FROM zip_code_searches
WHERE zip_code = %(zip_code)s
ORDER BY searched_at DESC, id DESC
LIMIT 1;
"""

_SELECT_RESTAURANTS = """
SELECT name, genre, price_level, is_open
FROM restaurants
WHERE zip_code_search_id = %(zip_code_search_id)s
ORDER BY position ASC, id ASC;
"""

_INSERT_SEARCH = """
INSERT INTO zip_code_searches (zip_code, searched_at)
VALUES (%(zip_code)s, %(searched_at)s)
RETURNING id;
"""

_INSERT_RESTAURANT = """
INSERT INTO restaurants (
    zip_code_search_id,
    position,
    name,
    genre,
    price_level,
    is_open
) VALUES (
    %(zip_code_search_id)s,
    %(position)s,
    %(name)s,
    %(genre)s,
    %(price_level)s,
    %(is_open)s
);
"""


def init_pool(minconn: int = 1, maxconn: int = 5) -> pool.SimpleConnectionPool:
    """Initialise and return the shared connection pool."""
    global _connection_pool
    if _connection_pool is None:
        settings = get_settings()
        if not settings.database_url:
            raise ConfigurationError("DATABASE_URL is required for database connections")
        _connection_pool = pool.SimpleConnectionPool(
            minconn,
            maxconn,
            dsn=settings.database_url,
            connect_timeout=10,
        )
        logger.info("Database connection pool initialised")
    return _connection_pool


@contextmanager
def get_connection():
    """Context manager yielding a pooled connection."""
    pg_pool = init_pool()
    conn = pg_pool.getconn()
    try:
        yield conn
    finally:
        pg_pool.putconn(conn)


def init_schema() -> None:
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
    logger.info("Database schema ensured")


def fetch_latest_search(zip_code: str) -> Optional[Tuple[Tuple[Any, ...], List[Tuple[Any, ...]]]]:
    """Return the newest search row for a zip code together with its restaurant rows."""
    restaurant_rows: List[Tuple[Any, ...]] = []
    with get_connection() as conn:
        try:
            with conn.cursor() as cur:
                cur.execute(_SELECT_LATEST_SEARCH, {"zip_code": zip_code})
                search_row = cur.fetchone()
                if search_row is not None:
                    cur.execute(_SELECT_RESTAURANTS, {"zip_code_search_id": search_row[0]})
                    restaurant_rows = list(cur.fetchall())
        finally:
            # read-only; end the implicit transaction before the connection returns to the pool
            conn.rollback()
    if search_row is None:
        return None
    return search_row, restaurant_rows


def insert_search(zip_code: str, searched_at: datetime, restaurants: Sequence[Dict[str, Any]]) -> int:
    """Insert a search row and its restaurant rows in one transaction; returns the search id."""
    with get_connection() as conn:
        try:
            with conn.cursor() as cur:
                cur.execute(_INSERT_SEARCH, {"zip_code": zip_code, "searched_at": searched_at})
                search_id = cur.fetchone()[0]
                cur.executemany(
                    _INSERT_RESTAURANT,
                    [
                        {"zip_code_search_id": search_id, "position": position, **row}
                        for position, row in enumerate(restaurants)
                    ],
                )
            conn.commit()
        except Exception:
            conn.rollback()
            raise
    logger.debug("Inserted zip code search %s with %d restaurants", search_id, len(restaurants))
    return search_id
