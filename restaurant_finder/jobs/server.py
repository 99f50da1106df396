"""HTTP entrypoint for zip code restaurant searches (Cloud Run friendly)."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict

from flask import Flask, jsonify, request

from restaurant_finder.core.config import get_settings
from restaurant_finder.core.errors import (
    ConfigurationError,
    NetworkError,
    ProviderError,
    ValidationError,
)
from restaurant_finder.jobs.pipeline import find_restaurants
from restaurant_finder.models import serialize_restaurants

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

GENERIC_ERROR = "Failed to fetch restaurants"

# ---------- App ----------
app = Flask(__name__)


@app.after_request
def add_cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = get_settings().frontend_url
    response.headers["Access-Control-Allow-Methods"] = "POST, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
    response.headers.add("Vary", "Origin")
    return response


# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    """Simple root to avoid 404 on GET /"""
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    """Lightweight health endpoint; reads settings only, never touches the database."""
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "places_api_configured": bool(settings.google_api_key),
                "cache_configured": bool(settings.database_url),
                "revision": os.getenv("K_REVISION", "unknown"),
            }
        ),
        200,
    )


@app.post("/search")
@app.post("/api/restaurants")
def search_restaurants() -> Any:
    """
    Find restaurants near a zip code.
    Required JSON fields: zipCode (string)
    """
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    zip_code = payload.get("zipCode") if isinstance(payload, dict) else None

    try:
        result = find_restaurants(zip_code)
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), exc.status_code
    except ConfigurationError as exc:
        logger.error("Search unavailable: %s", exc)
        return jsonify({"error": str(exc)}), exc.status_code
    except ProviderError as exc:
        return jsonify({"error": exc.message}), exc.status_code
    except NetworkError as exc:
        logger.error("Search failed for zip_code=%s: %s", zip_code, exc)
        return jsonify({"error": GENERIC_ERROR}), exc.status_code
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected failure for zip_code=%s: %s", zip_code, exc)
        return jsonify({"error": GENERIC_ERROR}), 500

    logger.info(
        "Returning %d restaurants for zip_code=%s (cached=%s)",
        len(result.restaurants),
        result.zip_code,
        result.from_cache,
    )
    return jsonify({"restaurants": serialize_restaurants(result.restaurants)}), 200


def main() -> None:
    """Cloud Run injects PORT; locally fall back to WORKER_PORT."""
    port = get_settings().worker_port
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
