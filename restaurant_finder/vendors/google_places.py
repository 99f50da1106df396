"""Client utilities for the Google Places API."""

import logging
from typing import Any, Dict, Optional

import requests

from restaurant_finder.core.errors import NetworkError, ProviderError

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://maps.googleapis.com/maps/api/place"
_TIMEOUT = 10

SUCCESS_STATUSES = {"OK", "ZERO_RESULTS"}
OPENING_HOURS_FIELDS = "opening_hours,current_opening_hours"

_REQUEST_DENIED_MESSAGE = """Google Places API error: REQUEST_DENIED. This usually means:
1. Places API is not enabled in Google Cloud Console
2. Billing is not enabled on your Google Cloud project
3. API key has restrictions (IP/referrer) blocking the request
4. API key is invalid

Please check: https://console.cloud.google.com/apis/library/places-backend.googleapis.com"""


def describe_status(status: Optional[str], error_message: Optional[str] = None) -> str:
    """Build the user-facing explanation for a failed Places status."""
    if status == "REQUEST_DENIED":
        return _REQUEST_DENIED_MESSAGE
    message = f"Google Places API error: {status}"
    if error_message:
        message += f". {error_message}"
    return message


def _get(endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
    try:
        response = _SESSION.get(f"{_BASE_URL}/{endpoint}/json", params=params, timeout=_TIMEOUT)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as exc:
        logger.error("%s request failed: %s", endpoint, exc)
        raise NetworkError(f"Google Places {endpoint} request failed") from exc
    except ValueError as exc:
        logger.error("%s returned a non-JSON body: %s", endpoint, exc)
        raise NetworkError(f"Google Places {endpoint} returned an unreadable response") from exc


def _check_status(operation: str, payload: Dict[str, Any]) -> str:
    status = payload.get("status")
    if status not in SUCCESS_STATUSES:
        logger.error("%s failed: status=%s, error_message=%s", operation, status, payload.get("error_message"))
        raise ProviderError(status, describe_status(status, payload.get("error_message")))
    return status


def text_search(
    query: Optional[str],
    api_key: str,
    pagetoken: Optional[str] = None,
    place_type: Optional[str] = None,
) -> Dict[str, Any]:
    params: Dict[str, Any] = {"key": api_key}
    if query:
        params["query"] = query
    if place_type:
        params["type"] = place_type
    if pagetoken:
        params["pagetoken"] = pagetoken
    payload = _get("textsearch", params)
    _check_status("text_search", payload)
    return payload


def place_details(place_id: str, api_key: str, fields: str = OPENING_HOURS_FIELDS) -> Dict[str, Any]:
    params = {"place_id": place_id, "key": api_key, "fields": fields}
    payload = _get("details", params)
    _check_status("place_details", payload)
    return payload.get("result") or {}
