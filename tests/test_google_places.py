import pytest
import requests

from restaurant_finder.core.errors import NetworkError, ProviderError
from restaurant_finder.vendors import google_places


class DummyResponse:
    def __init__(self, status_code=200, payload=None, body_error=None):
        self.status_code = status_code
        self._payload = payload or {}
        self._body_error = body_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._body_error:
            raise self._body_error
        return self._payload


class DummySession:
    def __init__(self):
        self.calls = []
        self.response = None
        self.error = None

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.error:
            raise self.error
        return self.response


@pytest.fixture(autouse=True)
def patch_session(monkeypatch):
    session = DummySession()
    monkeypatch.setattr(google_places, "_SESSION", session)
    return session


def test_text_search_success(patch_session):
    patch_session.response = DummyResponse(payload={"status": "OK", "results": []})
    payload = google_places.text_search("restaurants in 94103", "key", place_type="restaurant")
    assert payload["status"] == "OK"
    url, params, timeout = patch_session.calls[0]
    assert "textsearch" in url
    assert params == {"query": "restaurants in 94103", "key": "key", "type": "restaurant"}
    assert timeout == 10


def test_text_search_with_page_token_only(patch_session):
    patch_session.response = DummyResponse(payload={"status": "OK", "results": []})
    google_places.text_search(None, "key", pagetoken="tok")
    _, params, _ = patch_session.calls[0]
    assert params == {"key": "key", "pagetoken": "tok"}


def test_text_search_zero_results_is_success(patch_session):
    patch_session.response = DummyResponse(payload={"status": "ZERO_RESULTS", "results": []})
    assert google_places.text_search("q", "key")["status"] == "ZERO_RESULTS"


def test_text_search_error_status(patch_session):
    patch_session.response = DummyResponse(payload={"status": "INVALID_REQUEST", "error_message": "bad"})
    with pytest.raises(ProviderError) as excinfo:
        google_places.text_search("pizza", "key")
    assert excinfo.value.status == "INVALID_REQUEST"
    assert excinfo.value.message == "Google Places API error: INVALID_REQUEST. bad"


def test_text_search_request_denied_explains_causes(patch_session):
    patch_session.response = DummyResponse(payload={"status": "REQUEST_DENIED", "error_message": "nope"})
    with pytest.raises(ProviderError) as excinfo:
        google_places.text_search("pizza", "key")
    message = excinfo.value.message
    assert message.startswith("Google Places API error: REQUEST_DENIED")
    assert "Billing is not enabled" in message
    assert "API key is invalid" in message


def test_text_search_transport_failure(patch_session):
    patch_session.error = requests.ConnectionError("unreachable")
    with pytest.raises(NetworkError):
        google_places.text_search("pizza", "key")


def test_text_search_http_error(patch_session):
    patch_session.response = DummyResponse(status_code=503)
    with pytest.raises(NetworkError):
        google_places.text_search("pizza", "key")


def test_text_search_unreadable_body(patch_session):
    patch_session.response = DummyResponse(body_error=ValueError("no json"))
    with pytest.raises(NetworkError):
        google_places.text_search("pizza", "key")


def test_place_details_success(patch_session):
    patch_session.response = DummyResponse(
        payload={"status": "OK", "result": {"opening_hours": {"open_now": True}}}
    )
    result = google_places.place_details("pid", "key")
    assert result == {"opening_hours": {"open_now": True}}
    _, params, _ = patch_session.calls[0]
    assert params["place_id"] == "pid"
    assert params["fields"] == "opening_hours,current_opening_hours"


def test_place_details_error(patch_session):
    patch_session.response = DummyResponse(payload={"status": "OVER_QUERY_LIMIT", "error_message": "limit"})
    with pytest.raises(ProviderError):
        google_places.place_details("pid", "key")
