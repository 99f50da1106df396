import threading
from datetime import datetime

import pytest

from restaurant_finder.core.errors import NetworkError, ProviderError
from restaurant_finder.jobs import enrich
from restaurant_finder.models import RawPlace

SUNDAY_NOON = datetime(2024, 6, 2, 12, 0)


def _places(count, prefix="p"):
    return [
        RawPlace(place_id=f"{prefix}{i}", name=f"Place {i}", category_tags=("restaurant",), price_level=i % 5)
        for i in range(count)
    ]


@pytest.fixture
def sleeps(monkeypatch):
    recorded = []
    monkeypatch.setattr(enrich.time, "sleep", recorded.append)
    return recorded


def test_empty_input(sleeps):
    assert enrich.enrich_places([], "key") == []


def test_preserves_order_when_later_items_finish_first(monkeypatch, sleeps):
    places = _places(10)
    finished = []
    lock = threading.Lock()
    done = [threading.Event() for _ in places]

    def fake_details(place_id, api_key):
        index = int(place_id[1:])
        # each place waits for the one after it, so completion runs last to first
        if index + 1 < len(done):
            done[index + 1].wait(timeout=5)
        with lock:
            finished.append(place_id)
        done[index].set()
        return {"opening_hours": {"open_now": index % 2 == 0}}

    monkeypatch.setattr(enrich.google_places, "place_details", fake_details)

    records = enrich.enrich_places(places, "key")

    assert [r.name for r in records] == [p.name for p in places]
    assert [r.is_open for r in records] == [i % 2 == 0 for i in range(10)]
    assert finished == [f"p{i}" for i in reversed(range(10))]


def test_batches_are_throttled(monkeypatch, sleeps):
    places = _places(25)
    active = []
    peak = []
    lock = threading.Lock()

    def fake_details(place_id, api_key):
        with lock:
            active.append(place_id)
            peak.append(len(active))
        threading.Event().wait(0.005)
        with lock:
            active.remove(place_id)
        return {}

    monkeypatch.setattr(enrich.google_places, "place_details", fake_details)

    records = enrich.enrich_places(places, "key", batch_size=10)

    assert len(records) == 25
    assert max(peak) <= 10
    assert sleeps == [enrich.BATCH_DELAY_SECONDS, enrich.BATCH_DELAY_SECONDS]


def test_place_without_id_is_never_fetched(monkeypatch, sleeps):
    calls = []

    def fake_details(place_id, api_key):
        calls.append(place_id)
        return {"opening_hours": {"open_now": True}}

    monkeypatch.setattr(enrich.google_places, "place_details", fake_details)
    place = RawPlace(place_id=None, name="Sushi Spot", category_tags=(), price_level=2)

    [record] = enrich.enrich_places([place], "key")

    assert calls == []
    assert record.is_open is None
    assert record.genre == "japanese"
    assert record.price_level == 2


@pytest.mark.parametrize("error", [ProviderError("NOT_FOUND", "gone"), NetworkError("down"), KeyError("boom")])
def test_detail_failures_degrade_single_item(monkeypatch, sleeps, error):
    def fake_details(place_id, api_key):
        if place_id == "p1":
            raise error
        return {"current_opening_hours": {"open_now": True}}

    monkeypatch.setattr(enrich.google_places, "place_details", fake_details)

    records = enrich.enrich_places(_places(3), "key")

    assert [r.is_open for r in records] == [True, None, True]
    assert records[1].price_level == 1
    assert records[1].genre == "restaurant"


def test_price_level_unknown_stays_unknown(monkeypatch, sleeps):
    monkeypatch.setattr(enrich.google_places, "place_details", lambda place_id, api_key: {})
    place = RawPlace(place_id="p0", name="Somewhere", price_level=None)

    [record] = enrich.enrich_places([place], "key")

    assert record.price_level is None
    assert record.is_open is None


def test_open_status_computed_from_periods(monkeypatch, sleeps):
    details = {"opening_hours": {"periods": [{"open": {"day": 0, "time": "2200"}, "close": {"day": 1, "time": "0200"}}]}}
    monkeypatch.setattr(enrich.google_places, "place_details", lambda place_id, api_key: details)

    [record] = enrich.enrich_places(_places(1), "key", now=SUNDAY_NOON)

    assert record.is_open is False


def test_missing_hours_logs_warning(monkeypatch, sleeps, caplog):
    monkeypatch.setattr(enrich.google_places, "place_details", lambda place_id, api_key: {})

    with caplog.at_level("WARNING"):
        enrich.enrich_places(_places(1), "key")

    assert "No opening_hours data" in " ".join(caplog.messages)
