import argparse

import pytest

from restaurant_finder.core.errors import ProviderError, ValidationError
from restaurant_finder.jobs import run_query
from restaurant_finder.jobs.pipeline import PipelineResult
from restaurant_finder.models import RestaurantRecord


@pytest.fixture
def fake_pipeline(monkeypatch):
    recorded = {"zip_codes": [], "schema": 0}

    def fake_find(zip_code):
        recorded["zip_codes"].append(zip_code)
        return PipelineResult(zip_code=zip_code, restaurants=[RestaurantRecord(name="Diner 1", genre="american")])

    def fake_init_schema():
        recorded["schema"] += 1

    monkeypatch.setattr(run_query, "find_restaurants", fake_find)
    monkeypatch.setattr(run_query, "init_schema", fake_init_schema)
    return recorded


def test_run_query_job_returns_payload(fake_pipeline):
    payload = run_query.run_query_job(zip_code="94103")

    assert payload == {"restaurants": [{"name": "Diner 1", "genre": "american"}]}
    assert fake_pipeline["zip_codes"] == ["94103"]
    assert fake_pipeline["schema"] == 0


def test_run_query_job_can_create_schema(fake_pipeline):
    run_query.run_query_job(zip_code="94103", init_db=True)
    assert fake_pipeline["schema"] == 1


def test_build_parser():
    parser = run_query.build_parser()
    args = parser.parse_args(["--zip", "94103"])
    assert isinstance(parser, argparse.ArgumentParser)
    assert args.zip_code == "94103"
    assert args.init_db is False


@pytest.mark.parametrize("error, code", [(ValidationError("Zip code is required"), 2), (ProviderError("DENIED", "x"), 1)])
def test_main_exit_codes(monkeypatch, error, code):
    def failing_job(**kwargs):
        raise error

    monkeypatch.setattr(run_query, "run_query_job", failing_job)
    monkeypatch.setattr("sys.argv", ["run_query", "--zip", "94103"])

    with pytest.raises(SystemExit) as excinfo:
        run_query.main()
    assert excinfo.value.code == code


def test_main_prints_json(monkeypatch, capsys, fake_pipeline):
    monkeypatch.setattr("sys.argv", ["run_query", "--zip", "94103"])

    run_query.main()

    assert '"name": "Diner 1"' in capsys.readouterr().out
