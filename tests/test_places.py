import json

import pytest
import requests

from tripcraft.api import places as places_module
from tripcraft.api.models import PlaceRecord
from tripcraft.api.places import load_places, match, parse_places


@pytest.fixture(autouse=True)
def clear_cache():
    load_places.cache_clear()
    yield
    load_places.cache_clear()


def test_label_with_and_without_subcountry():
    assert PlaceRecord("Paris", "France", "Île-de-France").label == "Paris, Île-de-France, France"
    assert PlaceRecord("Monaco", "Monaco").label == "Monaco, Monaco"


@pytest.mark.parametrize("query", ["", "p", "P", " "])
def test_short_queries_never_match(places, query):
    assert match(query, places) == []


def test_empty_places():
    assert match("Paris", []) == []


def test_case_insensitive_substring_in_source_order(places):
    assert match("PAR", places) == [
        "Paris, Île-de-France, France",
        "Parramatta, New South Wales, Australia",
        "Paradise, Nevada, United States",
    ]


def test_matches_on_country_and_subcountry(places):
    assert match("peru", places) == ["Lima, Lima region, Peru"]
    assert match("nevada", places) == ["Paradise, Nevada, United States"]


def test_whitespace_query_counts_toward_length(places):
    # two spaces: long enough to search, matches labels containing two spaces
    assert match("  ", places) == []
    assert match(", ", places) == [p.label for p in places]


def test_truncated_to_limit():
    many = [PlaceRecord(f"Springfield {i}", "United States") for i in range(20)]
    result = match("spring", many)
    assert len(result) == 7
    assert result == [p.label for p in many[:7]]


def test_limit_is_configurable(monkeypatch):
    many = [PlaceRecord(f"Springfield {i}", "United States") for i in range(20)]
    assert len(match("spring", many, limit=3)) == 3
    monkeypatch.setenv("SUGGESTION_LIMIT", "5")
    assert len(match("spring", many)) == 5


def test_match_is_idempotent(places):
    assert match("ar", places) == match("ar", places)


def test_parse_places_skips_malformed_rows():
    rows = [
        {"name": "Lyon", "country": "France", "subcountry": "Auvergne-Rhône-Alpes"},
        {"name": "Nowhere"},
        "not a record",
        {"name": "Vatican City", "country": "Vatican", "subcountry": None},
    ]
    assert parse_places(rows) == [
        PlaceRecord("Lyon", "France", "Auvergne-Rhône-Alpes"),
        PlaceRecord("Vatican City", "Vatican", None),
    ]


def test_load_places_from_file(tmp_path, monkeypatch):
    data = tmp_path / "cities.json"
    data.write_text(json.dumps([{"name": "Oslo", "country": "Norway", "subcountry": "Oslo"}]))
    monkeypatch.setenv("CITIES_DATA_PATH", str(data))

    assert load_places() == (PlaceRecord("Oslo", "Norway", "Oslo"),)


def test_load_places_from_url(monkeypatch):
    monkeypatch.delenv("CITIES_DATA_PATH", raising=False)
    monkeypatch.setenv("CITIES_DATA_URL", "https://example.invalid/cities.json")

    class FakeResponse:
        def raise_for_status(self):
            pass

        def json(self):
            return [{"name": "Quito", "country": "Ecuador"}]

    calls = []

    def fake_get(url, timeout):
        calls.append(url)
        return FakeResponse()

    monkeypatch.setattr(places_module.requests, "get", fake_get)

    assert load_places() == (PlaceRecord("Quito", "Ecuador"),)
    load_places()
    assert calls == ["https://example.invalid/cities.json"]


def test_load_failure_yields_empty_list(monkeypatch):
    monkeypatch.delenv("CITIES_DATA_PATH", raising=False)
    monkeypatch.setenv("CITIES_DATA_URL", "https://example.invalid/cities.json")

    def fake_get(url, timeout):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(places_module.requests, "get", fake_get)
    assert load_places() == ()


def test_nothing_configured(monkeypatch):
    monkeypatch.delenv("CITIES_DATA_PATH", raising=False)
    monkeypatch.delenv("CITIES_DATA_URL", raising=False)
    assert load_places() == ()
