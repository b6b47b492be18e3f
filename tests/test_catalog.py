"""Tests for the catalog filter and catalog stores."""

import pytest
import requests

from art_navigator.catalog import get_catalog, get_catalog_names
from art_navigator.catalog.data import ARTWORKS
from art_navigator.catalog.filters import filter_artworks, matches
from art_navigator.catalog.static import StaticCatalog
from art_navigator.catalog.supabase import SupabaseCatalog, parse_total, row_to_artwork
from art_navigator.models import CanonicalFilter, CatalogQuery, TimeRange

GET = "art_navigator.catalog.supabase.requests.get"


def artwork(artwork_id):
    return next(a for a in ARTWORKS if a.id == artwork_id)


def test_renaissance_italy_matches_two():
    canonical = CanonicalFilter(time_range=TimeRange(1400, 1600), location="Italy")
    found = filter_artworks(ARTWORKS, canonical)
    assert sorted(a.year for a in found) == [1485, 1503]
    assert {a.title for a in found} == {"Mona Lisa", "The Birth of Venus"}


def test_year_bounds_are_inclusive():
    mona_lisa = artwork("1")
    assert matches(mona_lisa, CanonicalFilter(time_range=TimeRange(1503, 1503)))
    assert not matches(mona_lisa, CanonicalFilter(time_range=TimeRange(1504, 1600)))
    assert not matches(mona_lisa, CanonicalFilter(time_range=TimeRange(1400, 1502)))


def test_absent_fields_match_everything():
    assert filter_artworks(ARTWORKS, CanonicalFilter()) == ARTWORKS


@pytest.mark.parametrize(
    "canonical, expected_ids",
    [
        (CanonicalFilter(location="Spain"), {"3", "6"}),
        (CanonicalFilter(movement="Surrealism"), {"6"}),
        (CanonicalFilter(artist="Grant Wood"), {"8"}),
        (CanonicalFilter(location="Spain", artist="Grant Wood"), set()),
        (CanonicalFilter(location="德国"), set()),
    ],
)
def test_equality_filters(canonical, expected_ids):
    assert {a.id for a in filter_artworks(ARTWORKS, canonical)} == expected_ids


class TestStaticCatalog:
    def test_list_with_limit_reports_total(self, catalog):
        result = catalog.list(CatalogQuery(limit=3))
        assert result.total_count == 8
        assert [a.year for a in result.artworks] == [1485, 1503, 1665]

    def test_offset(self, catalog):
        result = catalog.list(CatalogQuery(limit=2, offset=6))
        assert [a.year for a in result.artworks] == [1931, 1937]

    def test_list_by_country_sorted_by_year(self, catalog):
        result = catalog.list_by_country("Spain", TimeRange(1900, 2000))
        assert [a.title for a in result.artworks] == ["The Persistence of Memory", "Guernica"]

    def test_search(self, catalog):
        assert [a.id for a in catalog.search("venus").artworks] == ["7"]
        assert len(catalog.search("  ").artworks) == 8

    def test_get_by_id(self, catalog):
        assert catalog.get_by_id("4").title == "The Great Wave off Kanagawa"
        assert catalog.get_by_id("missing") is None

    def test_country_counts(self, catalog):
        assert catalog.country_counts(TimeRange(1900, 1980)) == {"Spain": 2, "United States": 1}

    def test_distinct_values(self, catalog):
        assert catalog.countries() == ["France", "Italy", "Japan", "Netherlands", "Spain", "United States"]
        assert "Leonardo da Vinci" in catalog.artists()
        assert "Ukiyo-e" in catalog.movements()


class BrokenCatalog(StaticCatalog):
    short_name = "BROKEN"

    def _do_list(self, query):
        raise requests.ConnectionError("offline")


def test_lookup_failure_returns_empty_with_log(log_lines):
    catalog = BrokenCatalog()
    catalog.set_logger(lambda level, message: log_lines.append((level, message)))

    result = catalog.list_by_country("Italy", TimeRange(1400, 1600))

    assert result.artworks == []
    assert result.total_count == 0
    assert "Could not connect" in result.errors[0]
    assert ("ERROR", "[CATALOG:BROKEN] List by country Italy (1400-1600): connection failed") in log_lines
    assert catalog.country_counts() == {}


def test_registry():
    assert set(get_catalog_names()) == {"STATIC", "SUPABASE"}
    assert isinstance(get_catalog("STATIC"), StaticCatalog)
    with pytest.raises(ValueError):
        get_catalog("MISSING")


class TestSupabaseCatalog:
    ROW = {
        "id": "a1",
        "title": "Primavera",
        "artist_name": "Sandro Botticelli",
        "creation_year": 1482,
        "period": "Renaissance",
        "country": "Italy",
        "city": "Florence",
        "latitude": 43.77,
        "longitude": 11.25,
        "description": None,
        "image_url": None,
        "tags": ["movement:Early Renaissance", "medium:Tempera on panel"],
    }

    @pytest.fixture
    def store(self, settings):
        settings.supabase_url = "https://example.supabase.co/"
        settings.supabase_key = "anon"
        return SupabaseCatalog(settings)

    def response(self, mocker, rows, content_range=None, status=200):
        response = mocker.Mock()
        response.status_code = status
        response.json.return_value = rows
        response.headers = {"Content-Range": content_range} if content_range else {}
        if status >= 400:
            response.raise_for_status.side_effect = requests.HTTPError(response=response)
        return response

    def test_list_builds_postgrest_params(self, mocker, store):
        get = mocker.patch(GET, return_value=self.response(mocker, [self.ROW], "0-0/12"))

        result = store.list(CatalogQuery(
            time_range=TimeRange(1400, 1600), country="Italy", movement="Early Renaissance",
            artist="Botticelli", limit=10,
        ))

        assert result.total_count == 12
        assert result.artworks[0].movement == "Early Renaissance"
        args, kwargs = get.call_args
        assert args[0] == "https://example.supabase.co/rest/v1/artworks"
        params = kwargs["params"]
        assert ("creation_year", "gte.1400") in params
        assert ("creation_year", "lte.1600") in params
        assert ("country", "eq.Italy") in params
        assert ("artist_name", "ilike.*Botticelli*") in params
        assert ("tags", "cs.{movement:Early Renaissance}") in params
        assert ("limit", "10") in params
        assert kwargs["headers"]["Prefer"] == "count=exact"
        assert kwargs["headers"]["apikey"] == "anon"

    def test_search_params(self, mocker, store):
        get = mocker.patch(GET, return_value=self.response(mocker, [self.ROW]))
        assert [a.title for a in store.search("venus").artworks] == ["Primavera"]
        params = dict(get.call_args.kwargs["params"])
        assert params["or"] == "(title.ilike.*venus*,artist_name.ilike.*venus*,description.ilike.*venus*)"
        assert params["limit"] == "50"

    def test_http_error_is_recovered(self, mocker, store):
        mocker.patch(GET, return_value=self.response(mocker, [], status=500))
        result = store.list_by_country("Italy", TimeRange(1400, 1600))
        assert result.artworks == []
        assert "status 500" in result.errors[0]

    def test_timeout_is_recovered(self, mocker, store):
        mocker.patch(GET, side_effect=requests.Timeout())
        result = store.list()
        assert "took too long" in result.errors[0]

    def test_bad_rows_are_skipped(self, mocker, store):
        bad = dict(self.ROW, creation_year="not a year")
        mocker.patch(GET, return_value=self.response(mocker, [bad, self.ROW]))
        assert len(store.list().artworks) == 1


def test_row_defaults():
    converted = row_to_artwork({"id": 5, "title": "Study"})
    assert converted.id == "5"
    assert converted.artist == "Unknown Artist"
    assert converted.country == "Unknown Country"
    assert converted.movement == "Unknown Movement"
    assert converted.year == 0
    assert converted.image_url.startswith("https://")


def test_parse_total():
    assert parse_total("0-9/42", 10) == 42
    assert parse_total("*/0", 3) == 0
    assert parse_total("0-9/*", 10) == 10
    assert parse_total(None, 7) == 7
