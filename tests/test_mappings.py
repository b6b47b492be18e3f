"""Tests for map-click resolution."""

import pytest

from art_navigator.catalog.data import ARTWORKS
from art_navigator.mappings import city_from_coordinates, country_from_coordinates, match_country


@pytest.mark.parametrize("artwork", ARTWORKS, ids=lambda a: a.title)
def test_catalog_coordinates_resolve_to_their_place(artwork):
    lng, lat = artwork.coordinates
    assert country_from_coordinates(lat, lng) == artwork.country
    assert city_from_coordinates(lat, lng) == artwork.city


def test_unknown_city_falls_back_to_country_default():
    assert city_from_coordinates(48.85, 2.35) == "Paris"


def test_open_ocean():
    assert country_from_coordinates(0.0, -30.0) == "Unknown Location"
    assert city_from_coordinates(0.0, -30.0) == "Unknown City"


def test_match_country_aliases():
    assert match_country("Dutch masters") == "Netherlands"
    assert match_country("去德国看看") == "Germany"
    assert match_country("nowhere") is None
