"""Country mappings.

This module maps free-text country mentions (Chinese and English) to the
canonical country names used as the catalog join key, and holds the coarse
geography the map needs to turn a click into a country and city.

When adding a country, add its aliases to COUNTRY_ALIASES and, if it should
be clickable on the map, its bounding box to COUNTRY_BOUNDS.
"""

from __future__ import annotations

# Canonical country names, in the order the heuristic extractor tests them
CANONICAL_COUNTRIES = [
    "Italy",
    "France",
    "Japan",
    "Spain",
    "Netherlands",
    "United States",
    "Germany",
    "China",
]

# canonical name -> (confirmation label, aliases matched case-insensitively)
COUNTRY_ALIASES: dict[str, tuple[str, list[str]]] = {
    "Italy": ("意大利", ["意大利", "italy", "italian"]),
    "France": ("法国", ["法国", "france", "french"]),
    "Japan": ("日本", ["日本", "japan", "japanese"]),
    "Spain": ("西班牙", ["西班牙", "spain", "spanish"]),
    "Netherlands": ("荷兰", ["荷兰", "netherlands", "holland", "dutch"]),
    "United States": ("美国", ["美国", "united states", "america"]),
    "Germany": ("德国", ["德国", "germany", "german"]),
    "China": ("中国", ["中国", "china", "chinese"]),
}

# Coarse (lat_min, lat_max, lng_min, lng_max) boxes. Checked in order, so
# smaller countries that overlap a larger box come first.
COUNTRY_BOUNDS: list[tuple[str, tuple[float, float, float, float]]] = [
    ("Netherlands", (50.7, 53.6, 3.3, 7.3)),
    ("Italy", (36.6, 47.1, 6.6, 18.6)),
    ("Spain", (36.0, 43.8, -9.4, 3.4)),
    ("France", (42.3, 51.1, -4.8, 8.3)),
    ("Germany", (47.3, 55.1, 5.9, 15.1)),
    ("Japan", (24.0, 45.6, 122.9, 146.0)),
    ("United States", (24.5, 49.4, -125.0, -66.9)),
    ("China", (18.2, 53.6, 73.5, 134.8)),
]

# Known city boxes from the catalog, checked before the per-country default
CITY_BOUNDS: list[tuple[str, tuple[float, float, float, float]]] = [
    ("Florence", (43.7, 43.8, 11.2, 11.3)),
    ("Saint-Rémy-de-Provence", (43.7, 43.8, 4.8, 4.9)),
    ("Madrid", (40.4, 40.5, -3.8, -3.6)),
    ("Delft", (52.0, 52.1, 4.3, 4.4)),
    ("Tokyo", (35.6, 35.7, 139.6, 139.8)),
    ("Eldon", (40.9, 41.0, -92.3, -92.1)),
    ("Figueres", (42.2, 42.3, 2.9, 3.0)),
]

DEFAULT_CITIES: dict[str, str] = {
    "Italy": "Florence",
    "France": "Paris",
    "Spain": "Madrid",
    "Netherlands": "Amsterdam",
    "Japan": "Tokyo",
    "United States": "New York",
    "Germany": "Berlin",
    "China": "Beijing",
}

UNKNOWN_LOCATION = "Unknown Location"
UNKNOWN_CITY = "Unknown City"


def get_canonical_countries() -> list[str]:
    """Return list of canonical country names for UI display."""
    return CANONICAL_COUNTRIES.copy()


def match_country(text: str) -> str | None:
    """Return the first canonical country whose alias appears in ``text``."""
    lowered = text.lower()
    for country in CANONICAL_COUNTRIES:
        _, aliases = COUNTRY_ALIASES[country]
        if any(alias in lowered for alias in aliases):
            return country
    return None


def country_label(country: str) -> str:
    """Display label used in confirmation messages."""
    label, _ = COUNTRY_ALIASES.get(country, (country, []))
    return label


def _inside(lat: float, lng: float, box: tuple[float, float, float, float]) -> bool:
    lat_min, lat_max, lng_min, lng_max = box
    return lat_min <= lat <= lat_max and lng_min <= lng <= lng_max


def country_from_coordinates(lat: float, lng: float) -> str:
    """Resolve a map click to a country name, or UNKNOWN_LOCATION."""
    for country, box in COUNTRY_BOUNDS:
        if _inside(lat, lng, box):
            return country
    return UNKNOWN_LOCATION


def city_from_coordinates(lat: float, lng: float) -> str:
    """Resolve a map click to a city name, falling back to the country's default city."""
    for city, box in CITY_BOUNDS:
        if _inside(lat, lng, box):
            return city
    return DEFAULT_CITIES.get(country_from_coordinates(lat, lng), UNKNOWN_CITY)
