"""Country, era, artist and movement mappings."""

from .countries import (
    CANONICAL_COUNTRIES,
    get_canonical_countries,
    match_country,
    country_label,
    country_from_coordinates,
    city_from_coordinates,
)

__all__ = [
    "CANONICAL_COUNTRIES",
    "get_canonical_countries",
    "match_country",
    "country_label",
    "country_from_coordinates",
    "city_from_coordinates",
]
