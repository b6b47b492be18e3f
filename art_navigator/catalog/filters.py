"""The catalog filter predicate."""

from __future__ import annotations

from typing import Iterable

from ..models import Artwork, CanonicalFilter, CatalogQuery


def matches_query(artwork: Artwork, query: CatalogQuery) -> bool:
    """True if ``artwork`` satisfies every constraint present in ``query``."""
    if query.time_range is not None and not query.time_range.contains(artwork.year):
        return False
    if query.country and artwork.country != query.country:
        return False
    if query.movement and artwork.movement != query.movement:
        return False
    if query.artist and artwork.artist != query.artist:
        return False
    return True


def matches(artwork: Artwork, canonical: CanonicalFilter) -> bool:
    """
    Artwork matches iff its year lies within the time range (inclusive) and
    location, movement and artist are each either unset or equal.
    """
    return matches_query(artwork, CatalogQuery.from_filter(canonical))


def filter_artworks(artworks: Iterable[Artwork], canonical: CanonicalFilter) -> list[Artwork]:
    """Apply the canonical filter to a collection, keeping its order."""
    return [artwork for artwork in artworks if matches(artwork, canonical)]
