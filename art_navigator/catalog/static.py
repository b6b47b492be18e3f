"""In-memory catalog over a fixed artwork collection."""

from __future__ import annotations

from typing import Iterable

from . import register
from .base import CatalogStore
from .data import ARTWORKS
from .filters import matches_query
from ..config import Settings
from ..models import Artwork, CatalogQuery


@register
class StaticCatalog(CatalogStore):
    """Catalog backed by a list held in memory."""

    name = "Built-in collection"
    short_name = "STATIC"

    def __init__(self, artworks: Iterable[Artwork] | None = None, settings: Settings | None = None) -> None:
        super().__init__(settings)
        self._artworks = list(ARTWORKS if artworks is None else artworks)

    def _do_list(self, query: CatalogQuery) -> tuple[list[Artwork], int]:
        matched = [a for a in self._artworks if matches_query(a, query)]
        matched.sort(key=lambda a: a.year)
        total = len(matched)
        offset = query.offset or 0
        if query.limit is not None:
            matched = matched[offset:offset + query.limit]
        elif offset:
            matched = matched[offset:]
        return matched, total

    def _do_search(self, term: str) -> list[Artwork]:
        needle = term.lower()
        return [
            a for a in self._artworks
            if needle in a.title.lower()
            or needle in a.artist.lower()
            or needle in a.description.lower()
        ][:50]

    def _do_get(self, artwork_id: str) -> Artwork | None:
        for artwork in self._artworks:
            if artwork.id == artwork_id:
                return artwork
        return None
