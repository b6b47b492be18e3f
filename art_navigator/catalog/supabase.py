"""Supabase (PostgREST) catalog."""

from __future__ import annotations

from typing import Any

import requests

from . import register
from .base import CatalogStore
from ..config import Settings
from ..models import Artwork, CatalogQuery

DEFAULT_IMAGE_URL = (
    "https://images.pexels.com/photos/1563356/pexels-photo-1563356.jpeg"
    "?auto=compress&cs=tinysrgb&w=400"
)
SEARCH_LIMIT = 50


def _tag_value(tags: Any, prefix: str, default: str) -> str:
    """Read 'movement:X' style tags."""
    if not isinstance(tags, list):
        return default
    for tag in tags:
        if isinstance(tag, str) and tag.startswith(prefix):
            return tag[len(prefix):]
    return default


def row_to_artwork(row: dict[str, Any]) -> Artwork:
    """Convert a database row into an Artwork, filling display defaults."""
    tags = row.get("tags")
    return Artwork(
        id=str(row.get("id", "")),
        title=row.get("title") or "Untitled",
        artist=row.get("artist_name") or "Unknown Artist",
        year=int(row.get("creation_year") or 0),
        period=row.get("period") or "Unknown Period",
        country=row.get("country") or "Unknown Country",
        city=row.get("city") or "Unknown City",
        coordinates=(float(row.get("longitude") or 0), float(row.get("latitude") or 0)),
        image_url=row.get("image_url") or DEFAULT_IMAGE_URL,
        description=row.get("description") or "No description available",
        movement=_tag_value(tags, "movement:", "Unknown Movement"),
        medium=_tag_value(tags, "medium:", "Unknown Medium"),
    )


def parse_total(content_range: str | None, fallback: int) -> int:
    """Read the total from a 'Content-Range: 0-9/42' header."""
    if not content_range or "/" not in content_range:
        return fallback
    total = content_range.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else fallback


@register
class SupabaseCatalog(CatalogStore):
    """Catalog stored in a Supabase 'artworks' table, read over PostgREST."""

    name = "Supabase catalog"
    short_name = "SUPABASE"

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__(settings)
        self.fetch_timeout = self.settings.catalog_timeout

    @property
    def base_url(self) -> str:
        return f"{self.settings.supabase_url.rstrip('/')}/rest/v1/artworks"

    def _headers(self, count: bool = False) -> dict[str, str]:
        headers = {
            "apikey": self.settings.supabase_key,
            "Authorization": f"Bearer {self.settings.supabase_key}",
        }
        if count:
            headers["Prefer"] = "count=exact"
        return headers

    def _get(self, params: list[tuple[str, str]], count: bool = False) -> requests.Response:
        self._log_info(f"GET {self.base_url} (timeout={self.fetch_timeout}s, params={params})")
        response = requests.get(
            self.base_url,
            params=params,
            headers=self._headers(count),
            timeout=self.fetch_timeout,
        )
        response.raise_for_status()
        return response

    def _do_list(self, query: CatalogQuery) -> tuple[list[Artwork], int]:
        params: list[tuple[str, str]] = [
            ("select", "*"),
            ("order", "map_display_priority.desc,creation_year.asc"),
        ]
        if query.time_range is not None:
            params.append(("creation_year", f"gte.{query.time_range.start}"))
            params.append(("creation_year", f"lte.{query.time_range.end}"))
        if query.country:
            params.append(("country", f"eq.{query.country}"))
        if query.artist:
            params.append(("artist_name", f"ilike.*{query.artist}*"))
        if query.movement:
            params.append(("tags", f"cs.{{movement:{query.movement}}}"))
        if query.limit:
            params.append(("limit", str(query.limit)))
        if query.offset:
            params.append(("offset", str(query.offset)))

        response = self._get(params, count=True)
        artworks = self._parse_rows(response.json())
        return artworks, parse_total(response.headers.get("Content-Range"), len(artworks))

    def _do_search(self, term: str) -> list[Artwork]:
        pattern = f"*{term}*"
        params = [
            ("select", "*"),
            ("or", f"(title.ilike.{pattern},artist_name.ilike.{pattern},description.ilike.{pattern})"),
            ("order", "map_display_priority.desc"),
            ("limit", str(SEARCH_LIMIT)),
        ]
        return self._parse_rows(self._get(params).json())

    def _do_get(self, artwork_id: str) -> Artwork | None:
        rows = self._parse_rows(self._get([("select", "*"), ("id", f"eq.{artwork_id}")]).json())
        return rows[0] if rows else None

    def _parse_rows(self, rows: Any) -> list[Artwork]:
        artworks: list[Artwork] = []
        for row in rows or []:
            try:
                artworks.append(row_to_artwork(row))
            except (KeyError, TypeError, ValueError) as e:
                self._log_warning(f"Failed to parse artwork {row.get('id') if isinstance(row, dict) else row}: {e}")
                continue
        return artworks
