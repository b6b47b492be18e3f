"""Abstract base class for catalog stores."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import Counter
from typing import Callable

import requests

from ..config import Settings, get_settings
from ..log import Loggable
from ..models import Artwork, CatalogQuery, CatalogResult, TimeRange


class CatalogStore(Loggable, ABC):
    """
    Abstract base class for artwork catalogs.

    Subclasses implement the backend-specific lookups while this base class
    provides common error handling and logging. Public methods never raise:
    failures come back as an empty CatalogResult carrying a user-facing error.
    """

    # Subclasses must define these
    name: str = "Unknown Catalog"  # Full display name
    short_name: str = "UNK"  # Short identifier (e.g., "STATIC", "SUPABASE")

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @property
    def log_name(self) -> str:  # type: ignore[override]
        return f"CATALOG:{self.short_name}"

    def list(self, query: CatalogQuery | None = None) -> CatalogResult:
        """
        List artworks matching ``query`` along with the total match count.

        With no query, lists everything up to ``catalog_fetch_limit``.
        """
        query = query or CatalogQuery(limit=self.settings.catalog_fetch_limit)

        def run(result: CatalogResult) -> None:
            artworks, total = self._do_list(query)
            result.artworks = artworks
            result.total_count = total

        return self._run(f"List (limit={query.limit})", run)

    def list_by_country(self, country: str, time_range: TimeRange | None = None) -> CatalogResult:
        """Artworks from ``country`` within ``time_range``, oldest first."""

        def run(result: CatalogResult) -> None:
            artworks, _ = self._do_list(CatalogQuery(time_range=time_range, country=country))
            result.artworks = sorted(artworks, key=lambda a: a.year)
            result.total_count = len(result.artworks)

        return self._run(f"List by country {country} ({time_range})", run)

    def search(self, term: str) -> CatalogResult:
        """Free-text search over title, artist and description."""
        if not term.strip():
            return self.list()

        def run(result: CatalogResult) -> None:
            result.artworks = self._do_search(term.strip())
            result.total_count = len(result.artworks)

        return self._run(f"Search '{term}'", run)

    def get_by_id(self, artwork_id: str) -> Artwork | None:
        def run(result: CatalogResult) -> None:
            artwork = self._do_get(artwork_id)
            if artwork is not None:
                result.artworks.append(artwork)

        result = self._run(f"Get {artwork_id}", run)
        return result.artworks[0] if result.artworks else None

    def country_counts(self, time_range: TimeRange | None = None) -> dict[str, int]:
        """Number of artworks per country, used to shade the map."""
        result = self.list(CatalogQuery(time_range=time_range))
        return dict(Counter(a.country for a in result.artworks))

    def countries(self) -> list[str]:
        return self._distinct(lambda a: a.country)

    def artists(self) -> list[str]:
        return self._distinct(lambda a: a.artist)

    def movements(self) -> list[str]:
        return self._distinct(lambda a: a.movement)

    def _distinct(self, key: Callable[[Artwork], str]) -> list[str]:
        result = self.list()
        return sorted({key(a) for a in result.artworks if key(a)})

    def _run(self, action: str, fn: Callable[[CatalogResult], None]) -> CatalogResult:
        """Run one backend call, turning any failure into an error on the result."""
        result = CatalogResult()

        try:
            self._log_info(f"{action} started")
            fn(result)
            self._log_info(f"{action} complete: {len(result.artworks)} artworks")

        except requests.Timeout:
            result.errors.append(f"{self.name} took too long to respond. Try again.")
            self._log_error(f"{action}: timeout")

        except requests.ConnectionError:
            result.errors.append(f"Could not connect to {self.name}. Check your internet connection.")
            self._log_error(f"{action}: connection failed")

        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            result.errors.append(f"{self.name} returned an error (status {status}). Try again later.")
            self._log_error(f"{action}: HTTP error {status}")

        except requests.RequestException as e:
            result.errors.append(f"Error communicating with {self.name}. Try again.")
            self._log_error(f"{action}: request error: {e}")

        except Exception as e:
            result.errors.append(f"Unexpected error from {self.name}.")
            self._log_error(f"{action}: unexpected error: {type(e).__name__}: {e}")

        if result.errors:
            result.artworks = []
            result.total_count = 0
        return result

    @abstractmethod
    def _do_list(self, query: CatalogQuery) -> tuple[list[Artwork], int]:
        """
        Return (artworks, total_count) for ``query``.

        total_count counts every match, ignoring limit and offset.
        Exceptions are caught by the public methods.
        """
        pass

    @abstractmethod
    def _do_search(self, term: str) -> list[Artwork]:
        pass

    @abstractmethod
    def _do_get(self, artwork_id: str) -> Artwork | None:
        pass
