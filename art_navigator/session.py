"""One user's navigator session: filter state, inputs and the results view."""

from __future__ import annotations

from .catalog import get_catalog
from .catalog.base import CatalogStore
from .catalog.filters import filter_artworks
from .chat import ChatSession
from .config import Settings, get_settings
from .extractors.gateway import ExtractionGateway
from .log import Loggable, LogCallback
from .mappings.countries import UNKNOWN_LOCATION, city_from_coordinates, country_from_coordinates
from .models import Artwork, CanonicalFilter, CatalogQuery, PartialQuery, ResultsView, TimeRange
from .reconciler import CascadeScheduler, QueryReconciler
from .url_state import AddressBar, HistoryAddressBar, UrlStateSynchronizer


def no_match_message(place: str, time_range: TimeRange) -> str:
    return f"在 {place}（{time_range.start}-{time_range.end}）未找到艺术品"


class NavigatorSession(Loggable):
    """
    Wires the reconciler to its inputs (chat, map, timeline, address bar) and
    to its outputs (the filtered collection and the results view).

    Created once per user session; presentation code talks only to this.
    """

    log_name = "SESSION"

    def __init__(
        self,
        catalog: CatalogStore | None = None,
        gateway: ExtractionGateway | None = None,
        address_bar: AddressBar | None = None,
        scheduler: CascadeScheduler | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.catalog = catalog or get_catalog(self.settings.catalog_source, settings=self.settings)
        self.reconciler = QueryReconciler(
            baseline=self.settings.baseline,
            scheduler=scheduler,
            cascade_delay=self.settings.cascade_delay,
            on_cascade=self.show_location_results,
        )
        self.gateway = gateway or ExtractionGateway(settings=self.settings)
        self.chat = ChatSession(self.gateway, self.reconciler)
        self.url = UrlStateSynchronizer(self.reconciler, address_bar or HistoryAddressBar())
        self.results: ResultsView | None = None
        self._collection: list[Artwork] | None = None

    def set_logger(self, callback: LogCallback | None) -> None:
        super().set_logger(callback)
        for component in (self.catalog, self.reconciler, self.gateway, self.chat, self.url):
            component.set_logger(callback)

    def start(self) -> CanonicalFilter:
        """Seed the filter from the address bar."""
        return self.url.seed()

    @property
    def filter(self) -> CanonicalFilter:
        return self.reconciler.filter

    # Inputs

    def submit_chat(self, text: str) -> str | None:
        return self.chat.submit(text)

    def change_time_range(self, start: int, end: int) -> CanonicalFilter:
        """Timeline drag."""
        return self.reconciler.apply(PartialQuery(time_range=TimeRange.ordered(start, end)), source="timeline")

    def select_country(self, country: str, place: str | None = None) -> str | None:
        """
        Country picked on the map at the current time range.

        Returns a no-match message instead of selecting when the country has
        nothing in range. ``place`` is the label used in that message.
        """
        time_range = self.filter.time_range
        found = self.catalog.list_by_country(country, time_range)
        if found.errors:
            return " ".join(found.errors)
        if not found.artworks:
            return no_match_message(place or country, time_range)
        self.reconciler.apply(PartialQuery(location=country, time_range=time_range), source="map")
        return None

    def click_map(self, lat: float, lng: float) -> str | None:
        country = country_from_coordinates(lat, lng)
        if country == UNKNOWN_LOCATION:
            return no_match_message(UNKNOWN_LOCATION, self.filter.time_range)
        return self.select_country(country, place=f"{city_from_coordinates(lat, lng)}, {country}")

    def navigate(self, params) -> CanonicalFilter:
        """Back/forward navigation landed on ``params``."""
        return self.url.on_navigate(params)

    def clear_filters(self) -> CanonicalFilter:
        return self.reconciler.reset()

    def tick(self) -> bool:
        """Run a due cascade, if any. Called from the event loop."""
        return self.reconciler.run_pending()

    # Outputs

    def collection(self) -> list[Artwork]:
        """The loaded collection. A failed load is retried on the next call."""
        if self._collection is None:
            result = self.catalog.list(CatalogQuery(limit=self.settings.catalog_fetch_limit))
            if result.errors:
                return []
            self._collection = result.artworks
        return self._collection

    def filtered_artworks(self) -> list[Artwork]:
        return filter_artworks(self.collection(), self.filter)

    def show_location_results(self, location: str, time_range: TimeRange) -> ResultsView:
        """The cascade action: fetch and display results for a place and period."""
        found = self.catalog.list_by_country(location, time_range)
        view = ResultsView(artworks=found.artworks, location=location, time_range=time_range, errors=found.errors)
        if found.errors:
            view.message = "暂时无法获取该地区的艺术品。"
        elif not found.artworks:
            view.message = no_match_message(location, time_range)
        else:
            view.message = f"{location}（{time_range.start}-{time_range.end}）共 {len(found.artworks)} 件艺术品"
        self.results = view
        self._log_info(view.message)
        return view

    def close_results(self) -> None:
        self.results = None
