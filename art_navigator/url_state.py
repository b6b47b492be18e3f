"""Keeps the canonical filter and the shareable address in step."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Protocol
from urllib.parse import urlencode

from .log import Loggable
from .models import CanonicalFilter, PartialQuery, TimeRange
from .reconciler import QueryReconciler

PARAM_LOCATION = "location"
PARAM_START = "start"
PARAM_END = "end"
PARAM_ARTIST = "artist"
PARAM_MOVEMENT = "movement"

# Sources whose updates overwrite the current history entry instead of adding one
REPLACE_SOURCES = frozenset({"timeline"})


def filter_to_params(canonical: CanonicalFilter, baseline: TimeRange | None = None) -> dict[str, str]:
    """Query-string params for ``canonical``, leaving out every field at its default."""
    params: dict[str, str] = {}
    if canonical.location:
        params[PARAM_LOCATION] = canonical.location
    if canonical.time_range != (baseline or TimeRange.baseline()):
        params[PARAM_START] = str(canonical.time_range.start)
        params[PARAM_END] = str(canonical.time_range.end)
    if canonical.artist:
        params[PARAM_ARTIST] = canonical.artist
    if canonical.movement:
        params[PARAM_MOVEMENT] = canonical.movement
    return params


def _param(params: Mapping[str, object], key: str) -> str | None:
    value = params.get(key)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _int_param(params: Mapping[str, object], key: str) -> int | None:
    text = _param(params, key)
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def params_to_filter(params: Mapping[str, object], baseline: TimeRange | None = None) -> PartialQuery:
    """
    Read a partial query from query-string params; unreadable values are ignored.

    A lone start or end takes its other bound from ``baseline``.
    """
    baseline = baseline or TimeRange.baseline()
    start = _int_param(params, PARAM_START)
    end = _int_param(params, PARAM_END)
    time_range = None
    if start is not None or end is not None:
        time_range = TimeRange.ordered(
            start if start is not None else baseline.start,
            end if end is not None else baseline.end,
        )
    return PartialQuery(
        time_range=time_range,
        location=_param(params, PARAM_LOCATION),
        movement=_param(params, PARAM_MOVEMENT),
        artist=_param(params, PARAM_ARTIST),
    )


def filter_from_params(params: Mapping[str, object], baseline: TimeRange | None = None) -> CanonicalFilter:
    """The full filter a set of params describes, defaults filling the gaps."""
    baseline = baseline or TimeRange.baseline()
    return CanonicalFilter(time_range=baseline).overlay(params_to_filter(params, baseline))


class AddressBar(Protocol):
    """Where the shareable address lives."""

    def read(self) -> dict[str, str]:
        ...

    def write(self, params: dict[str, str], replace: bool) -> None:
        """Write ``params``; an empty dict means the bare path."""
        ...


@dataclass
class HistoryAddressBar:
    """In-memory address bar with a back/forward history."""

    path: str = "/"
    entries: list[dict[str, str]] = field(default_factory=lambda: [{}])
    index: int = 0

    def read(self) -> dict[str, str]:
        return dict(self.entries[self.index])

    def write(self, params: dict[str, str], replace: bool) -> None:
        if replace:
            self.entries[self.index] = dict(params)
            return
        del self.entries[self.index + 1:]
        self.entries.append(dict(params))
        self.index += 1

    def back(self) -> dict[str, str]:
        if self.index > 0:
            self.index -= 1
        return self.read()

    def forward(self) -> dict[str, str]:
        if self.index < len(self.entries) - 1:
            self.index += 1
        return self.read()

    @property
    def url(self) -> str:
        params = self.entries[self.index]
        if not params:
            return self.path
        return f"{self.path}?{urlencode(params)}"


class UrlStateSynchronizer(Loggable):
    """
    Mirrors the reconciler's filter into the address bar and back.

    User-driven changes publish new params. Navigation (back/forward, or a
    shared link) is applied to the reconciler without publishing the params
    it just consumed.
    """

    log_name = "URL"

    def __init__(self, reconciler: QueryReconciler, address_bar: AddressBar) -> None:
        self.reconciler = reconciler
        self.address_bar = address_bar
        self._last_published: dict[str, str] | None = None
        self._navigating = False
        reconciler.subscribe(self._on_filter_change)

    @property
    def baseline(self) -> TimeRange:
        return self.reconciler.baseline

    def seed(self) -> CanonicalFilter:
        """Load the filter from the address on start-up, before anything renders."""
        params = self.address_bar.read()
        self._navigating = True
        try:
            canonical = self.reconciler.replace(filter_from_params(params, self.baseline), source="url")
        finally:
            self._navigating = False
        self._last_published = filter_to_params(canonical, self.baseline)
        self._log_info(f"Seeded from address: {self._last_published}")
        return canonical

    def publish(self, params: dict[str, str], replace: bool = False) -> bool:
        """Write ``params`` to the address unless they are already there."""
        if params == self._last_published:
            return False
        self.address_bar.write(params, replace)
        self._last_published = dict(params)
        self._log_info(f"Published {params or 'bare path'} (replace={replace})")
        return True

    def on_navigate(self, params: Mapping[str, object]) -> CanonicalFilter:
        """Apply an address reached by back/forward navigation."""
        partial = params_to_filter(params, self.baseline)
        self._navigating = True
        try:
            canonical = self.reconciler.replace(filter_from_params(params, self.baseline), source="navigation")
            self.reconciler.maybe_cascade(partial)
        finally:
            self._navigating = False
        self._last_published = filter_to_params(canonical, self.baseline)
        return canonical

    def _on_filter_change(self, canonical: CanonicalFilter, source: str) -> None:
        if self._navigating:
            return
        self.publish(filter_to_params(canonical, self.baseline), replace=source in REPLACE_SOURCES)
