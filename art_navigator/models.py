"""Data models for ArtSpace Navigator."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

# Baseline time range used whenever a bound is unknown
DEFAULT_START_YEAR = 1400
DEFAULT_END_YEAR = 2024


@dataclass(frozen=True)
class TimeRange:
    """Inclusive year range. Always ordered so that start <= end."""

    start: int = DEFAULT_START_YEAR
    end: int = DEFAULT_END_YEAR

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"TimeRange start {self.start} is after end {self.end}")

    @classmethod
    def ordered(cls, a: int, b: int) -> "TimeRange":
        """Build a range from two bounds given in either order."""
        return cls(min(a, b), max(a, b))

    @classmethod
    def baseline(cls) -> "TimeRange":
        return cls(DEFAULT_START_YEAR, DEFAULT_END_YEAR)

    def contains(self, year: int) -> bool:
        return self.start <= year <= self.end

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class LocationRef:
    """A place reference. Country is the catalog join key; city is display-only."""

    country: str
    city: str | None = None

    def __str__(self) -> str:
        return f"{self.city}, {self.country}" if self.city else self.country


@dataclass(frozen=True)
class PartialQuery:
    """
    An incomplete filter update from one input source (chat, map, timeline).

    Fields left as None are absent and leave the canonical filter untouched.
    """

    time_range: TimeRange | None = None
    location: str | None = None
    movement: str | None = None
    artist: str | None = None

    @property
    def is_empty(self) -> bool:
        return (
            self.time_range is None
            and self.location is None
            and self.movement is None
            and self.artist is None
        )

    @property
    def resolves_place_and_time(self) -> bool:
        """True when one update carries both a location and a time range."""
        return self.location is not None and self.time_range is not None


@dataclass(frozen=True)
class CanonicalFilter:
    """The single authoritative search filter for a session."""

    time_range: TimeRange = field(default_factory=TimeRange.baseline)
    location: str | None = None
    movement: str | None = None
    artist: str | None = None

    def overlay(self, partial: PartialQuery) -> "CanonicalFilter":
        """Return a copy with every present field of ``partial`` applied."""
        changes: dict[str, Any] = {}
        if partial.time_range is not None:
            changes["time_range"] = partial.time_range
        if partial.location is not None:
            changes["location"] = partial.location
        if partial.movement is not None:
            changes["movement"] = partial.movement
        if partial.artist is not None:
            changes["artist"] = partial.artist
        return replace(self, **changes) if changes else self


@dataclass(frozen=True)
class ExtractionResult:
    """
    Normalized output of any extractor.

    Every field is always present; a value of None means "not found".
    """

    start_year: int | None = None
    end_year: int | None = None
    country: str | None = None
    city: str | None = None

    @property
    def is_empty(self) -> bool:
        return (
            self.start_year is None
            and self.end_year is None
            and self.country is None
            and self.city is None
        )

    def time_range(self, baseline: TimeRange | None = None) -> TimeRange | None:
        """Turn the year bounds into a range, filling a missing bound from ``baseline``."""
        if self.start_year is None and self.end_year is None:
            return None
        baseline = baseline or TimeRange.baseline()
        start = self.start_year if self.start_year is not None else baseline.start
        end = self.end_year if self.end_year is not None else baseline.end
        return TimeRange.ordered(start, end)

    def to_dict(self) -> dict[str, Any]:
        return {
            "startYear": self.start_year,
            "endYear": self.end_year,
            "country": self.country,
            "city": self.city,
        }


@dataclass
class ExtractionOutcome:
    """What an extractor hands back: the result plus everything the chat needs to reply."""

    result: ExtractionResult = field(default_factory=ExtractionResult)
    message: str = ""
    artist: str | None = None
    movement: str | None = None
    source: str = "heuristic"  # "remote" or "heuristic"
    fallback_used: bool = False
    errors: list[str] = field(default_factory=list)  # User-visible validation messages

    @property
    def success(self) -> bool:
        return len(self.errors) == 0

    def to_partial_query(self, baseline: TimeRange | None = None) -> PartialQuery:
        return PartialQuery(
            time_range=self.result.time_range(baseline),
            location=self.result.country,
            movement=self.movement,
            artist=self.artist,
        )


@dataclass
class Artwork:
    """Unified artwork representation across catalog sources."""

    id: str
    title: str
    artist: str
    year: int
    country: str

    # Optional fields with defaults
    city: str = ""
    period: str = ""
    movement: str = ""
    medium: str = ""
    description: str = ""
    image_url: str = ""
    coordinates: tuple[float, float] = (0.0, 0.0)  # (longitude, latitude)

    @property
    def location(self) -> LocationRef:
        return LocationRef(self.country, self.city or None)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for session state storage."""
        return {
            "id": self.id,
            "title": self.title,
            "artist": self.artist,
            "year": self.year,
            "country": self.country,
            "city": self.city,
            "period": self.period,
            "movement": self.movement,
            "medium": self.medium,
            "description": self.description,
            "image_url": self.image_url,
            "coordinates": list(self.coordinates),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Artwork":
        coords = data.get("coordinates") or (0.0, 0.0)
        return cls(
            id=str(data["id"]),
            title=data["title"],
            artist=data["artist"],
            year=int(data["year"]),
            country=data["country"],
            city=data.get("city", ""),
            period=data.get("period", ""),
            movement=data.get("movement", ""),
            medium=data.get("medium", ""),
            description=data.get("description", ""),
            image_url=data.get("image_url", ""),
            coordinates=(float(coords[0]), float(coords[1])),
        )


@dataclass
class CatalogQuery:
    """Filters a catalog store translates to its backend's parameters."""

    time_range: TimeRange | None = None
    country: str | None = None
    movement: str | None = None
    artist: str | None = None
    limit: int | None = None
    offset: int | None = None

    @classmethod
    def from_filter(cls, canonical: CanonicalFilter, limit: int | None = None) -> "CatalogQuery":
        return cls(
            time_range=canonical.time_range,
            country=canonical.location,
            movement=canonical.movement,
            artist=canonical.artist,
            limit=limit,
        )


@dataclass
class CatalogResult:
    """Result from a catalog lookup, including any errors or warnings."""

    artworks: list[Artwork] = field(default_factory=list)
    total_count: int = 0
    errors: list[str] = field(default_factory=list)  # User-friendly error messages
    warnings: list[str] = field(default_factory=list)  # Non-fatal issues

    @property
    def success(self) -> bool:
        """True if we got results without fatal errors."""
        return len(self.artworks) > 0 or len(self.errors) == 0


@dataclass
class ResultsView:
    """What the results panel shows after a cascade or a map click."""

    artworks: list[Artwork] = field(default_factory=list)
    location: str | None = None
    time_range: TimeRange | None = None
    message: str = ""
    errors: list[str] = field(default_factory=list)
