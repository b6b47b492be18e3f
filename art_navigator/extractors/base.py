"""Abstract base class for query extractors."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..log import Loggable
from ..models import ExtractionOutcome


class QueryExtractor(Loggable, ABC):
    """
    Turns a raw user utterance into an ExtractionOutcome.

    Every implementation returns the same structurally complete
    ExtractionResult so callers can treat them interchangeably.
    """

    # Subclasses must define these
    name: str = "Unknown Extractor"  # Full display name
    short_name: str = "UNK"  # Short identifier (e.g., "REMOTE", "HEURISTIC")

    @property
    def log_name(self) -> str:  # type: ignore[override]
        return self.short_name

    @abstractmethod
    def extract(self, utterance: str) -> ExtractionOutcome:
        """
        Extract time and place from ``utterance``.

        Implementations may raise ExtractionError when they cannot produce
        a result; the gateway decides what to do about it.
        """
        pass
