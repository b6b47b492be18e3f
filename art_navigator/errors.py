"""Exception types for ArtSpace Navigator."""

from __future__ import annotations


class NavigatorError(Exception):
    """Base class for all navigator errors."""


class QueryValidationError(NavigatorError, ValueError):
    """The user's utterance was rejected before any network call."""


class ExtractionError(NavigatorError):
    """The remote extraction service failed or answered in the wrong shape."""
