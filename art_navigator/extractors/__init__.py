"""Query extractor registry and utilities."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .base import QueryExtractor

# Registry of available extractors
_EXTRACTORS: dict[str, type[QueryExtractor]] = {}


def register(cls: type["QueryExtractor"]) -> type["QueryExtractor"]:
    """Decorator to register an extractor class."""
    _EXTRACTORS[cls.short_name] = cls
    return cls


def get_extractor(short_name: str, **kwargs: Any) -> "QueryExtractor":
    """Get an extractor instance by short name (e.g., 'REMOTE', 'HEURISTIC')."""
    if short_name not in _EXTRACTORS:
        available = ", ".join(_EXTRACTORS.keys()) or "none"
        raise ValueError(f"Unknown extractor: {short_name}. Available: {available}")
    return _EXTRACTORS[short_name](**kwargs)


def get_extractor_names() -> dict[str, str]:
    """Return dict mapping short_name -> full_name."""
    return {name: cls.name for name, cls in _EXTRACTORS.items()}


# Import extractors to trigger registration
# These imports must come after the registry is defined
from . import heuristic  # noqa: E402, F401
from . import remote  # noqa: E402, F401
