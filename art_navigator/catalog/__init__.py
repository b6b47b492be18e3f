"""Catalog store registry and utilities."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .base import CatalogStore

# Registry of available catalog stores
_CATALOGS: dict[str, type[CatalogStore]] = {}


def register(cls: type["CatalogStore"]) -> type["CatalogStore"]:
    """Decorator to register a catalog class."""
    _CATALOGS[cls.short_name] = cls
    return cls


def get_catalog(short_name: str, **kwargs: Any) -> "CatalogStore":
    """Get a catalog instance by short name (e.g., 'STATIC', 'SUPABASE')."""
    if short_name not in _CATALOGS:
        available = ", ".join(_CATALOGS.keys()) or "none"
        raise ValueError(f"Unknown catalog: {short_name}. Available: {available}")
    return _CATALOGS[short_name](**kwargs)


def get_catalog_names() -> dict[str, str]:
    """Return dict mapping short_name -> full_name."""
    return {name: cls.name for name, cls in _CATALOGS.items()}


# Import catalogs to trigger registration
# These imports must come after the registry is defined
from . import static  # noqa: E402, F401
from . import supabase  # noqa: E402, F401
