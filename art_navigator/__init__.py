"""ArtSpace Navigator: find artworks by place and period."""

__version__ = "0.1.0"
