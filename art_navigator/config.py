"""
Configuration for ArtSpace Navigator.

Uses pydantic-settings so every value can be overridden from the
environment (prefix ``ART_NAVIGATOR_``) or a local ``.env`` file.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import DEFAULT_END_YEAR, DEFAULT_START_YEAR, TimeRange


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="ART_NAVIGATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Remote extraction. REMOTE talks to an OpenAI-compatible chat completions
    # API; ENDPOINT posts to an /api/extract style service such as our proxy.
    extraction_backend: str = "REMOTE"
    extraction_endpoint_url: str = ""
    openai_api_key: str = ""  # Falls back to the heuristic extractor when empty
    extraction_api_url: str = "https://api.openai.com/v1/chat/completions"
    extraction_model: str = "gpt-4o-mini"
    extraction_temperature: float = 0.1
    extraction_max_tokens: int = 100
    extraction_timeout: float = Field(default=5.0, gt=0)
    max_utterance_chars: int = Field(default=2200, gt=0)

    # Reconciler
    cascade_delay: float = Field(default=0.3, ge=0)

    # Catalog
    catalog_source: str = "STATIC"
    supabase_url: str = ""
    supabase_key: str = ""
    catalog_timeout: int = 10
    catalog_fetch_limit: int = 100

    # Timeline baseline
    default_start_year: int = DEFAULT_START_YEAR
    default_end_year: int = DEFAULT_END_YEAR

    @field_validator("catalog_source", "extraction_backend")
    @classmethod
    def upper_short_name(cls, v: str) -> str:
        return v.strip().upper()

    @property
    def remote_extraction_enabled(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def baseline(self) -> TimeRange:
        """The timeline range a fresh session starts from."""
        return TimeRange.ordered(self.default_start_year, self.default_end_year)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
