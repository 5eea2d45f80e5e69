"""Configuration management for the entertainment news pipeline."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ACTOR_QUERY = (
    '("actor" OR "actress" OR "celebrity" OR "Hollywood star" OR "movie star") '
    'AND (film OR movie OR premiere OR award OR interview)'
)
DEFAULT_MOVIE_QUERY = (
    '("movie" OR "film" OR "cinema" OR "box office" OR "blockbuster") '
    'AND (release OR trailer OR review OR premiere OR streaming)'
)

KEYWORD_LIST_NAMES = ("actor_keywords", "movie_keywords", "blacklist_keywords", "trusted_sources")


class Settings(BaseSettings):
    """Main application settings."""

    # ── News Search Provider ───────────────────────────────────────────────
    news_api_key: str | None = Field(None, description="NewsAPI key")
    news_api_url: str = Field("https://newsapi.org/v2", description="NewsAPI base URL")
    language: str = Field("en", description="Article language filter")
    sort_by: str = Field("publishedAt", description="Provider-side sort order")
    page_size: int = Field(100, description="Articles requested per search")
    request_timeout_seconds: float = Field(30.0, description="Total timeout per search request")
    user_agent: str = Field(
        "CineNewsBot/0.1 (entertainment news aggregation)",
        description="User agent for search requests"
    )

    # ── Queries ────────────────────────────────────────────────────────────
    actor_query: str = Field(DEFAULT_ACTOR_QUERY, description="Boosted query for actor news")
    movie_query: str = Field(DEFAULT_MOVIE_QUERY, description="Boosted query for movie news")
    keywords_file: Path | None = Field(None, description="Optional YAML keyword vocabulary override")

    # ── Operational Mode ───────────────────────────────────────────────────
    mock: bool = Field(False, description="Use built-in sample articles instead of the provider")

    # ── Selection ──────────────────────────────────────────────────────────
    default_actor_limit: int = Field(10, description="Default size of the actor news list")
    default_movie_limit: int = Field(10, description="Default size of the movie news list")
    default_breaking_limit: int = Field(6, description="Default size of the breaking news list")
    random_seed: int | None = Field(None, description="Seed for the selection shuffle")

    # ── Logging ────────────────────────────────────────────────────────────
    log_level: str = Field("INFO", description="Log level")
    json_logging: bool = Field(True, description="Enable JSON logging")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        """NewsAPI serves at most 100 articles per page."""
        if not 1 <= v <= 100:
            raise ValueError("Page size must be between 1 and 100")
        return v

    @field_validator("default_actor_limit", "default_movie_limit", "default_breaking_limit")
    @classmethod
    def validate_limits(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Limit must be a positive integer")
        return v

    @field_validator("request_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v


def load_keyword_overrides(path: str | Path) -> dict[str, list[str]]:
    """Load keyword vocabulary overrides from a YAML file.

    Args:
        path: Path to a YAML mapping of list name to keywords

    Returns:
        Mapping with only the lists present in the file

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a mapping of known list names to strings
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Keyword file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        try:
            data: Any = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in keyword file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Keyword file must contain a mapping: {config_path}")

    unknown = set(map(str, data)) - set(KEYWORD_LIST_NAMES)
    if unknown:
        raise ValueError(f"Unknown keyword lists: {', '.join(sorted(unknown))}")

    overrides: dict[str, list[str]] = {}
    for name, values in data.items():
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise ValueError(f"Keyword list '{name}' must be a list of strings")
        overrides[str(name)] = values
    return overrides


# Global instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings


def validate_config(settings: Settings) -> bool:
    """Validate configuration completeness."""
    try:
        if not settings.mock and not settings.news_api_key:
            raise ValueError("NEWS_API_KEY is required when not in mock mode")

        if settings.keywords_file is not None:
            load_keyword_overrides(settings.keywords_file)

        return True

    except (ValueError, FileNotFoundError) as e:
        print(f"Configuration validation failed: {e}")
        return False


if __name__ == "__main__":
    if validate_config(get_settings()):
        print("✅ Configuration is valid")
    else:
        print("❌ Configuration validation failed")
        exit(1)
