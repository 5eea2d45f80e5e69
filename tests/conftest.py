"""Pytest configuration and fixtures."""

import os
import random
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Set test environment
os.environ["NEWS_API_KEY"] = "test-key"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["JSON_LOGGING"] = "false"
os.environ["MOCK"] = "false"

from cinenews.config import Settings  # noqa: E402
from cinenews.ingest.articles import NewsArticle, RawArticle  # noqa: E402
from cinenews.ingest.newsapi import SearchUnavailableError  # noqa: E402


def make_raw(
    title: str | None = "Untitled",
    description: str | None = "No details.",
    source: str | None = "Daily Gazette",
    published_at: str | None = "2025-03-01T12:00:00Z",
    image_url: str | None = "https://example.com/img.jpg",
    url: str | None = None,
    author: str | None = None,
) -> RawArticle:
    """Build a raw article with displayable defaults."""
    return RawArticle(
        title=title,
        description=description,
        url=url or f"https://example.com/{abs(hash(title))}",
        image_url=image_url,
        published_at=published_at,
        source_name=source,
        author=author,
    )


def make_article(title: str, published_at: str = "2025-03-01T12:00:00Z", ordinal: int = 0) -> NewsArticle:
    return NewsArticle.from_raw(make_raw(title=title, published_at=published_at), ordinal)


class FakeSearchClient:
    """Returns canned results per query; raises when told to fail."""

    def __init__(self, results=None, failures=None):
        self.results = results or {}
        self.failures = failures or {}
        self.queries: list[str] = []

    async def search(self, query: str, page_size: int | None = None) -> list[RawArticle]:
        self.queries.append(query)
        if query in self.failures:
            raise self.failures[query]
        return list(self.results.get(query, []))


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment's queries."""
    return Settings(
        news_api_key="test-key",
        actor_query="actor-query",
        movie_query="movie-query",
        mock=False,
    )


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def actor_batch() -> list[RawArticle]:
    """Actor search results: relevant, blacklisted, weak and incomplete articles."""
    return [
        make_raw("Tom Cruise stuns at Oscars red carpet",
                 "The actor dazzled fans before the award show.",
                 source="Variety", published_at="2025-03-02T23:10:00Z"),
        make_raw("Zendaya and Austin Butler light up Cannes premiere",
                 "The stars walked the red carpet ahead of the screening.",
                 source="The Hollywood Reporter", published_at="2025-03-02T19:45:00Z"),
        make_raw("Actor arrested after bar fight",
                 "Police said the Hollywood star was released.",
                 source="Variety", published_at="2025-03-03T01:00:00Z"),
        make_raw("Local bakery wins regional prize",
                 "A neighbourhood shop took home the top award.",
                 source="Daily Gazette", published_at="2025-03-03T09:00:00Z"),
        make_raw("[Removed]", "[Removed]", source="[Removed]"),
        make_raw("Margot Robbie talks Barbie role in new interview",
                 "The actress reflects on her next project.",
                 source="Entertainment Weekly", published_at="2025-03-01T12:00:00Z",
                 image_url=None),
    ]


@pytest.fixture
def movie_batch() -> list[RawArticle]:
    """Movie search results including a near-duplicate headline."""
    return [
        make_raw("Dune Part Two Breaks Box Office Records!!!",
                 "The sequel posted the biggest opening weekend of the year.",
                 source="Deadline", published_at="2025-03-03T08:00:00Z"),
        make_raw("dune part two breaks box office records",
                 "Another outlet reports the sequel's opening weekend.",
                 source="Collider", published_at="2025-03-03T07:00:00Z"),
        make_raw("Box office slump blamed on senator election coverage",
                 "Analysts say audiences stayed home.",
                 source="Variety", published_at="2025-03-03T06:00:00Z"),
        make_raw("Netflix sets release date for new thriller sequel",
                 "The streaming service confirmed the franchise returns next spring.",
                 source="Collider", published_at="2025-03-01T15:30:00Z"),
    ]


@pytest.fixture
def fake_client(actor_batch, movie_batch) -> FakeSearchClient:
    return FakeSearchClient(results={"actor-query": actor_batch, "movie-query": movie_batch})


@pytest.fixture
def unavailable_error() -> SearchUnavailableError:
    return SearchUnavailableError("Provider returned status 'error': rateLimited")
