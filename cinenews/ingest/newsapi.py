"""NewsAPI full-text search client."""

import asyncio
import time
from typing import Any, Dict, List, Optional

import aiohttp
import orjson

from ..config import Settings, get_settings
from ..logging import get_logger, log_api_request
from .articles import RawArticle

logger = get_logger(__name__)


class NewsSearchError(Exception):
    """The search provider could not deliver a usable article list."""


class SearchUnavailableError(NewsSearchError):
    """Network failure, timeout, non-2xx response or non-ok provider status."""


class MalformedPayloadError(NewsSearchError):
    """Response body is not JSON or lacks the articles array."""


def parse_search_payload(data: Any) -> List[RawArticle]:
    """Extract raw articles from a decoded ``/everything`` response.

    Raises:
        SearchUnavailableError: If the provider reports a non-ok status
        MalformedPayloadError: If the payload shape is unexpected
    """
    if not isinstance(data, dict):
        raise MalformedPayloadError(f"Expected a JSON object, got {type(data).__name__}")

    status = data.get('status')
    if status != 'ok':
        message = data.get('message') or data.get('code') or 'no message'
        raise SearchUnavailableError(f"Provider returned status {status!r}: {message}")

    articles = data.get('articles')
    if not isinstance(articles, list):
        raise MalformedPayloadError("Response has no articles list")

    return [RawArticle.from_payload(item) for item in articles if isinstance(item, dict)]


class NewsSearchClient:
    """Async client for the NewsAPI ``/everything`` endpoint.

    Use as an async context manager to share one session across searches;
    otherwise each search opens and closes its own session.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.settings = settings or get_settings()
        self.session = session
        self._owns_session = False

    async def __aenter__(self):
        if self.session is None:
            self.session = self._create_session()
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._owns_session and self.session:
            await self.session.close()
            self.session = None
            self._owns_session = False

    def _create_session(self) -> aiohttp.ClientSession:
        timeout = aiohttp.ClientTimeout(total=self.settings.request_timeout_seconds)
        return aiohttp.ClientSession(
            timeout=timeout,
            headers={'User-Agent': self.settings.user_agent}
        )

    @property
    def endpoint(self) -> str:
        return f"{self.settings.news_api_url.rstrip('/')}/everything"

    def _build_params(self, query: str, page_size: Optional[int]) -> Dict[str, str]:
        return {
            'q': query,
            'language': self.settings.language,
            'sortBy': self.settings.sort_by,
            'pageSize': str(page_size or self.settings.page_size),
        }

    async def search(self, query: str, page_size: Optional[int] = None) -> List[RawArticle]:
        """Run a full-text search.

        Args:
            query: Free-text query string
            page_size: Articles requested (defaults to settings)

        Returns:
            Raw articles in provider order

        Raises:
            NewsSearchError: If the provider is unreachable or the response is unusable
        """
        if self.session is not None:
            return await self._search(self.session, query, page_size)

        async with self._create_session() as session:
            return await self._search(session, query, page_size)

    async def _search(
        self,
        session: aiohttp.ClientSession,
        query: str,
        page_size: Optional[int],
    ) -> List[RawArticle]:
        params = self._build_params(query, page_size)
        headers = {'X-Api-Key': self.settings.news_api_key} if self.settings.news_api_key else {}
        start_time = time.time()

        try:
            async with session.get(self.endpoint, params=params, headers=headers) as response:
                logger.debug(**log_api_request(
                    method='GET',
                    url=self.endpoint,
                    status_code=response.status,
                    response_time=time.time() - start_time,
                    query=query,
                ))
                if not 200 <= response.status < 300:
                    raise SearchUnavailableError(f"HTTP {response.status} from news search")
                data = await response.json(content_type=None, loads=orjson.loads)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise SearchUnavailableError(f"News search request failed: {e}") from e
        except ValueError as e:
            raise MalformedPayloadError(f"News search returned invalid JSON: {e}") from e

        return parse_search_payload(data)


class MockNewsSearchClient:
    """Offline stand-in returning a fixed sample batch for every query."""

    def __init__(self, payload: Optional[Dict[str, Any]] = None):
        self.payload = payload or _mock_payload()
        self.queries: List[str] = []

    async def search(self, query: str, page_size: Optional[int] = None) -> List[RawArticle]:
        self.queries.append(query)
        articles = parse_search_payload(self.payload)
        return articles[:page_size] if page_size else articles


def _mock_payload() -> Dict[str, Any]:
    """Sample provider response mixing relevant, blacklisted and incomplete articles."""
    def article(title, description, source, published_at, image=True, author=None):
        slug = ''.join(c if c.isalnum() else '-' for c in (title or 'untitled').lower())
        return {
            'source': {'id': None, 'name': source},
            'author': author,
            'title': title,
            'description': description,
            'url': f"https://example.com/news/{slug}",
            'urlToImage': f"https://example.com/img/{slug}.jpg" if image else None,
            'publishedAt': published_at,
            'content': None,
        }

    return {
        'status': 'ok',
        'totalResults': 9,
        'articles': [
            article("Tom Cruise stuns at Oscars red carpet",
                    "The actor dazzled fans before the award show.",
                    "Variety", "2025-03-02T23:10:00Z", author="Staff"),
            article("Dune Part Two Breaks Box Office Records",
                    "The sequel posted the biggest opening weekend of the year.",
                    "Deadline", "2025-03-03T08:00:00Z"),
            article("Zendaya and Austin Butler light up Cannes premiere",
                    "The stars walked the red carpet ahead of the film festival screening.",
                    "The Hollywood Reporter", "2025-03-02T19:45:00Z"),
            article("Netflix sets release date for new thriller sequel",
                    "The streaming service confirmed the franchise returns next spring.",
                    "Collider", "2025-03-01T15:30:00Z"),
            article("Margot Robbie talks Barbie role in new interview",
                    "The actress reflects on the blockbuster and her next film.",
                    "Entertainment Weekly", "2025-03-01T12:00:00Z"),
            article("Box office slump blamed on senator election coverage",
                    "Analysts say political news kept audiences home.",
                    "Variety", "2025-03-03T06:00:00Z"),
            article("[Removed]", "[Removed]", "[Removed]", "1970-01-01T00:00:00Z"),
            article("Pixar trailer teases animated film sequel",
                    "The studio released a first look at the new movie.",
                    "Screen Rant", "2025-03-02T10:00:00Z", image=False),
            article("Local bakery wins regional prize",
                    "A neighbourhood shop took home the top award.",
                    "Daily Gazette", "2025-03-03T09:00:00Z"),
        ],
    }
