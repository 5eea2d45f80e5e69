"""News aggregation pipeline: fetch, score, filter, rank and select."""

import asyncio
import random
from datetime import UTC, datetime
from typing import Protocol, Sequence

from .config import Settings, get_settings
from .ingest.articles import NewsArticle, RawArticle
from .ingest.newsapi import MockNewsSearchClient, NewsSearchClient
from .logging import PerformanceLogger, get_logger, log_error, log_processing_stage
from .processing.dedupe import ArticleDeduplicator
from .processing.filters import filter_relevant, is_eligible
from .processing.keywords import Category, KeywordSets
from .processing.relevance import RelevanceScorer, ScoredCandidate
from .processing.selection import (
    BREAKING_WINDOW_FACTOR,
    CATEGORY_WINDOW_FACTOR,
    RandomizedSelector,
)
from .utils import parse_date_string

logger = get_logger(__name__)

_OLDEST = datetime.min.replace(tzinfo=UTC)


class SearchClient(Protocol):
    async def search(self, query: str, page_size: int | None = None) -> list[RawArticle]:
        ...


def normalize_batch(raw_articles: Sequence[RawArticle]) -> list[NewsArticle]:
    """Keep displayable articles, numbering them by position in the fetched batch."""
    return [
        NewsArticle.from_raw(raw, ordinal)
        for ordinal, raw in enumerate(raw_articles)
        if is_eligible(raw)
    ]


def rank_by_score(candidates: Sequence[ScoredCandidate]) -> list[ScoredCandidate]:
    """Highest score first; ties keep upstream order."""
    return sorted(candidates, key=lambda c: c.relevance_score, reverse=True)


def sort_by_recency(articles: Sequence[NewsArticle]) -> list[NewsArticle]:
    """Newest first; ties and unparseable timestamps keep input order, the latter last."""
    def published(article: NewsArticle) -> datetime:
        return parse_date_string(article.published_at) or _OLDEST

    return sorted(articles, key=published, reverse=True)


class NewsAggregationPipeline:
    """Builds the actor, movie and breaking news lists.

    Every entry point degrades to an empty list instead of raising.
    """

    def __init__(
        self,
        search_client: SearchClient,
        settings: Settings | None = None,
        scorer: RelevanceScorer | None = None,
        rng: random.Random | None = None,
    ):
        self.settings = settings or get_settings()
        self.search_client = search_client
        self.scorer = scorer or RelevanceScorer()
        rng = rng or random.Random(self.settings.random_seed)
        self.selector = RandomizedSelector(rng)
        # One stream per category: picks do not depend on which fetch finishes first.
        self.category_selectors = {
            category: RandomizedSelector(random.Random(rng.getrandbits(64)))
            for category in Category
        }
        self.deduplicator = ArticleDeduplicator()

    def query_for(self, category: Category) -> str:
        if category is Category.ACTOR_NEWS:
            return self.settings.actor_query
        return self.settings.movie_query

    async def fetch_raw(self, category: Category) -> list[RawArticle]:
        """Search for ``category``; any failure yields an empty list."""
        try:
            return await self.search_client.search(
                self.query_for(category), self.settings.page_size
            )
        except Exception as e:
            logger.error(**log_error(e, context="news search failed", category=category.value))
            return []

    def rank(self, raw_articles: Sequence[RawArticle], category: Category) -> list[ScoredCandidate]:
        """Eligible articles above the relevance cut, best first."""
        eligible = normalize_batch(raw_articles)
        scored = [
            ScoredCandidate(article=article, relevance_score=self.scorer.score(article, category))
            for article in eligible
        ]
        relevant = filter_relevant(scored)
        ranked = rank_by_score(relevant)

        logger.info(**log_processing_stage(
            stage=f"rank_{category.value}",
            input_count=len(raw_articles),
            output_count=len(ranked),
            eligible_count=len(eligible),
            blacklisted_count=sum(1 for c in scored if c.relevance_score < 0),
        ))
        return ranked

    async def get_category_news(self, category: Category, limit: int) -> list[NewsArticle]:
        if limit < 1:
            logger.warning("Ignoring non-positive news limit", category=category.value, limit=limit)
            return []

        with PerformanceLogger(f"{category.value}_news", logger):
            raw_articles = await self.fetch_raw(category)
            ranked = self.rank(raw_articles, category)
            selected = self.category_selectors[category].select(ranked, limit, CATEGORY_WINDOW_FACTOR)

        return [candidate.article for candidate in selected]

    async def get_actor_news(self, limit: int) -> list[NewsArticle]:
        return await self.get_category_news(Category.ACTOR_NEWS, limit)

    async def get_movie_news(self, limit: int) -> list[NewsArticle]:
        return await self.get_category_news(Category.MOVIE_NEWS, limit)

    async def get_breaking_news(self, limit: int) -> list[NewsArticle]:
        """Merge actor and movie news, drop duplicate stories, favour recent ones."""
        if limit < 1:
            logger.warning("Ignoring non-positive news limit", category="breaking", limit=limit)
            return []

        with PerformanceLogger("breaking_news", logger):
            results = await asyncio.gather(
                self.get_actor_news(limit),
                self.get_movie_news(limit),
                return_exceptions=True,
            )

            combined: list[NewsArticle] = []
            for category, result in zip(("actors", "movies"), results):
                if isinstance(result, BaseException):
                    logger.error(**log_error(result, context="category pipeline failed", category=category))
                    continue
                combined.extend(result)

            unique, duplicate_groups = self.deduplicator.deduplicate(combined)
            recent = sort_by_recency(unique)
            selected = self.selector.select(recent, limit, BREAKING_WINDOW_FACTOR)

        logger.info(**log_processing_stage(
            stage="breaking_news",
            input_count=len(combined),
            output_count=len(selected),
            duplicates_removed=sum(len(group.duplicates) for group in duplicate_groups),
        ))
        return selected


def load_keyword_sets(settings: Settings) -> KeywordSets:
    """Vocabulary from ``settings.keywords_file``, falling back to the built-in lists."""
    if settings.keywords_file is None:
        return KeywordSets()
    try:
        return KeywordSets.from_yaml(settings.keywords_file)
    except (OSError, ValueError) as e:
        logger.error(**log_error(e, context="keyword file unusable, using defaults",
                                 path=str(settings.keywords_file)))
        return KeywordSets()


def create_pipeline(settings: Settings | None = None) -> NewsAggregationPipeline:
    """Build a pipeline wired to the configured search provider."""
    settings = settings or get_settings()
    search_client = MockNewsSearchClient() if settings.mock else NewsSearchClient(settings)
    return NewsAggregationPipeline(
        search_client=search_client,
        settings=settings,
        scorer=RelevanceScorer(load_keyword_sets(settings)),
    )


# Global pipeline instance
_pipeline: NewsAggregationPipeline | None = None


def get_pipeline() -> NewsAggregationPipeline:
    """Get global pipeline instance."""
    global _pipeline
    if _pipeline is None:
        _pipeline = create_pipeline()
    return _pipeline


async def fetch_actors_news(limit: int | None = None) -> list[NewsArticle]:
    """Actor and celebrity news, best matches shuffled within the top band."""
    pipeline = get_pipeline()
    if limit is None:
        limit = pipeline.settings.default_actor_limit
    return await pipeline.get_actor_news(limit)


async def fetch_movies_news(limit: int | None = None) -> list[NewsArticle]:
    """Film industry news, best matches shuffled within the top band."""
    pipeline = get_pipeline()
    if limit is None:
        limit = pipeline.settings.default_movie_limit
    return await pipeline.get_movie_news(limit)


async def fetch_breaking_news(limit: int | None = None) -> list[NewsArticle]:
    """Recent actor and movie news merged without duplicate stories."""
    pipeline = get_pipeline()
    if limit is None:
        limit = pipeline.settings.default_breaking_limit
    return await pipeline.get_breaking_news(limit)
