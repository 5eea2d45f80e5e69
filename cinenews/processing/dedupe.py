"""
Near-duplicate removal for a single batch of news articles.

Two articles are duplicates when their titles share the same key: the
lowercased title stripped to ASCII letters and digits, truncated to 50
characters. The first article seen for a key is kept.
"""

import logging
from dataclasses import dataclass, field
from typing import Generic, Protocol, Sequence, TypeVar

from .text_utils import TITLE_KEY_LENGTH, title_key

logger = logging.getLogger(__name__)


class Titled(Protocol):
    title: str


T = TypeVar('T', bound=Titled)


@dataclass
class DuplicateGroup(Generic[T]):
    """Articles collapsed onto one kept article."""
    key: str
    canonical_article: T
    duplicates: list[T] = field(default_factory=list)


class ArticleDeduplicator:
    """Order-preserving title-key deduplication."""

    def __init__(self, key_length: int = TITLE_KEY_LENGTH):
        self.key_length = key_length

    def key_for(self, article: Titled) -> str:
        return title_key(article.title, self.key_length)

    def deduplicate(self, articles: Sequence[T]) -> tuple[list[T], list[DuplicateGroup[T]]]:
        """Remove near-duplicate titles.

        Args:
            articles: Articles in priority order

        Returns:
            Unique articles in input order, and the groups of dropped duplicates
        """
        groups: dict[str, DuplicateGroup[T]] = {}
        unique: list[T] = []

        for article in articles:
            key = self.key_for(article)
            if key in groups:
                groups[key].duplicates.append(article)
            else:
                groups[key] = DuplicateGroup(key=key, canonical_article=article)
                unique.append(article)

        duplicate_groups = [group for group in groups.values() if group.duplicates]
        logger.info(f"Title deduplication: {len(articles)} -> {len(unique)} articles")
        return unique, duplicate_groups


def deduplicate_articles(articles: Sequence[T]) -> list[T]:
    """Convenience function for title deduplication."""
    unique, _ = ArticleDeduplicator().deduplicate(articles)
    return unique
