"""
Keyword relevance scoring for entertainment news articles.

An article is scored against one category vocabulary:

- any blacklist hit disqualifies it outright (score -1)
- a trusted entertainment outlet adds 30
- each vocabulary keyword found in title + description adds 10
- each vocabulary keyword found in the title adds another 15
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Protocol, Sequence

from ..ingest.articles import NewsArticle
from .keywords import DEFAULT_KEYWORD_SETS, Category, KeywordSets
from .text_utils import build_content

logger = logging.getLogger(__name__)

BLACKLISTED = -1
TRUSTED_SOURCE_BONUS = 30
CONTENT_MATCH_POINTS = 10
TITLE_MATCH_POINTS = 15


class Scorable(Protocol):
    title: str
    description: str
    source_name: str


@dataclass
class RelevanceScore:
    """Relevance scoring result with the signals that produced it."""
    score: int
    content_keywords: list[str] = field(default_factory=list)
    title_keywords: list[str] = field(default_factory=list)
    trusted_source: bool = False
    blacklisted_by: str | None = None

    @property
    def blacklisted(self) -> bool:
        return self.blacklisted_by is not None


@dataclass(frozen=True)
class ScoredCandidate:
    """A normalized article paired with its relevance score."""
    article: NewsArticle
    relevance_score: int


def matched_keywords(text: str, keywords: Iterable[str]) -> list[str]:
    """Keywords contained in ``text`` (case-insensitive substring match)."""
    lowered = text.lower()
    return [keyword for keyword in keywords if keyword.lower() in lowered]


def contains_keyword(text: str, keywords: Iterable[str]) -> bool:
    lowered = text.lower()
    return any(keyword.lower() in lowered for keyword in keywords)


def is_trusted_source(source_name: str, trusted_sources: Iterable[str]) -> bool:
    lowered = source_name.lower()
    return any(source in lowered for source in trusted_sources)


def _compile_blacklist(keywords: Sequence[str]) -> re.Pattern | None:
    # A blacklist keyword must begin at a word start but may end mid-word:
    # "war" matches "Warner" and "warfare", not "award".
    if not keywords:
        return None
    alternatives = "|".join(re.escape(keyword) for keyword in keywords)
    return re.compile(rf"(?<![a-z0-9])(?:{alternatives})")


class RelevanceScorer:
    """Scores articles against the actor or movie vocabulary."""

    def __init__(self, keyword_sets: KeywordSets | None = None):
        self.keyword_sets = keyword_sets or DEFAULT_KEYWORD_SETS
        self._blacklist_pattern = _compile_blacklist(self.keyword_sets.blacklist_keywords)

    def find_blacklisted(self, text: str) -> str | None:
        """First blacklist keyword present in ``text``, if any."""
        if self._blacklist_pattern is None:
            return None
        match = self._blacklist_pattern.search(text.lower())
        return match.group(0) if match else None

    def score_with_details(self, article: Scorable, category: Category) -> RelevanceScore:
        """Score an article and report which signals fired."""
        title = article.title or ''
        content = build_content(title, article.description or '')

        blacklisted_by = self.find_blacklisted(content)
        if blacklisted_by is not None:
            return RelevanceScore(score=BLACKLISTED, blacklisted_by=blacklisted_by)

        score = 0

        trusted = is_trusted_source(article.source_name or '', self.keyword_sets.trusted_sources)
        if trusted:
            score += TRUSTED_SOURCE_BONUS

        vocabulary = self.keyword_sets.vocabulary(category)
        content_hits = matched_keywords(content, vocabulary)
        title_hits = matched_keywords(title, vocabulary)
        score += CONTENT_MATCH_POINTS * len(content_hits)
        score += TITLE_MATCH_POINTS * len(title_hits)

        return RelevanceScore(
            score=score,
            content_keywords=content_hits,
            title_keywords=title_hits,
            trusted_source=trusted,
        )

    def score(self, article: Scorable, category: Category) -> int:
        """Signed relevance score: -1 when blacklisted, otherwise >= 0."""
        return self.score_with_details(article, category).score


def score_articles(
    articles: Sequence[NewsArticle],
    category: Category,
    scorer: RelevanceScorer | None = None,
) -> list[ScoredCandidate]:
    """Score every article for ``category``, keeping input order."""
    scorer = scorer or RelevanceScorer()
    candidates = [
        ScoredCandidate(article=article, relevance_score=scorer.score(article, category))
        for article in articles
    ]
    logger.debug(f"Scored {len(candidates)} articles for {category.value}")
    return candidates
