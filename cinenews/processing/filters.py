"""Structural and relevance filters applied before and after scoring."""

from typing import Iterable

from ..ingest.articles import REMOVED_TITLE, RawArticle
from .relevance import ScoredCandidate

# Fixed cut: only articles scoring strictly above this are shown.
MIN_RELEVANCE_SCORE = 20


def is_eligible(article: RawArticle) -> bool:
    """True when the article carries everything the news cards display."""
    return bool(
        article.image_url
        and article.title
        and article.title != REMOVED_TITLE
        and article.description
    )


def passes_threshold(score: int) -> bool:
    return score > MIN_RELEVANCE_SCORE


def filter_relevant(candidates: Iterable[ScoredCandidate]) -> list[ScoredCandidate]:
    """Drop blacklisted and weakly relevant candidates, keeping order."""
    return [c for c in candidates if passes_threshold(c.relevance_score)]
