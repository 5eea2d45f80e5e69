"""Content processing module."""

from .dedupe import ArticleDeduplicator, DuplicateGroup, deduplicate_articles
from .filters import MIN_RELEVANCE_SCORE, filter_relevant, is_eligible, passes_threshold
from .keywords import Category, KeywordSets
from .relevance import RelevanceScore, RelevanceScorer, ScoredCandidate, score_articles
from .selection import RandomizedSelector, shuffle
from .text_utils import build_content, title_key

__all__ = [
    'Category',
    'KeywordSets',
    'RelevanceScorer',
    'RelevanceScore',
    'ScoredCandidate',
    'score_articles',
    'is_eligible',
    'passes_threshold',
    'filter_relevant',
    'MIN_RELEVANCE_SCORE',
    'deduplicate_articles',
    'ArticleDeduplicator',
    'DuplicateGroup',
    'RandomizedSelector',
    'shuffle',
    'build_content',
    'title_key',
]
