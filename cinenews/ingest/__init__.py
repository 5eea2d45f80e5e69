"""News search ingestion."""

from .articles import NewsArticle, RawArticle
from .newsapi import (
    MalformedPayloadError,
    MockNewsSearchClient,
    NewsSearchClient,
    NewsSearchError,
    SearchUnavailableError,
    parse_search_payload,
)

__all__ = [
    'RawArticle',
    'NewsArticle',
    'NewsSearchClient',
    'MockNewsSearchClient',
    'NewsSearchError',
    'SearchUnavailableError',
    'MalformedPayloadError',
    'parse_search_payload',
]
