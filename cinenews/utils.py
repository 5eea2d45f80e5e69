"""Utility functions for the entertainment news pipeline."""

import hashlib
from datetime import UTC, datetime
from urllib.parse import urlparse

from .logging import get_logger

logger = get_logger(__name__)


def normalize_url(url: str) -> str:
    """Normalize URL for consistent processing.

    Args:
        url: Raw URL string

    Returns:
        Normalized URL
    """
    parsed = urlparse(url)
    normalized = f"{parsed.scheme}://{parsed.netloc.lower()}{parsed.path.rstrip('/')}"

    if parsed.query:
        normalized += f"?{parsed.query}"

    return normalized


def generate_content_hash(content: str) -> str:
    """Generate SHA-256 hash of content.

    Args:
        content: Content to hash

    Returns:
        Hexadecimal hash string
    """
    return hashlib.sha256(content.encode('utf-8')).hexdigest()


def parse_date_string(date_str: str | None) -> datetime | None:
    """Parse a provider timestamp into an aware datetime.

    Args:
        date_str: Date string to parse (ISO 8601 or RFC 2822)

    Returns:
        Parsed datetime or None if parsing fails
    """
    if not date_str:
        return None

    date_str = date_str.strip()

    # NewsAPI sends ISO 8601 with a trailing "Z"
    try:
        parsed = datetime.fromisoformat(date_str.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed
    except ValueError:
        pass

    try:
        from email.utils import parsedate_to_datetime
        parsed = parsedate_to_datetime(date_str)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed
    except (ValueError, TypeError):
        pass

    logger.warning("Failed to parse date string", date_string=date_str)
    return None


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """Truncate text to maximum length.

    Args:
        text: Text to truncate
        max_length: Maximum length
        suffix: Suffix to add if truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text

    return text[:max_length - len(suffix)] + suffix
