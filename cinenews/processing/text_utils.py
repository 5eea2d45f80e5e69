"""Text processing utilities for the entertainment news pipeline."""

import re

TITLE_KEY_LENGTH = 50

_NON_ALPHANUMERIC = re.compile(r'[^a-z0-9]')


def build_content(title: str, description: str) -> str:
    """Text searched for keywords: title and description joined by a space."""
    return f"{title} {description}"


def title_key(title: str, max_length: int = TITLE_KEY_LENGTH) -> str:
    """Convert title to the key used for near-duplicate detection.

    Args:
        title: Article title
        max_length: Number of characters kept

    Returns:
        Lowercased title with everything but ASCII letters and digits removed,
        truncated to ``max_length``
    """
    if not title:
        return ""

    return _NON_ALPHANUMERIC.sub('', title.lower())[:max_length]


if __name__ == "__main__":
    test_title = "Dune Part Two Breaks Box Office Records!!!"
    print(f"Title key: {title_key(test_title)}")
