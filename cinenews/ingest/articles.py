"""Article data structures shared by the search client and the pipeline."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..utils import generate_content_hash, normalize_url

REMOVED_TITLE = "[Removed]"
DEFAULT_TITLE = "No Title"
DEFAULT_DESCRIPTION = "No description available."
DEFAULT_SOURCE_NAME = "Unknown Source"


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class RawArticle:
    """Article exactly as the search provider returned it."""

    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    image_url: Optional[str] = None
    published_at: Optional[str] = None
    source_name: Optional[str] = None
    author: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "RawArticle":
        """Build from one entry of the provider's ``articles`` array.

        Non-string values are treated as absent.
        """
        source = payload.get('source')
        source_name = source.get('name') if isinstance(source, dict) else None
        return cls(
            title=_optional_str(payload.get('title')),
            description=_optional_str(payload.get('description')),
            url=_optional_str(payload.get('url')),
            image_url=_optional_str(payload.get('urlToImage')),
            published_at=_optional_str(payload.get('publishedAt')),
            source_name=_optional_str(source_name),
            author=_optional_str(payload.get('author')),
        )


@dataclass(frozen=True)
class NewsArticle:
    """Normalized article handed to the presentation layer.

    ``id`` is derived from the publish timestamp and the article's position
    in its fetch batch, so it is only unique within one batch.
    """

    id: str
    title: str
    description: str
    url: str
    url_to_image: Optional[str]
    published_at: str
    source_name: str
    author: Optional[str]

    @classmethod
    def from_raw(cls, raw: RawArticle, ordinal: int) -> "NewsArticle":
        published_at = raw.published_at or ""
        return cls(
            id=f"{published_at}-{ordinal}",
            title=raw.title or DEFAULT_TITLE,
            description=raw.description or DEFAULT_DESCRIPTION,
            url=raw.url or "",
            url_to_image=raw.image_url,
            published_at=published_at,
            source_name=raw.source_name or DEFAULT_SOURCE_NAME,
            author=raw.author,
        )

    @property
    def stable_id(self) -> str:
        """Identity derived from the article URL, stable across fetches."""
        return generate_content_hash(normalize_url(self.url)) if self.url else self.id

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the provider-compatible shape."""
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'url': self.url,
            'urlToImage': self.url_to_image,
            'publishedAt': self.published_at,
            'source': {'name': self.source_name},
            'author': self.author,
        }
