"""Keyword vocabularies used to classify entertainment news.

Vocabulary and trusted-source matching is plain case-insensitive substring
containment, with no tokenization and no stemming. Blacklist keywords must
begin at a word start but may end mid-word, so "war" matches inside
"Warner" and not inside "award".
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path

from ..config import load_keyword_overrides


class Category(Enum):
    """Classification target for relevance scoring."""
    ACTOR_NEWS = "actors"
    MOVIE_NEWS = "movies"


ACTOR_KEYWORDS = (
    'actor', 'actress', 'celebrity', 'star', 'cast', 'starring', 'role',
    'performance', 'oscar', 'emmy', 'golden globe', 'award', 'red carpet',
    'hollywood', 'bollywood', 'premiere', 'interview', 'tom hanks', 'tom cruise',
    'leonardo dicaprio', 'brad pitt', 'johnny depp', 'keanu reeves', 'ryan gosling',
    'timothee chalamet', 'zendaya', 'margot robbie', 'scarlett johansson',
    'jennifer lawrence', 'anne hathaway', 'emma stone', 'florence pugh',
    'dwayne johnson', 'chris hemsworth', 'chris evans', 'robert downey',
    'samuel jackson', 'morgan freeman', 'denzel washington', 'will smith',
    'meryl streep', 'cate blanchett', 'viola davis', 'sydney sweeney',
    'jacob elordi', 'pedro pascal', 'austin butler', 'anya taylor-joy',
    'jason momoa', 'gal gadot', 'henry cavill', 'benedict cumberbatch',
    'entertainment', 'celebrity news', 'showbiz', 'film star',
)

MOVIE_KEYWORDS = (
    'movie', 'film', 'cinema', 'box office', 'blockbuster', 'sequel', 'prequel',
    'franchise', 'trailer', 'release date', 'netflix', 'disney', 'marvel', 'dc',
    'warner bros', 'paramount', 'universal', 'sony pictures', 'amazon prime',
    'hbo max', 'streaming', 'theatrical', 'imax', 'screen', 'director',
    'screenplay', 'production', 'filming', 'post-production', 'vfx',
    'box office hit', 'weekend gross', 'opening weekend', 'billion dollar',
    'avengers', 'spider-man', 'batman', 'superman', 'star wars', 'jurassic',
    'fast furious', 'mission impossible', 'james bond', 'harry potter',
    'lord of the rings', 'avatar', 'barbie', 'oppenheimer', 'dune',
    'horror movie', 'comedy film', 'action movie', 'drama film', 'thriller',
    'animated film', 'pixar', 'dreamworks', 'studio ghibli', 'a24',
    'sundance', 'cannes', 'toronto film festival', 'venice film festival',
    'academy awards', 'oscars', 'critics choice', 'bafta', 'sag awards',
)

BLACKLIST_KEYWORDS = (
    'politics', 'election', 'vote', 'senator', 'congress', 'parliament',
    'president biden', 'president trump', 'republican', 'democrat', 'political',
    'cryptocurrency', 'crypto', 'bitcoin', 'ethereum', 'nft', 'blockchain',
    'stock market', 'stocks', 'trading', 'investment fund', 'hedge fund',
    'sports betting', 'gambling', 'casino', 'lottery',
    'covid', 'pandemic', 'vaccine', 'virus', 'outbreak',
    'murder', 'killed', 'shooting', 'crime scene', 'arrested', 'prison',
    'war', 'military', 'troops', 'invasion', 'missile', 'bombing',
    'lawsuit against', 'sued for', 'legal battle', 'court case',
    'real estate', 'mortgage', 'housing market', 'property prices',
    'weather', 'hurricane', 'earthquake', 'flood', 'wildfire',
    'tech stocks', 'ipo', 'startup funding', 'venture capital',
    'football', 'basketball', 'baseball', 'soccer', 'nfl', 'nba', 'mlb',
    'tennis', 'golf', 'olympics', 'world cup', 'super bowl',
)

TRUSTED_SOURCES = (
    'entertainment weekly', 'variety', 'hollywood reporter', 'deadline',
    'screen rant', 'collider', 'indiewire', 'ew.com', 'e! news', 'people',
    'tmz', 'buzzfeed', 'vulture', 'the wrap', 'cinemablend', 'gamespot',
    'ign', 'empire', 'total film', 'movie web', 'slashfilm', 'film school rejects',
)


def _lowered(values) -> tuple[str, ...]:
    return tuple(v.lower() for v in values)


@dataclass(frozen=True)
class KeywordSets:
    """Immutable keyword vocabularies, stored lowercase."""

    actor_keywords: tuple[str, ...] = field(default=ACTOR_KEYWORDS)
    movie_keywords: tuple[str, ...] = field(default=MOVIE_KEYWORDS)
    blacklist_keywords: tuple[str, ...] = field(default=BLACKLIST_KEYWORDS)
    trusted_sources: tuple[str, ...] = field(default=TRUSTED_SOURCES)

    def __post_init__(self) -> None:
        for f in fields(self):
            object.__setattr__(self, f.name, _lowered(getattr(self, f.name)))

    def vocabulary(self, category: Category) -> tuple[str, ...]:
        """Keywords that count toward relevance for ``category``."""
        if category is Category.ACTOR_NEWS:
            return self.actor_keywords
        if category is Category.MOVIE_NEWS:
            return self.movie_keywords
        raise ValueError(f"Unknown category: {category}")

    @classmethod
    def from_yaml(cls, path: str | Path) -> "KeywordSets":
        """Load vocabularies from YAML; lists missing from the file keep their defaults."""
        overrides = load_keyword_overrides(path)
        return cls(**{name: tuple(values) for name, values in overrides.items()})


DEFAULT_KEYWORD_SETS = KeywordSets()
