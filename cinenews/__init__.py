"""Entertainment news relevance pipeline."""

__version__ = "0.1.0"
