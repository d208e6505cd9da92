"""Data models for URL shortener."""

from dataclasses import dataclass


@dataclass(frozen=True)
class URLMapping:
    """Represents a row of the urls table."""

    short_key: str
    long_url: str

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "short_key": self.short_key,
            "long_url": self.long_url,
        }


@dataclass(frozen=True)
class ShortenResult(URLMapping):
    """Outcome of a shortening request.

    ``created`` is False when the mapping already existed.
    """

    created: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {**super().to_dict(), "created": self.created}
