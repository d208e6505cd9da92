"""Core business logic for URL shortener."""

from .shortcode import ShortKeyGenerator
from .service import URLShortenerService

__all__ = ["ShortKeyGenerator", "URLShortenerService"]
