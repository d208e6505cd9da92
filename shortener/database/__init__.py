"""Storage layer for URL shortener."""

from .base import UrlStoreBase
from .scylla import ScyllaUrlStore
from .models import URLMapping, ShortenResult

__all__ = ["UrlStoreBase", "ScyllaUrlStore", "URLMapping", "ShortenResult"]
