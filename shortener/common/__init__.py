"""Common utilities for URL shortener."""

from .validators import is_valid_long_url, is_valid_short_key
from .url_builder import build_short_url
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_long_url",
    "is_valid_short_key",
    "build_short_url",
    "setup_logging",
    "get_logger",
]
