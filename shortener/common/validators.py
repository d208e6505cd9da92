"""Validation utilities for URL shortener."""

from typing import Optional, Tuple

from ..shortcode import ShortKeyGenerator


def is_valid_long_url(url: Optional[str]) -> Tuple[bool, str]:
    """Validate a long URL.

    Any non-empty string is accepted as-is; no scheme or host checks are made.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if url is None:
        return False, "Missing 'long_url' parameter"

    if not isinstance(url, str) or url == "":
        return False, "'long_url' must be a non-empty string"

    return True, ""


def is_valid_short_key(short_key: Optional[str]) -> Tuple[bool, str]:
    """Validate a short key.

    Args:
        short_key: The short key to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_key or not isinstance(short_key, str):
        return False, "Short key is required"

    if not ShortKeyGenerator.is_valid_key(short_key):
        return False, (
            f"Short key must be {ShortKeyGenerator.MIN_LENGTH}-{ShortKeyGenerator.MAX_LENGTH} "
            "letters or digits"
        )

    return True, ""
