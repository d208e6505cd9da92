"""Short key derivation for URL shortener."""

import hashlib
import string


class ShortKeyGenerator:
    """Derive deterministic short keys from long URLs.

    The key is the base62 rendering of the first 64 bits of the URL's MD5
    digest, normalized to between MIN_LENGTH and MAX_LENGTH characters.
    Distinct URLs that share a hash prefix (or a truncated key) share a
    short key; no collision detection is done here.
    """

    # Base62 characters (case-sensitive), uppercase first: A-Za-z0-9
    BASE62_CHARS = string.ascii_uppercase + string.ascii_lowercase + string.digits

    # Number of leading hex digest characters fed into the encoder
    HASH_PREFIX_CHARS = 16

    MIN_LENGTH = 6
    MAX_LENGTH = 8
    PAD_CHAR = "0"

    def derive(self, long_url: str) -> str:
        """Derive the short key for a long URL.

        Args:
            long_url: The URL to shorten (used as-is, no normalization)

        Returns:
            Short key of 6 to 8 base62 characters
        """
        return self.normalize_length(self.to_base62(self.hash_prefix(long_url)))

    def hash_prefix(self, long_url: str) -> int:
        """Return the first HASH_PREFIX_CHARS hex digits of the URL hash as an int."""
        digest = hashlib.md5(long_url.encode("utf-8"), usedforsecurity=False).hexdigest()
        return int(digest[:self.HASH_PREFIX_CHARS], 16)

    def to_base62(self, num: int) -> str:
        """Convert a non-negative integer to base62, most significant digit first.

        Zero converts to an empty string; padding is left to normalize_length.

        Args:
            num: Integer to convert

        Returns:
            Base62 string
        """
        if num < 0:
            raise ValueError("Cannot encode negative numbers")

        result = []
        base = len(self.BASE62_CHARS)

        while num > 0:
            num, remainder = divmod(num, base)
            result.append(self.BASE62_CHARS[remainder])

        return ''.join(reversed(result))

    def normalize_length(self, key: str) -> str:
        """Clamp a key into [MIN_LENGTH, MAX_LENGTH].

        Long keys keep their most significant digits. Short keys are padded
        with PAD_CHAR on the right (low-order end).
        """
        if len(key) > self.MAX_LENGTH:
            return key[:self.MAX_LENGTH]
        if len(key) < self.MIN_LENGTH:
            return key.ljust(self.MIN_LENGTH, self.PAD_CHAR)
        return key

    @classmethod
    def is_valid_key(cls, key: str) -> bool:
        """Check whether a string could have been produced by derive().

        Args:
            key: Candidate short key

        Returns:
            True if length and alphabet match
        """
        if not key or not (cls.MIN_LENGTH <= len(key) <= cls.MAX_LENGTH):
            return False
        return all(c in cls.BASE62_CHARS for c in key)
