"""Business logic service for URL shortener."""

import logging
from typing import Dict, Optional

from .shortcode import ShortKeyGenerator
from .database.base import UrlStoreBase
from .database.models import ShortenResult
from .common.validators import is_valid_long_url, is_valid_short_key
from .exceptions import NotFoundError, ValidationError


class URLShortenerService:
    """Service layer for URL shortening business logic.

    Holds no mutable state besides the injected store, so one instance is
    shared by all concurrent requests.
    """

    def __init__(
        self,
        store: UrlStoreBase,
        key_generator: Optional[ShortKeyGenerator] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize URL shortener service.

        Args:
            store: Connected URL store
            key_generator: Optional short key generator
            logger: Optional logger
        """
        self.store = store
        self.generator = key_generator or ShortKeyGenerator()
        self.logger = logger or logging.getLogger(__name__)

    async def shorten(self, long_url: Optional[str]) -> ShortenResult:
        """Return the short key for a long URL, creating the mapping on first use.

        An existing mapping is returned unchanged. Otherwise the key is
        derived and persisted. The lookup and the insert are not atomic:
        concurrent first requests for the same URL may both insert, which
        rewrites the same row because the key is deterministic.

        Args:
            long_url: The original long URL

        Returns:
            ShortenResult with ``created`` set when a new row was written

        Raises:
            ValidationError: If long_url is missing or empty
            StoreReadError: If the existence check fails
            StoreWriteError: If persisting the mapping fails
        """
        is_valid, error = is_valid_long_url(long_url)
        if not is_valid:
            raise ValidationError(error)

        existing = await self.store.find_by_long_url(long_url)
        if existing is not None:
            self.logger.debug(f"Found existing short key: {existing} -> {long_url}")
            return ShortenResult(short_key=existing, long_url=long_url, created=False)

        short_key = self.generator.derive(long_url)
        await self.store.insert(short_key, long_url)

        self.logger.info(f"Created short URL: {short_key} -> {long_url}")
        return ShortenResult(short_key=short_key, long_url=long_url, created=True)

    async def resolve(self, short_key: str) -> str:
        """Get the long URL for a short key.

        Args:
            short_key: The short key to lookup

        Returns:
            The stored long URL

        Raises:
            NotFoundError: If no mapping exists for the key
            StoreReadError: If the lookup fails
        """
        is_valid, _ = is_valid_short_key(short_key)
        if not is_valid:
            # derive() never produces such a key, so skip the round trip
            raise NotFoundError(f"Short URL '{short_key}' not found")

        long_url = await self.store.find_by_short_key(short_key)
        if long_url is None:
            self.logger.warning(f"Short key not found: {short_key}")
            raise NotFoundError(f"Short URL '{short_key}' not found")

        self.logger.debug(f"Resolved URL: {short_key} -> {long_url}")
        return long_url

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        store_healthy = await self.store.health_check()

        return {
            "database": store_healthy,
            "overall": store_healthy,
        }

    async def close(self) -> None:
        """Release the store session."""
        await self.store.close()
