"""Abstract base class for URL shortener store implementations."""

from abc import ABC, abstractmethod
from typing import Optional


class UrlStoreBase(ABC):
    """Abstract base class for URL mapping storage.

    A store owns one long-lived session. Open it with connect() (or
    ``async with store``) and release it with close().
    """

    async def __aenter__(self) -> "UrlStoreBase":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @abstractmethod
    async def connect(self) -> None:
        """Open the store session.

        Raises:
            StoreConnectionError: If the session cannot be established
        """
        pass

    @abstractmethod
    async def insert(self, short_key: str, long_url: str) -> None:
        """Persist a short key to long URL mapping.

        Args:
            short_key: The derived short key
            long_url: The original long URL

        Raises:
            StoreWriteError: On any underlying failure
        """
        pass

    @abstractmethod
    async def find_by_long_url(self, long_url: str) -> Optional[str]:
        """Find the short key already stored for a long URL.

        Args:
            long_url: The long URL to lookup

        Returns:
            The short key of the first matching row, None if there is none

        Raises:
            StoreReadError: On any underlying failure
        """
        pass

    @abstractmethod
    async def find_by_short_key(self, short_key: str) -> Optional[str]:
        """Find the long URL stored for a short key.

        Args:
            short_key: The short key to lookup

        Returns:
            The long URL if found, None otherwise

        Raises:
            StoreReadError: On any underlying failure
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the store session."""
        pass
