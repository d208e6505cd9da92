"""Pytest configuration and fixtures."""

import pytest
from typing import Dict, List, Optional, Tuple
from httpx import ASGITransport, AsyncClient

from config import Config
from shortener.database.base import UrlStoreBase
from shortener.exceptions import StoreReadError, StoreWriteError
from shortener.service import URLShortenerService
from shortener.shortcode import ShortKeyGenerator
from shortener.common.logging_config import setup_logging
from web_app import create_app


class InMemoryUrlStore(UrlStoreBase):
    """Dict-backed store that records calls and can be told to fail."""

    def __init__(self):
        self.rows: Dict[str, str] = {}
        self.inserts: List[Tuple[str, str]] = []
        self.reads: List[Tuple[str, str]] = []
        self.fail_reads = False
        self.fail_writes = False
        self.connected = False
        self.closed = False

    async def connect(self) -> None:
        self.connected = True

    async def insert(self, short_key: str, long_url: str) -> None:
        if self.fail_writes:
            raise StoreWriteError("failed to insert URL into DB: write timeout")
        self.inserts.append((short_key, long_url))
        self.rows[short_key] = long_url

    async def find_by_long_url(self, long_url: str) -> Optional[str]:
        self.reads.append(("long_url", long_url))
        if self.fail_reads:
            raise StoreReadError("failed to find URL: read timeout")
        for short_key, stored in self.rows.items():
            if stored == long_url:
                return short_key
        return None

    async def find_by_short_key(self, short_key: str) -> Optional[str]:
        self.reads.append(("short_url", short_key))
        if self.fail_reads:
            raise StoreReadError("failed to find URL: read timeout")
        return self.rows.get(short_key)

    async def health_check(self) -> bool:
        return self.connected and not self.fail_reads

    async def close(self) -> None:
        self.connected = False
        self.closed = True


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
async def store():
    """Create connected in-memory store."""
    store = InMemoryUrlStore()
    await store.connect()
    yield store
    await store.close()


@pytest.fixture
def key_generator():
    """Create short key generator."""
    return ShortKeyGenerator()


@pytest.fixture
def service(store, key_generator, logger) -> URLShortenerService:
    """Create service instance."""
    return URLShortenerService(
        store=store,
        key_generator=key_generator,
        logger=logger,
    )


@pytest.fixture
def config():
    """Create test configuration."""
    return Config(base_url="http://testserver")


@pytest.fixture
def app(store, service, config):
    """Create test FastAPI app."""
    return create_app(
        store_instance=store,
        service_instance=service,
        config=config,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/a/very/long/path",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
