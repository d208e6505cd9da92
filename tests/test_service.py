"""Tests for service layer."""

import asyncio

import pytest
from shortener.exceptions import (
    NotFoundError,
    StoreReadError,
    StoreWriteError,
    ValidationError,
)


class TestURLShortenerService:
    """Test URL shortener service."""

    async def test_shorten_creates_mapping(self, service, store, key_generator, sample_urls):
        """First shortening derives and persists the key."""
        result = await service.shorten(sample_urls[0])

        assert result.created
        assert result.long_url == sample_urls[0]
        assert result.short_key == key_generator.derive(sample_urls[0])
        assert store.inserts == [(result.short_key, sample_urls[0])]

    async def test_shorten_twice_inserts_once(self, service, store, sample_urls):
        """Repeated shortening returns the same key and performs one insert."""
        first = await service.shorten(sample_urls[0])
        second = await service.shorten(sample_urls[0])

        assert first.short_key == second.short_key
        assert not second.created
        assert len(store.inserts) == 1

    async def test_shorten_returns_existing_key(self, service, store, sample_urls):
        """A stored key is returned even if it differs from the derived one."""
        store.rows["legacy1"] = sample_urls[1]

        result = await service.shorten(sample_urls[1])

        assert result.short_key == "legacy1"
        assert not result.created
        assert store.inserts == []

    @pytest.mark.parametrize("long_url", [None, ""])
    async def test_shorten_rejects_missing_url(self, service, store, long_url):
        """Missing or empty input is a validation error and never reaches the store."""
        with pytest.raises(ValidationError):
            await service.shorten(long_url)

        assert store.reads == []

    async def test_shorten_accepts_any_non_empty_string(self, service):
        """No URL format checks are made."""
        result = await service.shorten("not-a-url")

        assert result.created
        assert result.long_url == "not-a-url"

    async def test_shorten_read_failure_aborts(self, service, store, sample_urls):
        """A failed existence check surfaces and nothing is written."""
        store.fail_reads = True

        with pytest.raises(StoreReadError):
            await service.shorten(sample_urls[0])

        assert store.inserts == []

    async def test_shorten_write_failure_surfaces(self, service, store, sample_urls):
        """A failed insert surfaces and is not retried."""
        store.fail_writes = True

        with pytest.raises(StoreWriteError):
            await service.shorten(sample_urls[0])

        assert store.rows == {}
        assert len([r for r in store.reads if r[0] == "long_url"]) == 1

    async def test_concurrent_first_shortenings_agree(self, service, store, sample_urls):
        """Racing first requests may both insert but always agree on the key."""
        results = await asyncio.gather(*[service.shorten(sample_urls[2]) for _ in range(5)])

        assert len({r.short_key for r in results}) == 1
        assert 1 <= len(store.inserts) <= 5
        assert len(store.rows) == 1

    async def test_resolve(self, service, sample_urls):
        """Shorten then resolve round trips."""
        result = await service.shorten(sample_urls[0])

        assert await service.resolve(result.short_key) == sample_urls[0]

    async def test_resolve_unknown_key(self, service):
        with pytest.raises(NotFoundError):
            await service.resolve("Zzzzzz")

    async def test_resolve_malformed_key_skips_store(self, service, store):
        """Keys derive() cannot produce are not looked up."""
        with pytest.raises(NotFoundError):
            await service.resolve("does-not-exist")

        assert store.reads == []

    async def test_resolve_read_failure(self, service, store):
        store.fail_reads = True

        with pytest.raises(StoreReadError):
            await service.resolve("abcdef")

    async def test_health_check(self, service, store):
        """Health mirrors the store."""
        assert await service.health_check() == {"database": True, "overall": True}

        store.fail_reads = True
        assert await service.health_check() == {"database": False, "overall": False}

    async def test_close_releases_store(self, service, store):
        await service.close()

        assert store.closed
