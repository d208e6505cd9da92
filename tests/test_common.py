"""Tests for common utilities."""

import json
import logging

from shortener.common.validators import is_valid_long_url, is_valid_short_key
from shortener.common.url_builder import build_short_url, escape_non_ascii
from shortener.common.logging_config import setup_logging, get_logger
from shortener.database.models import URLMapping, ShortenResult


class TestValidators:
    """Test validation utilities."""

    def test_valid_long_urls(self):
        valid, _ = is_valid_long_url("https://example.com")
        assert valid

        valid, _ = is_valid_long_url("ftp://example.com/file")
        assert valid

        valid, _ = is_valid_long_url(" ")
        assert valid

    def test_invalid_long_urls(self):
        valid, error = is_valid_long_url(None)
        assert not valid
        assert "missing" in error.lower()

        valid, error = is_valid_long_url("")
        assert not valid
        assert "non-empty" in error.lower()

    def test_short_keys(self):
        valid, _ = is_valid_short_key("abc123")
        assert valid

        valid, error = is_valid_short_key("")
        assert not valid
        assert "required" in error.lower()

        valid, error = is_valid_short_key("abc")
        assert not valid
        assert "6-8" in error


class TestURLBuilder:
    """Test URL building utilities."""

    def test_build_short_url_no_prefix(self):
        url = build_short_url(
            short_key="abc123",
            base_url="http://localhost:8080/",
        )

        assert url == "http://localhost:8080/abc123"

    def test_build_short_url_with_prefix(self):
        url = build_short_url(
            short_key="abc123",
            base_url="https://example.com",
            path_prefix="/s/",
        )

        assert url == "https://example.com/s/abc123"

    def test_escape_non_ascii(self):
        assert escape_non_ascii("https://example.com/a b?q=\"x\"") == "https://example.com/a b?q=\"x\""
        assert escape_non_ascii("https://example.com/caf\u00e9") == "https://example.com/caf%C3%A9"
        assert escape_non_ascii("https://example.com/\u30d1") == "https://example.com/%E3%83%91"


class TestLogging:
    """Test logging setup."""

    def test_setup_logging(self, tmp_path):
        log_file = tmp_path / "shortener.log"

        logger = setup_logging(level="debug", log_file=str(log_file))
        logger.debug("hello")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        assert "hello" in log_file.read_text()

    def test_setup_logging_replaces_handlers(self):
        setup_logging()
        logger = setup_logging(json_format=True)

        assert len(logger.handlers) == 1

    def test_json_lines_are_valid_json(self, tmp_path):
        """Quotes, newlines and tracebacks stay inside one JSON object per line."""
        log_file = tmp_path / "shortener.json.log"
        logger = setup_logging(log_file=str(log_file), json_format=True)

        logger.info('Created short URL: abc -> https://x/?q="a"')
        logger.info("first line\nsecond line")
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            logger.exception("Lookup failed")

        lines = log_file.read_text(encoding="utf-8").splitlines()
        entries = [json.loads(line) for line in lines]

        assert len(entries) == 3
        assert entries[0]["message"] == 'Created short URL: abc -> https://x/?q="a"'
        assert entries[0]["level"] == "INFO"
        assert entries[0]["logger"] == "url_shortener"
        assert entries[1]["message"] == "first line\nsecond line"
        assert "RuntimeError: boom" in entries[2]["exception"]

    def test_driver_logger_quieted(self):
        setup_logging(level="DEBUG")

        assert logging.getLogger("cassandra").level == logging.WARNING

    def test_get_logger(self):
        parent = get_logger()

        assert get_logger("url_shortener.web").parent is parent


class TestModels:
    """Test data models."""

    def test_shorten_result_to_dict(self):
        result = ShortenResult(short_key="abcdef", long_url="https://example.com", created=True)

        assert isinstance(result, URLMapping)
        assert result.to_dict() == {
            "short_key": "abcdef",
            "long_url": "https://example.com",
            "created": True,
        }
