"""Configuration management for URL shortener."""

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # ScyllaDB settings
    scylla_hosts: str = Field(
        default="127.0.0.1",
        description="Comma-separated ScyllaDB contact points"
    )

    scylla_port: int = Field(
        default=9042,
        description="ScyllaDB CQL native protocol port"
    )

    scylla_keyspace: str = Field(
        default="url_shortener",
        description="Keyspace holding the urls table"
    )

    scylla_create_schema: bool = Field(
        default=False,
        description="Create keyspace, table and index on startup"
    )

    scylla_replication_factor: int = Field(
        default=1,
        ge=1,
        description="Replication factor used when creating the keyspace"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=8080,
        description="Port to listen on"
    )

    workers: int = Field(
        default=1,
        ge=1,
        description="Number of uvicorn worker processes. Each worker opens its own store session."
    )

    # URL shortener settings
    base_url: str = Field(
        default="http://localhost:8080",
        description="Base URL for generating short URLs"
    )

    path_prefix: str = Field(
        default="",
        description="Path prefix for short URLs (e.g., '/s' for /s/abc123)"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    @property
    def contact_points(self) -> List[str]:
        """ScyllaDB hosts as a list."""
        return [h.strip() for h in self.scylla_hosts.split(",") if h.strip()]


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
