#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: one ScyllaDB session per worker process is opened at startup and
shared by all in-flight requests (the driver session is thread safe). Set
WORKERS > 1 for multi-process scaling across CPU cores; uvicorn then imports
build_app in every worker process, so each worker has its own session.

The session is released on normal shutdown (SIGINT/SIGTERM). A process that
is killed abnormally leaves connection cleanup to the cluster. If the session
cannot be opened, startup fails and uvicorn exits with status 3.

Usage:
    python app.py

Environment variables:
    SCYLLA_HOSTS - Comma-separated ScyllaDB contact points
    SCYLLA_PORT - ScyllaDB CQL port
    SCYLLA_KEYSPACE - Keyspace name
    SCYLLA_CREATE_SCHEMA - Set to true to create keyspace/table on startup
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortener.database.scylla import ScyllaUrlStore
from shortener.service import URLShortenerService
from shortener.shortcode import ShortKeyGenerator
from shortener.common.logging_config import setup_logging
from web_app import create_app


# Import string uvicorn uses to build the app in each worker
APP_FACTORY = "app:build_app"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the store session on startup and release it on shutdown.

    A connection failure propagates, which aborts startup.
    """
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting URL shortener service...")

    # Open the store session
    store = ScyllaUrlStore(
        hosts=config.contact_points,
        port=config.scylla_port,
        keyspace=config.scylla_keyspace,
        create_schema=config.scylla_create_schema,
        replication_factor=config.scylla_replication_factor,
        logger=logger,
    )
    await store.connect()

    # Initialize service
    service = URLShortenerService(
        store=store,
        key_generator=ShortKeyGenerator(),
        logger=logger,
    )

    # Update app state
    app.state.store = store
    app.state.service = service

    logger.info("Service started successfully")

    # Yield control to the application
    try:
        yield
    finally:
        # Shutdown
        logger.info("Shutting down URL shortener service...")
        await service.close()
        logger.info("Service stopped")


def build_app() -> FastAPI:
    """Build the FastAPI app for one worker process."""
    # Load configuration
    config = load_config()

    # Setup logging
    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    # Store and service are created in lifespan
    app = create_app(
        store_instance=None,
        service_instance=None,
        config=config,
    )

    # Store config and logger in app state
    app.state.config = config
    app.state.logger = logger

    # Override lifespan
    app.router.lifespan_context = lifespan

    return app


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.model_dump()}")

    # workers > 1 needs an import string so uvicorn can spawn worker processes;
    # uvicorn handles SIGINT/SIGTERM and runs the lifespan shutdown
    try:
        logger.info(f"Starting server on {config.host}:{config.port} with {config.workers} worker(s)")
        uvicorn.run(
            APP_FACTORY,
            factory=True,
            host=config.host,
            port=config.port,
            workers=config.workers,
            log_level=config.log_level.lower(),
            access_log=True,
        )
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
