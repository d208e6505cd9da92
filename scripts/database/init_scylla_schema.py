#!/usr/bin/env python3
"""
Manually initialize the ScyllaDB schema for URL shortener.

Creates the keyspace, the urls table and the secondary index on long_url.

Usage:
    python init_scylla_schema.py --hosts 127.0.0.1 --keyspace url_shortener --replication-factor 3
"""

import argparse
import asyncio
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from shortener.database.scylla import ScyllaUrlStore, DEFAULT_KEYSPACE, DEFAULT_PORT
from shortener.exceptions import StoreError
from shortener.common.logging_config import setup_logging


async def main():
    parser = argparse.ArgumentParser(description="Initialize ScyllaDB schema")
    parser.add_argument(
        "--hosts",
        default=os.getenv("SCYLLA_HOSTS", "127.0.0.1"),
        help="Comma-separated ScyllaDB contact points"
    )
    parser.add_argument("--port", type=int, default=int(os.getenv("SCYLLA_PORT", DEFAULT_PORT)))
    parser.add_argument("--keyspace", default=os.getenv("SCYLLA_KEYSPACE", DEFAULT_KEYSPACE))
    parser.add_argument(
        "--replication-factor",
        type=int,
        default=int(os.getenv("SCYLLA_REPLICATION_FACTOR", "1")),
        help="Replication factor for a newly created keyspace"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    args = parser.parse_args()

    logger = setup_logging(level="DEBUG" if args.verbose else "INFO")

    store = ScyllaUrlStore(
        hosts=[h.strip() for h in args.hosts.split(",") if h.strip()],
        port=args.port,
        keyspace=args.keyspace,
        create_schema=True,
        replication_factor=args.replication_factor,
        logger=logger,
    )

    try:
        async with store:
            if not await store.health_check():
                logger.error("Database health check failed")
                return 1
            logger.info("Database health check passed")
    except StoreError as e:
        logger.error(f"Error initializing schema: {e}")
        return 1

    logger.info("Done")
    return 0


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
