#!/usr/bin/env python3
"""
Command-line interface for URL shortener service.

Talks to ScyllaDB directly, using the same service layer as the HTTP server.

Usage:
    python url_shortener_cli.py shorten <long_url>
    python url_shortener_cli.py resolve <short_key>
    python url_shortener_cli.py health
"""

import argparse
import asyncio
import json
import sys
import os
from typing import Optional, Sequence

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from shortener.database.scylla import ScyllaUrlStore, DEFAULT_KEYSPACE, DEFAULT_PORT
from shortener.exceptions import ShortenerError, NotFoundError
from shortener.service import URLShortenerService
from shortener.shortcode import ShortKeyGenerator
from shortener.common.logging_config import setup_logging


def _print_error(message: str) -> int:
    print(json.dumps({"success": False, "error": message}, indent=2), file=sys.stderr)
    return 1


class URLShortenerCLI:
    """Command-line interface for URL shortener."""

    def __init__(
        self,
        hosts: Sequence[str],
        port: int = DEFAULT_PORT,
        keyspace: str = DEFAULT_KEYSPACE,
        verbose: bool = False,
    ):
        self.hosts = hosts
        self.port = port
        self.keyspace = keyspace
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.store: Optional[ScyllaUrlStore] = None
        self.service: Optional[URLShortenerService] = None

    async def initialize(self):
        """Open the store session and build the service."""
        self.store = ScyllaUrlStore(
            hosts=self.hosts,
            port=self.port,
            keyspace=self.keyspace,
            logger=self.logger,
        )
        await self.store.connect()

        self.service = URLShortenerService(
            store=self.store,
            key_generator=ShortKeyGenerator(),
            logger=self.logger,
        )

    async def cleanup(self):
        """Release the store session."""
        if self.service:
            await self.service.close()

    async def shorten(self, long_url: str):
        """Shorten a URL."""
        try:
            result = await self.service.shorten(long_url)
        except ShortenerError as e:
            return _print_error(str(e))

        print(json.dumps({"success": True, **result.to_dict()}, indent=2))
        return 0

    async def resolve(self, short_key: str):
        """Get the long URL for a short key."""
        try:
            long_url = await self.service.resolve(short_key)
        except NotFoundError:
            return _print_error(f"Short key '{short_key}' not found")
        except ShortenerError as e:
            return _print_error(str(e))

        print(json.dumps({
            "success": True,
            "short_key": short_key,
            "long_url": long_url,
        }, indent=2))
        return 0

    async def health(self):
        """Check store health."""
        health_status = await self.service.health_check()
        print(json.dumps({"success": True, "health": health_status}, indent=2))
        return 0 if health_status["overall"] else 1


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="URL Shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Get original URL
  %(prog)s resolve Bx3kQ9aZ

  # Check health
  %(prog)s health
        """
    )

    parser.add_argument(
        "--hosts",
        default=os.getenv("SCYLLA_HOSTS", "127.0.0.1"),
        help="Comma-separated ScyllaDB contact points (default: from SCYLLA_HOSTS env or 127.0.0.1)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("SCYLLA_PORT", DEFAULT_PORT)),
        help="ScyllaDB CQL port"
    )
    parser.add_argument(
        "--keyspace",
        default=os.getenv("SCYLLA_KEYSPACE", DEFAULT_KEYSPACE),
        help="Keyspace name"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("long_url", help="URL to shorten")

    resolve_parser = subparsers.add_parser("resolve", help="Get original URL")
    resolve_parser.add_argument("short_key", help="Short key to lookup")

    subparsers.add_parser("health", help="Check store health")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    cli = URLShortenerCLI(
        hosts=[h.strip() for h in args.hosts.split(",") if h.strip()],
        port=args.port,
        keyspace=args.keyspace,
        verbose=args.verbose,
    )

    try:
        await cli.initialize()
    except ShortenerError as e:
        return _print_error(str(e))

    try:
        if args.command == "shorten":
            return await cli.shorten(args.long_url)
        elif args.command == "resolve":
            return await cli.resolve(args.short_key)
        elif args.command == "health":
            return await cli.health()
        else:
            parser.print_help()
            return 1
    finally:
        await cli.cleanup()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
