#!/usr/bin/env python3
"""
Command-line interface for URL shortener service.

Talks to the database directly through the same services the HTTP app uses.

Usage:
    python shortlink_cli.py shorten <url>
    python shortlink_cli.py resolve <short_code>
    python shortlink_cli.py health
"""

import argparse
import asyncio
import json
import sys
import os
from typing import Optional

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from config import Config, SHORT_CODE_MIN_LENGTH, SHORT_CODE_MAX_LENGTH, load_config
from shortlink.database.postgres import URLStorePostgres
from shortlink.errors import ShortLinkError
from shortlink.resolver import UniqueCodeResolver
from shortlink.service import ShortenService, RedirectService
from shortlink.shortcode import ShortCodeGenerator
from shortlink.common.logging_config import setup_logging
from shortlink.common.links import build_short_url


class ShortLinkCLI:
    """Command-line interface for URL shortener."""

    def __init__(self, config: Config, verbose: bool = False):
        """Initialize CLI.

        Args:
            config: Settings, with any command-line overrides applied
            verbose: Log at DEBUG instead of WARNING
        """
        self.config = config
        self.logger = setup_logging(
            level="DEBUG" if verbose else "WARNING",
            component_levels=None if verbose else config.log_levels,
        )
        self.store: Optional[URLStorePostgres] = None
        self.shorten_service: Optional[ShortenService] = None
        self.redirect_service: Optional[RedirectService] = None

    async def initialize(self):
        """Connect to the database and build services."""
        self.store = URLStorePostgres(
            db_config=self.config.database_url,
            user=self.config.database_user,
            password=self.config.database_password,
            connect_timeout_ms=self.config.database_connect_timeout_ms,
            logger=self.logger,
        )
        await self.store.connect()

        resolver = UniqueCodeResolver(
            store=self.store,
            generator=ShortCodeGenerator(default_length=self.config.short_code_length),
            max_attempts=self.config.max_attempts,
            logger=self.logger,
        )
        self.shorten_service = ShortenService(
            store=self.store,
            resolver=resolver,
            conflict_retries=self.config.conflict_retries,
            logger=self.logger,
        )
        self.redirect_service = RedirectService(store=self.store, logger=self.logger)

    async def cleanup(self):
        """Cleanup resources."""
        if self.store:
            await self.store.close()

    async def shorten(self, url: str) -> int:
        """Shorten a URL."""
        result = await self.shorten_service.shorten(url)
        mapping = result.mapping
        print(json.dumps({
            "success": True,
            "created": result.created,
            "short_code": mapping.short_code,
            "short_url": build_short_url(
                short_code=mapping.short_code,
                base_url=self.config.base_url,
                path_prefix=self.config.path_prefix,
            ),
            "original_url": mapping.original_url,
            "created_at": mapping.created_at.isoformat(),
        }, indent=2))
        return 0

    async def resolve(self, short_code: str) -> int:
        """Get original URL for a short code."""
        original_url = await self.redirect_service.resolve(short_code)
        print(json.dumps({
            "success": True,
            "short_code": short_code,
            "original_url": original_url,
        }, indent=2))
        return 0

    async def health(self) -> int:
        """Check database health."""
        healthy = await self.store.health_check()
        print(json.dumps({
            "success": healthy,
            "database": "healthy" if healthy else "unhealthy",
        }, indent=2))
        return 0 if healthy else 1


def print_error(message: str) -> None:
    print(json.dumps({"success": False, "error": message}, indent=2), file=sys.stderr)


async def main():
    """Main entry point."""
    config = load_config()

    parser = argparse.ArgumentParser(
        description="URL Shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Get original URL
  %(prog)s resolve aZ3k9Q

  # Check database health
  %(prog)s health
        """
    )

    parser.add_argument(
        "--db-url",
        default=config.database_url,
        help="PostgreSQL connection URL (default: DATABASE_URL setting)"
    )

    parser.add_argument(
        "--length",
        type=int,
        default=config.short_code_length,
        help=f"Length of generated short codes, {SHORT_CODE_MIN_LENGTH}..{SHORT_CODE_MAX_LENGTH} (default: SHORT_CODE_LENGTH setting)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")

    resolve_parser = subparsers.add_parser("resolve", help="Get original URL")
    resolve_parser.add_argument("short_code", help="Short code to lookup")

    subparsers.add_parser("health", help="Check database health")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    if not SHORT_CODE_MIN_LENGTH <= args.length <= SHORT_CODE_MAX_LENGTH:
        parser.error(f"--length must be between {SHORT_CODE_MIN_LENGTH} and {SHORT_CODE_MAX_LENGTH}")

    config = config.model_copy(update={"database_url": args.db_url, "short_code_length": args.length})
    cli = ShortLinkCLI(config, verbose=args.verbose)

    try:
        await cli.initialize()

        if args.command == "shorten":
            return await cli.shorten(args.url)
        elif args.command == "resolve":
            return await cli.resolve(args.short_code)
        elif args.command == "health":
            return await cli.health()
        else:
            parser.print_help()
            return 1

    except ShortLinkError as e:
        print_error(e.message)
        return 1
    finally:
        await cli.cleanup()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
