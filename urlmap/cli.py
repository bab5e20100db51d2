#!/usr/bin/env python3
"""
Command-line interface for url-map.

Usage:
    urlmap-cli shorten <url>
    urlmap-cli resolve <code>
    urlmap-cli stats <code>
    urlmap-cli recent [--limit N]
    urlmap-cli health
    urlmap-cli init-db
"""

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from .app import build_service
from .common.logging_config import setup_logging
from .config import Config, load_config
from .database.models import Mapping
from .errors import URLMapError
from .service import MappingService


class URLMapCLI:
    """Command-line interface for url-map."""

    def __init__(
        self,
        config: Config,
        service: Optional[MappingService] = None,
        verbose: bool = False,
    ):
        """Initialize CLI.

        Args:
            config: Configuration used to build the service
            service: Optional prebuilt service (skips building one)
            verbose: Verbose logging
        """
        self.config = config
        self.verbose = verbose
        self.logger = setup_logging(
            level="DEBUG" if verbose else "WARNING",
            stream=sys.stderr,
        )
        self.service = service

    def initialize(self) -> None:
        """Build storage and service from configuration."""
        if self.service is None:
            self.service = build_service(self.config, logger=self.logger)

    async def cleanup(self) -> None:
        """Cleanup resources."""
        if self.service:
            await self.service.close()

    @staticmethod
    def _emit(payload: dict) -> int:
        print(json.dumps({"success": True, **payload}, indent=2))
        return 0

    @staticmethod
    def _fail(error: URLMapError) -> int:
        print(json.dumps({
            "success": False,
            "error": error.kind,
            "message": error.message,
        }, indent=2), file=sys.stderr)
        return 1

    async def shorten(self, url: str) -> int:
        """Shorten a URL."""
        try:
            mapping = await self.service.shorten(url)
        except URLMapError as e:
            return self._fail(e)
        return self._emit(mapping.to_dict())

    async def resolve(self, code: str) -> int:
        """Resolve a short code (counts a visit)."""
        try:
            mapping = await self.service.resolve(code)
        except URLMapError as e:
            return self._fail(e)
        return self._emit(mapping.to_dict())

    async def stats(self, code: str) -> int:
        """Get statistics for a short code (does not count a visit)."""
        try:
            mapping = await self.service.stats(code)
        except URLMapError as e:
            return self._fail(e)
        return self._emit(mapping.to_dict())

    async def recent(self, limit: int = 100) -> int:
        """List recent mappings."""
        try:
            mappings: List[Mapping] = await self.service.recent(limit)
        except URLMapError as e:
            return self._fail(e)
        return self._emit({
            "count": len(mappings),
            "urls": [m.to_dict() for m in mappings],
        })

    async def health(self) -> int:
        """Check storage health."""
        health_status = await self.service.health_check()
        print(json.dumps({
            "success": health_status["overall"],
            "health": health_status,
        }, indent=2))
        return 0 if health_status["overall"] else 1

    async def init_db(self) -> int:
        """Create the PostgreSQL schema."""
        storage = self.service.storage
        if not hasattr(storage, "ensure_schema"):
            print(json.dumps({
                "success": False,
                "error": "invalid_input",
                "message": f"init-db requires the postgres backend, not {self.config.storage_backend!r}",
            }, indent=2), file=sys.stderr)
            return 1

        try:
            await storage.ensure_schema()
        except URLMapError as e:
            return self._fail(e)
        return self._emit({"message": "Schema ready"})


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="urlmap-cli",
        description="url-map CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s --backend postgres shorten https://example.com/long/url

  # Resolve (counts a visit)
  %(prog)s --backend postgres resolve Ax7Qp2

  # Statistics (read-only)
  %(prog)s --backend postgres stats Ax7Qp2
        """
    )

    parser.add_argument(
        "--backend",
        choices=["memory", "postgres"],
        help="Storage backend (default: from STORAGE_BACKEND env)"
    )
    parser.add_argument(
        "--database-url",
        help="PostgreSQL connection URL (default: from DATABASE_URL env)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a short code")
    resolve_parser.add_argument("code", help="Short code to resolve")

    stats_parser = subparsers.add_parser("stats", help="Get URL statistics")
    stats_parser.add_argument("code", help="Short code to get stats for")

    recent_parser = subparsers.add_parser("recent", help="List recent URLs")
    recent_parser.add_argument("--limit", type=int, default=100, help="Maximum number to return")

    subparsers.add_parser("health", help="Check storage health")
    subparsers.add_parser("init-db", help="Create the PostgreSQL schema")

    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    overrides = {}
    if args.backend:
        overrides["storage_backend"] = args.backend
    if args.database_url:
        overrides["database_url"] = args.database_url
    config = load_config(**overrides)

    cli = URLMapCLI(config=config, verbose=args.verbose)
    cli.initialize()

    try:
        if args.command == "shorten":
            return await cli.shorten(args.url)
        elif args.command == "resolve":
            return await cli.resolve(args.code)
        elif args.command == "stats":
            return await cli.stats(args.code)
        elif args.command == "recent":
            return await cli.recent(args.limit)
        elif args.command == "health":
            return await cli.health()
        elif args.command == "init-db":
            return await cli.init_db()
        else:
            parser.print_help()
            return 1
    finally:
        await cli.cleanup()


def run() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
