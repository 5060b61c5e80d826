#!/usr/bin/env python3
"""Inspect or maintain the local catalog cache.

Usage:
    python scripts/manage_cache.py stats
    python scripts/manage_cache.py sweep
    python scripts/manage_cache.py clear [--yes]
    python scripts/manage_cache.py warm QUERY [--pages=N]

Commands:
    stats   Show cached row counts (expired rows included)
    sweep   Delete every record older than the cache TTL
    clear   Delete every cached movie and detail
    warm    Fetch search pages from TMDB into the cache
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from reelcache.db.database import engine
from reelcache.services.cache_store import LocalCacheStore
from reelcache.services.tmdb import CatalogClientError, TMDBClient
from reelcache.utils.http_client import close_all_clients
from reelcache.utils.logging import setup_logging


async def warm_cache(store: LocalCacheStore, query: str, pages: int) -> None:
    """Fetch up to ``pages`` pages of ``query`` into the cache."""
    client = TMDBClient()
    for page in range(1, pages + 1):
        try:
            response = await client.search_movies(query, page)
        except CatalogClientError as e:
            print(f"Page {page}: error: {e}")
            break
        written = await store.upsert_movies(response.results)
        print(f"Page {page}/{response.total_pages}: cached {written} movies")
        if page >= response.total_pages:
            break


async def main(args: argparse.Namespace) -> int:
    store = LocalCacheStore(engine)
    await store.initialize()

    try:
        if args.command == "stats":
            counts = await store.stats()
            print(f"Movies: {counts['movies']}, Details: {counts['details']}")
        elif args.command == "sweep":
            movies, details = await store.sweep_expired()
            print(f"Deleted {movies} expired movies and {details} expired details")
        elif args.command == "clear":
            if not args.yes:
                answer = input("Delete every cached movie and detail? [y/N] ")
                if answer.strip().lower() != "y":
                    print("Aborted")
                    return 1
            movies, details = await store.clear_all()
            print(f"Deleted {movies} movies and {details} details")
        elif args.command == "warm":
            await warm_cache(store, args.query, args.pages)
    finally:
        await close_all_clients()
        await engine.dispose()

    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Maintain the local catalog cache")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("stats", help="Show cached row counts")
    subparsers.add_parser("sweep", help="Delete expired records")
    clear_parser = subparsers.add_parser("clear", help="Delete every cached record")
    clear_parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    warm_parser = subparsers.add_parser("warm", help="Fetch search pages into the cache")
    warm_parser.add_argument("query", help="Search query")
    warm_parser.add_argument("--pages", type=int, default=1, help="Pages to fetch (default: 1)")
    args = parser.parse_args()

    setup_logging("INFO")
    sys.exit(asyncio.run(main(args)))
