#!/usr/bin/env python3
"""
Inspect and maintain the query cache.

Usage:
    python manage_cache.py stats [STORE]                 # Entries per store and query type
    python manage_cache.py clear STORE [QUERY_TYPE]      # Clear a store or one query type
    python manage_cache.py clear-pattern STORE PATTERN   # Clear matching types, e.g. 'dashboard.*'
    python manage_cache.py purge                         # Delete expired entries
    python manage_cache.py warm STORE                    # Compute and cache every report
    python manage_cache.py seed STORE [--days N]         # Load demo orders, then clear caches
"""

import sys
from pathlib import Path

# Add project to path
sys.path.insert(0, str(Path(__file__).parent))

from app.container import container  # noqa: E402
from app.repositories import close_db  # noqa: E402
from etl import seed_store  # noqa: E402
from settings.logging import setup_logging  # noqa: E402

logger = setup_logging(to_file=True)


def show_stats(store_id: str | None = None) -> None:
    """Print cache entries grouped by store and query type."""
    rows = container.cache_store.stats(store_id)
    if not rows:
        print("\nCache is empty.\n")
        return

    print("\n" + "=" * 72)
    print(f"{'STORE':<16} {'QUERY TYPE':<30} {'ENTRIES':>7}  NEWEST")
    print("=" * 72)
    for r in rows:
        ttl = container.cache_store.ttl_for(r["query_type"])
        fresh = "fresh" if container.cache_store.is_fresh(r["query_type"], r["newest"]) else "expired"
        print(
            f"{r['scope_id']:<16} {r['query_type']:<30} {r['entries']:>7}  "
            f"{r['newest']:%Y-%m-%d %H:%M:%S} ({fresh}, ttl {ttl // 60} min)"
        )
    print("=" * 72 + "\n")


def warm(store_id: str) -> None:
    """Compute and cache every dashboard and analytics report for a store."""
    log = logger.bind(store_id=store_id)
    log.info("Warming cache...")
    container.dashboard.load_all(store_id, refresh=True)
    container.analytics.load_all(store_id, refresh=True)
    log.info("Cache warm")


def _option(args: list[str], name: str, default: int) -> int:
    if name in args:
        return int(args[args.index(name) + 1])
    return default


def run(command: str, rest: list[str]) -> int:
    if command == "stats":
        show_stats(rest[0] if rest else None)
    elif command == "clear" and rest:
        query_type = rest[1] if len(rest) > 1 else None
        if not container.cache.invalidate(rest[0], query_type):
            return 1
    elif command == "clear-pattern" and len(rest) == 2:
        if not container.cache.invalidate_pattern(rest[0], rest[1]):
            return 1
    elif command == "purge":
        removed = container.cache_store.purge_expired()
        print(f"Removed {removed} expired entries.")
    elif command == "warm" and rest:
        warm(rest[0])
    elif command == "seed" and rest:
        counts = seed_store(container.conn, rest[0], days=_option(rest, "--days", 30), cache=container.cache)
        print(f"Seeded {rest[0]}: {counts}")
    else:
        print(__doc__)
        return 1
    return 0


def main() -> int:
    args = sys.argv[1:]
    if not args:
        print(__doc__)
        return 1

    container.init()
    try:
        return run(args[0], args[1:])
    finally:
        close_db()


if __name__ == "__main__":
    sys.exit(main())
