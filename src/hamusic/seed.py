"""Seed the artist catalog from a JSON file.

Usage:
    hamusic-seed data.json

    # Or against another database:
    hamusic-seed data.json --database-url sqlite+aiosqlite:///./other.db

The file holds a JSON array of {"name": ..., "youtube": ...} objects. Each entry gets
its avatar from YouTube; entries whose link can't be parsed are skipped. Ids continue
from whatever is already in the catalog, so seeding twice adds the artists twice.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from hamusic.application.services.youtube_resolver import YouTubeResolver
from hamusic.application.use_cases.seed_catalog import (
    SeedCatalogRequest,
    SeedCatalogResponse,
    SeedCatalogUseCase,
    SeedEntry,
)
from hamusic.config import Settings, get_settings
from hamusic.domain.exceptions import DomainException
from hamusic.infrastructure.integrations.http_pool import HttpClientPool
from hamusic.infrastructure.integrations.youtube_client import YouTubeClient
from hamusic.infrastructure.lifecycle import ensure_sqlite_directory
from hamusic.infrastructure.observability import configure_logging
from hamusic.infrastructure.persistence import (
    ArtistRepository,
    Database,
    SqlKeyValueStore,
)


def load_seed_entries(path: Path) -> list[SeedEntry]:
    """Read seed entries from a JSON file.

    Raises:
        ValueError: If the file isn't a JSON array of objects with name and youtube
    """
    data: Any = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array")

    entries: list[SeedEntry] = []
    for index, row in enumerate(data):
        if not isinstance(row, dict) or not row.get("name") or not row.get("youtube"):
            raise ValueError(f"Entry {index} needs 'name' and 'youtube'")
        entries.append(SeedEntry(name=str(row["name"]), youtube=str(row["youtube"])))
    return entries


async def seed_catalog(settings: Settings, entries: list[SeedEntry]) -> SeedCatalogResponse:
    """Open the store, run the seed use case, release all resources."""
    ensure_sqlite_directory(settings)
    db = Database(settings)
    try:
        await db.create_tables()
        repository = ArtistRepository(SqlKeyValueStore(db))
        resolver = YouTubeResolver(YouTubeClient(settings.youtube))
        use_case = SeedCatalogUseCase(resolver=resolver, repository=repository)
        return await use_case.execute(SeedCatalogRequest(entries=entries))
    finally:
        await HttpClientPool.close()
        await db.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hamusic-seed",
        description="Seed the artist catalog from a JSON file of {name, youtube} entries.",
    )
    parser.add_argument("path", type=Path, help="Path to the seed JSON file")
    parser.add_argument(
        "--database-url",
        default=None,
        help="Override DATABASE_URL for this run",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Console script entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    settings = get_settings()
    if args.database_url:
        settings = settings.model_copy(
            update={
                "database": settings.database.model_copy(update={"url": args.database_url})
            }
        )
    configure_logging(
        log_level=settings.log_level,
        json_format=settings.log_json,
        app_name=settings.app_name,
    )

    try:
        entries = load_seed_entries(args.path)
    except (OSError, ValueError) as e:
        print(f"ERROR: Could not read seed file: {e}", file=sys.stderr)
        return 2

    try:
        result = asyncio.run(seed_catalog(settings, entries))
    except DomainException as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        return 1

    print(f"Seeded {len(result.added)} artists, skipped {len(result.skipped)}")
    for name in result.skipped:
        print(f"  skipped: {name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
