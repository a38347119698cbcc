#!/usr/bin/env python3
"""Seed product catalog script.

Loads the sample brands, types and products into empty collections of
the configured MongoDB database.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --mongo-url mongodb://localhost:27017 --database CatalogDb
"""

import argparse
import asyncio

from catalog_api.catalog.seed import seed_catalog
from catalog_api.infrastructure.config import settings
from catalog_api.infrastructure.database import close_mongo_client, get_catalog_store
from catalog_api.infrastructure.log_config import configure_logging


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the product catalog",
    )
    parser.add_argument(
        "--mongo-url",
        default=settings.mongo_url,
        help=f"MongoDB connection URL (default: {settings.mongo_url})",
    )
    parser.add_argument(
        "--database",
        default=settings.mongo_database,
        help=f"Database name (default: {settings.mongo_database})",
    )
    args = parser.parse_args()

    settings.mongo_url = args.mongo_url
    settings.mongo_database = args.database
    settings.catalog_store = "mongo"
    configure_logging(settings.log_level)

    try:
        result = await seed_catalog(get_catalog_store())
    finally:
        await close_mongo_client()

    print(f"\n{'=' * 50}")
    print(f"Database: {args.database}")
    print(f"Brands inserted: {result['brands']}")
    print(f"Types inserted: {result['types']}")
    print(f"Products inserted: {result['products']}")
    print(f"{'=' * 50}")


if __name__ == "__main__":
    asyncio.run(main())
