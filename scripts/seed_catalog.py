#!/usr/bin/env python3
"""Seed product catalog script.

Creates a handful of demo products with variants through the catalog
service, so the same rules apply as for API calls (unique SKUs,
variants linked to their product).

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --database-url sqlite+aiosqlite:///catalog.db
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog_api.catalog.service import CatalogService
from catalog_api.domain.exceptions import DuplicateSkuError
from catalog_api.infrastructure.config import settings
from catalog_api.infrastructure.database import Database

DEMO_CATALOG = [
    {
        "name": "Trail Runner",
        "description": "Lightweight running shoe for mixed terrain",
        "price": 89.0,
        "variants": [
            ("Black/42", "TR-BLK-42", 0, 25),
            ("Black/44", "TR-BLK-44", 0, 18),
            ("Orange/42", "TR-ORG-42", 5, 10),
        ],
    },
    {
        "name": "Merino Crew Socks",
        "description": "Cushioned wool socks, pack of three",
        "price": 24.5,
        "variants": [
            ("Grey/M", "MCS-GRY-M", 0, 60),
            ("Grey/L", "MCS-GRY-L", 0, 40),
        ],
    },
    {
        "name": "Canvas Tote",
        "description": "Heavy canvas shopping bag",
        "price": 15.0,
        "variants": [],
    },
]


async def seed(database: Database) -> dict[str, int]:
    """Seed the demo catalog.

    Args:
        database: Open database handle.

    Returns:
        Counts of created and skipped records.
    """
    created_products = 0
    created_variants = 0
    skipped_variants = 0

    async with database.session_factory() as session:
        service = CatalogService(session)

        for item in DEMO_CATALOG:
            product = await service.add_product(
                name=item["name"],
                description=item["description"],
                price=item["price"],
            )
            created_products += 1

            for name, sku_id, additional_cost, count in item["variants"]:
                try:
                    await service.add_variant(
                        product_id=product.id,
                        name=name,
                        sku_id=sku_id,
                        additional_cost=additional_cost,
                        count=count,
                    )
                    created_variants += 1
                except DuplicateSkuError:
                    skipped_variants += 1

    return {
        "products_created": created_products,
        "variants_created": created_variants,
        "variants_skipped": skipped_variants,
    }


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed demo products and variants",
    )
    parser.add_argument(
        "--database-url",
        default=settings.database_url,
        help="SQLAlchemy async database URL (default: DATABASE_URL setting)",
    )
    args = parser.parse_args()

    database = Database(args.database_url)

    print("Creating database tables...")
    await database.create_all()

    try:
        result = await seed(database)
    finally:
        await database.dispose()

    print(f"  ✓ Products: {result['products_created']}")
    print(f"  ✓ Variants: {result['variants_created']}")
    print(f"  ✓ Skipped (SKU exists): {result['variants_skipped']}")


if __name__ == "__main__":
    asyncio.run(main())
