"""Seed the default service catalog.

Usage:
    python -m salonbook.scripts.seed_services
    python -m salonbook.scripts.seed_services --list
    python -m salonbook.scripts.seed_services --database-url=sqlite+aiosqlite:///./dev.db

Services that already exist (matched by name) are left untouched.
"""

import argparse
import asyncio
import sys

from salonbook.core.config import settings
from salonbook.core.database import Database
from salonbook.services.catalog import DEFAULT_SERVICES, list_services, seed_default_services


async def seed(database_url: str, list_only: bool) -> None:
    database = Database(database_url)
    try:
        if database_url.startswith("sqlite"):
            await database.create_all()
        async with database.session_factory() as db:
            if not list_only:
                added = await seed_default_services(db)
                print(f"✅ Added {added} of {len(DEFAULT_SERVICES)} default services")
            for service in await list_services(db):
                state = "active" if service.active else "inactive"
                print(f"  {service.id:>4}  {service.name:<35} ${service.price_cents / 100:>7.2f}  {state}")
    finally:
        await database.dispose()


def main():
    parser = argparse.ArgumentParser(description="Seed the default salon service catalog")
    parser.add_argument(
        "--database-url",
        default=settings.DATABASE_URL,
        help="SQLAlchemy async URL (defaults to DATABASE_URL)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Only list the current catalog",
    )
    args = parser.parse_args()

    if "+" not in args.database_url.split("://", 1)[0]:
        print("❌ Error: database URL must name an async driver, e.g. postgresql+asyncpg://", file=sys.stderr)
        sys.exit(1)

    asyncio.run(seed(args.database_url, args.list))


if __name__ == "__main__":
    main()
