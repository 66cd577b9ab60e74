"""Seed reference data on app startup."""

import logging

from salonbook.core.database import Database
from salonbook.services.catalog import seed_default_services

logger = logging.getLogger(__name__)


async def seed_reference_data(database: Database) -> None:
    """Insert the default service catalog if it is missing.

    Seeding is best-effort: a failure is logged and startup continues.
    """
    async with database.session_factory() as db:
        try:
            added = await seed_default_services(db)
            if added:
                logger.info("Seeded %d default services", added)
            else:
                logger.info("Default services already present")
        except Exception:
            logger.exception("Failed to seed default services")
            await db.rollback()
