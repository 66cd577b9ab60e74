"""Nail technician lookup and creation.

Name uniqueness is enforced by the unique index on ``nail_techs.name``; a
violation means another request created the same name first.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.core.errors import ConflictError, NotFoundError
from salonbook.models.nail_tech import NailTech

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "A nail tech with that name already exists."


async def list_nail_techs(db: AsyncSession) -> list[NailTech]:
    result = await db.execute(select(NailTech).order_by(NailTech.name.asc()))
    return list(result.scalars().all())


async def get_nail_tech(db: AsyncSession, nail_tech_id: int) -> NailTech:
    result = await db.execute(select(NailTech).where(NailTech.id == nail_tech_id))
    nail_tech = result.scalar_one_or_none()
    if not nail_tech:
        raise NotFoundError("Nail tech not found", field="nailTechId")
    return nail_tech


async def find_nail_tech_by_name(db: AsyncSession, name: str) -> NailTech | None:
    result = await db.execute(select(NailTech).where(NailTech.name == name))
    return result.scalar_one_or_none()


async def create_nail_tech(db: AsyncSession, name: str) -> NailTech:
    """Create a technician; a taken name is a conflict, never a merge."""
    nail_tech = NailTech(name=name.strip())
    db.add(nail_tech)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(DUPLICATE_NAME_MESSAGE, field="name")
    logger.info("Nail tech created: id=%s name=%r", nail_tech.id, nail_tech.name)
    return nail_tech


async def resolve_nail_tech(db: AsyncSession, name: str) -> NailTech:
    """Return the technician called ``name``, creating it if needed.

    If a concurrent request inserts the same name between our lookup and our
    insert, the unique index rejects ours and we return the winner's row.
    Must run before anything else is pending in ``db``: the fallback rolls
    the session back.
    """
    name = name.strip()
    existing = await find_nail_tech_by_name(db, name)
    if existing:
        return existing

    nail_tech = NailTech(name=name)
    db.add(nail_tech)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        winner = await find_nail_tech_by_name(db, name)
        if winner is None:
            raise
        logger.info("Nail tech %r created concurrently; using id=%s", name, winner.id)
        return winner

    logger.info("Nail tech created for booking: id=%s name=%r", nail_tech.id, name)
    return nail_tech
