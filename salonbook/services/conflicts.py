"""Technician double-booking detection at minute granularity."""

from datetime import datetime, timedelta

from sqlalchemy import and_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.core.errors import ConflictError
from salonbook.models.appointment import Appointment, TECH_SLOT_CONSTRAINT
from salonbook.utils.tz import truncate_to_minute

CONFLICT_MESSAGE = "This nail tech already has an appointment at that time."


async def find_conflict(db: AsyncSession, nail_tech_id: int, candidate: datetime) -> Appointment | None:
    """Any appointment of the technician within the candidate's minute."""
    minute = truncate_to_minute(candidate)
    result = await db.execute(
        select(Appointment)
        .where(
            and_(
                Appointment.nail_tech_id == nail_tech_id,
                Appointment.scheduled_at >= minute,
                Appointment.scheduled_at < minute + timedelta(minutes=1),
            )
        )
        .limit(1)
    )
    return result.scalars().first()


async def ensure_slot_free(db: AsyncSession, nail_tech_id: int | None, candidate: datetime) -> None:
    """Raise ConflictError if the technician is already booked that minute.

    This is only the fast path; the unique index on (nail_tech_id,
    scheduled_at) is what holds under concurrent inserts.
    """
    if nail_tech_id is None:
        return
    if await find_conflict(db, nail_tech_id, candidate):
        raise ConflictError(CONFLICT_MESSAGE, field="date")


def is_slot_violation(exc: IntegrityError) -> bool:
    """True when an insert failed on the technician/minute unique index."""
    orig = getattr(exc, "orig", None)
    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", "") or ""
    if constraint_name:
        return constraint_name == TECH_SLOT_CONSTRAINT

    # asyncpg / sqlite only give us the message text
    text = str(orig if orig is not None else exc)
    if TECH_SLOT_CONSTRAINT in text:
        return True
    return "UNIQUE constraint failed" in text and "appointments.scheduled_at" in text
