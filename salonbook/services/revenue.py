"""Revenue reporting over completed appointments.

Buckets are local-calendar periods in the requested zone: each appointment's
instant is moved to local time, truncated to its day/week/month start at
local midnight, and that midnight converted back to UTC is the bucket key.
Weeks start on Monday.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.core.errors import ValidationError
from salonbook.models.appointment import Appointment, AppointmentStatus
from salonbook.services.pricing import appointment_total_cents
from salonbook.utils.tz import (
    ensure_utc,
    local_day_start_utc,
    local_midnight_utc,
    local_next_day_start_utc,
    resolve_timezone,
)

logger = logging.getLogger(__name__)

GRANULARITIES = ("day", "week", "month")


@dataclass(frozen=True)
class RevenueBucket:
    bucket_start: datetime
    count: int
    revenue_cents: int


def bucket_start_date(local_day: date, granularity: str) -> date:
    """First local calendar date of the period containing ``local_day``."""
    if granularity == "week":
        return local_day - timedelta(days=local_day.weekday())
    if granularity == "month":
        return local_day.replace(day=1)
    return local_day


def bucket_start_utc(instant: datetime, granularity: str, tz: ZoneInfo) -> datetime:
    local_day = ensure_utc(instant).astimezone(tz).date()
    return local_midnight_utc(bucket_start_date(local_day, granularity), tz)


async def revenue_buckets(
    db: AsyncSession,
    granularity: str = "day",
    date_from: str | date | None = None,
    date_to: str | date | None = None,
    tz: str | None = None,
) -> list[RevenueBucket]:
    """Completed-appointment count and revenue per local period, ascending.

    ``date_from`` is inclusive and ``date_to`` inclusive of its whole local
    day. Periods without completed appointments are omitted.
    """
    if granularity not in GRANULARITIES:
        raise ValidationError(
            f"granularity must be one of {', '.join(GRANULARITIES)}", field="granularity"
        )
    zone = resolve_timezone(tz)

    query = select(Appointment.scheduled_at, Appointment.price_cents, Appointment.design_price_cents).where(
        Appointment.status == AppointmentStatus.DONE
    )
    if date_from:
        query = query.where(Appointment.scheduled_at >= local_day_start_utc(date_from, zone))
    if date_to:
        query = query.where(Appointment.scheduled_at < local_next_day_start_utc(date_to, zone))

    rows = (await db.execute(query)).all()

    counts: dict[datetime, int] = {}
    revenue: dict[datetime, int] = {}
    for scheduled_at, price_cents, design_price_cents in rows:
        key = bucket_start_utc(scheduled_at, granularity, zone)
        counts[key] = counts.get(key, 0) + 1
        revenue[key] = revenue.get(key, 0) + appointment_total_cents(price_cents, design_price_cents)

    logger.debug(
        "Revenue %s buckets from=%s to=%s tz=%s: %d rows, %d buckets",
        granularity, date_from, date_to, zone.key, len(rows), len(counts),
    )
    return [RevenueBucket(key, counts[key], revenue[key]) for key in sorted(counts)]
