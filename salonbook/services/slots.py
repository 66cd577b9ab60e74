"""Booking grid for a shop-local day.

Slots are generated in local wall-clock time from opening to closing hours,
then annotated with existing bookings so the UI can grey them out.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.core.config import settings
from salonbook.core.database import utcnow
from salonbook.core.errors import ConfigurationError
from salonbook.models.appointment import Appointment
from salonbook.services.catalog import get_service
from salonbook.utils.tz import (
    format_clock_label,
    local_day_start_utc,
    local_next_day_start_utc,
    parse_ymd,
    resolve_timezone,
    truncate_to_minute,
)

WEEKDAYS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")


@dataclass(frozen=True)
class TimeSlot:
    label: str
    start_utc: datetime
    end_utc: datetime
    disabled: bool
    booked: bool = False
    conflict: bool = False


def time_to_minutes(t: str) -> int:
    """Convert HH:MM string to minutes since midnight."""
    try:
        h, m = map(int, t.split(":"))
    except (ValueError, AttributeError):
        raise ConfigurationError(f"Invalid shop hours value: {t!r}")
    return h * 60 + m


def _local(day: date, minutes: int, tz: ZoneInfo) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz) + timedelta(minutes=minutes)


def generate_time_slots(
    day: date,
    tz: ZoneInfo,
    open_time: str,
    close_time: str,
    step_minutes: int = 15,
    duration_min: int | None = None,
    breaks: tuple[tuple[str, str], ...] = (),
    closed_weekdays: tuple[str, ...] = (),
    now: datetime | None = None,
) -> list[TimeSlot]:
    """Walk the local day from open to close in ``step_minutes``.

    A slot is dropped once the service would run past closing; it is
    disabled when it has already started (today) or falls in a break.
    """
    if WEEKDAYS[day.weekday()] in closed_weekdays:
        return []
    if step_minutes <= 0:
        raise ConfigurationError("SLOT_STEP_MINUTES must be positive")

    start_minutes = time_to_minutes(open_time)
    end_minutes = time_to_minutes(close_time)
    break_windows = [(time_to_minutes(s), time_to_minutes(e)) for s, e in breaks]
    now = now or utcnow()

    slots = []
    current = start_minutes
    while current <= end_minutes:
        if duration_min and current + duration_min > end_minutes:
            break

        start_local = _local(day, current, tz)
        end_local = start_local + timedelta(minutes=duration_min or 0)
        in_break = any(b_start <= current < b_end for b_start, b_end in break_windows)
        is_past = start_local < now

        slots.append(TimeSlot(
            label=format_clock_label(start_local, tz),
            start_utc=truncate_to_minute(start_local),
            end_utc=truncate_to_minute(end_local),
            disabled=is_past or in_break,
        ))
        current += step_minutes

    return slots


async def available_slots(
    db: AsyncSession,
    ymd: str | date,
    service_id: int | None = None,
    nail_tech_id: int | None = None,
    now: datetime | None = None,
) -> list[TimeSlot]:
    """Grid for a shop-local day, marked with existing bookings.

    Cancelled appointments still hold their minute, so they count as booked.
    """
    day = parse_ymd(ymd)
    tz = resolve_timezone(settings.SHOP_TIMEZONE)
    duration = None
    if service_id is not None:
        duration = (await get_service(db, service_id)).duration_min

    breaks = ()
    if settings.SHOP_BREAK_START and settings.SHOP_BREAK_END:
        breaks = ((settings.SHOP_BREAK_START, settings.SHOP_BREAK_END),)

    slots = generate_time_slots(
        day,
        tz,
        settings.SHOP_OPEN_TIME,
        settings.SHOP_CLOSE_TIME,
        step_minutes=settings.SLOT_STEP_MINUTES,
        duration_min=duration,
        breaks=breaks,
        closed_weekdays=tuple(d.lower()[:3] for d in settings.SHOP_CLOSED_WEEKDAYS),
        now=now,
    )
    if not slots:
        return slots

    result = await db.execute(
        select(Appointment.scheduled_at, Appointment.nail_tech_id).where(
            and_(
                Appointment.scheduled_at >= local_day_start_utc(day, tz),
                Appointment.scheduled_at < local_next_day_start_utc(day, tz),
            )
        )
    )
    booked: dict[datetime, set] = {}
    for scheduled_at, tech_id in result.all():
        booked.setdefault(truncate_to_minute(scheduled_at), set()).add(tech_id)

    annotated = []
    for slot in slots:
        techs = booked.get(slot.start_utc)
        annotated.append(replace(
            slot,
            booked=bool(techs),
            conflict=nail_tech_id is not None and bool(techs) and nail_tech_id in techs,
        ))
    return annotated
