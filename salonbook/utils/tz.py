"""Shop-local time zone helpers.

All instants in the system are UTC. Business-day boundaries, the booking grid
and revenue buckets are defined in the shop's IANA zone; these helpers do the
conversions, looking up the offset for each specific date so daylight-saving
transitions are handled.
"""

import re
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from salonbook.core.config import settings
from salonbook.core.errors import TimeParseError, ValidationError

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})\s*(AM|PM)$", re.IGNORECASE)


def resolve_timezone(name: str | None = None) -> ZoneInfo:
    """Return the ZoneInfo for ``name`` (default: the shop zone)."""
    name = name or settings.SHOP_TIMEZONE
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown time zone: {name}", field="tz")


def _zone(tz: ZoneInfo | str | None) -> ZoneInfo:
    if isinstance(tz, ZoneInfo):
        return tz
    return resolve_timezone(tz)


def parse_ymd(value: str | date) -> date:
    """Parse a ``YYYY-MM-DD`` calendar date."""
    if isinstance(value, datetime):
        raise TimeParseError(f"Expected a calendar date, got an instant: {value!r}")
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (ValueError, AttributeError):
        raise TimeParseError(f'Invalid date "{value}", expected YYYY-MM-DD', field="date")


def ensure_utc(dt: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def truncate_to_minute(dt: datetime) -> datetime:
    return ensure_utc(dt).replace(second=0, microsecond=0)


def is_same_utc_minute(a: datetime, b: datetime) -> bool:
    return truncate_to_minute(a) == truncate_to_minute(b)


def local_midnight_utc(day: date, tz: ZoneInfo | str | None = None) -> datetime:
    """UTC instant of 00:00 local time on ``day``."""
    return datetime.combine(day, time.min, tzinfo=_zone(tz)).astimezone(timezone.utc)


def local_day_start_utc(ymd: str | date, tz: ZoneInfo | str | None = None) -> datetime:
    """Start of the local calendar day as a UTC instant."""
    return local_midnight_utc(parse_ymd(ymd), tz)


def local_next_day_start_utc(ymd: str | date, tz: ZoneInfo | str | None = None) -> datetime:
    """Start of the following local day as a UTC instant (exclusive upper bound)."""
    return local_midnight_utc(parse_ymd(ymd) + timedelta(days=1), tz)


def parse_clock(time_str: str) -> time:
    """Parse a 12-hour ``h:mm AM/PM`` string into a 24-hour time."""
    m = _CLOCK_RE.match(time_str.strip()) if isinstance(time_str, str) else None
    if not m:
        raise TimeParseError(f'Invalid time string: "{time_str}"', field="time")
    hour, minute, meridiem = int(m.group(1)), int(m.group(2)), m.group(3).upper()
    if not 1 <= hour <= 12 or minute > 59:
        raise TimeParseError(f'Invalid time string: "{time_str}"', field="time")
    if meridiem == "PM" and hour != 12:
        hour += 12
    if meridiem == "AM" and hour == 12:
        hour = 0
    return time(hour, minute)


def local_clock_to_utc(calendar_date: date | datetime, time_str: str, tz: ZoneInfo | str | None = None) -> datetime:
    """Combine a local wall-clock time with a calendar date and convert to UTC.

    ``calendar_date`` may be a plain date or an instant; for an instant the
    calendar date is the one it falls on in the local zone.
    """
    zone = _zone(tz)
    clock = parse_clock(time_str)
    if isinstance(calendar_date, datetime):
        day = ensure_utc(calendar_date).astimezone(zone).date()
    else:
        day = calendar_date
    return datetime.combine(day, clock, tzinfo=zone).astimezone(timezone.utc)


def format_in_local_zone(instant: datetime, pattern: str, tz: ZoneInfo | str | None = None) -> str:
    """Render a UTC instant as local wall-clock text using strftime ``pattern``."""
    return ensure_utc(instant).astimezone(_zone(tz)).strftime(pattern)


def format_clock_label(instant: datetime, tz: ZoneInfo | str | None = None) -> str:
    """``h:mm AM`` label without a leading zero on the hour."""
    local = ensure_utc(instant).astimezone(_zone(tz))
    hour12 = local.hour % 12 or 12
    return f"{hour12}:{local.minute:02d} {'AM' if local.hour < 12 else 'PM'}"


def local_date_param(instant: datetime, tz: ZoneInfo | str | None = None) -> str:
    """Local calendar date of an instant as ``YYYY-MM-DD``."""
    return format_in_local_zone(instant, "%Y-%m-%d", tz)
