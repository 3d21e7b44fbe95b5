"""Timezone helpers for the Central Time reference zone.

The database session time zone is pinned to America/Chicago:

- Central Standard Time (CST) = GMT-6 (winter)
- Central Daylight Time (CDT) = GMT-5 (summer)

Naive datetimes passed to these helpers are treated as UTC.
"""
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo

TIMEZONE = "America/Chicago"  # GMT-6/GMT-5

# en-US abbreviations, independent of the process locale
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@lru_cache
def _zone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def _localize(instant: datetime, zone: str) -> datetime:
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(_zone(zone))


def is_daylight_saving(instant: datetime, zone: str = TIMEZONE) -> bool:
    """Return True if the zone observes daylight saving at ``instant``.

    Transition instants take whatever offset the tz database assigns them.
    """
    return bool(_localize(instant, zone).dst())


def offset_label(instant: datetime, zone: str = TIMEZONE) -> str:
    """GMT offset label for the zone at ``instant``, e.g. ``GMT-6``."""
    offset = _localize(instant, zone).utcoffset() or timedelta(0)
    minutes = int(offset.total_seconds()) // 60
    sign = "-" if minutes < 0 else "+"
    hours, remainder = divmod(abs(minutes), 60)
    if remainder:
        return f"GMT{sign}{hours}:{remainder:02d}"
    if hours == 0:
        return "GMT"
    return f"GMT{sign}{hours}"


def now_in_timezone(zone: str = TIMEZONE) -> datetime:
    """Current time as an aware datetime in the zone."""
    return datetime.now(_zone(zone))


def current_offset_label(zone: str = TIMEZONE) -> str:
    """GMT offset label for the zone right now ("GMT-6" or "GMT-5" for Central)."""
    return offset_label(datetime.now(timezone.utc), zone)


def format_human_readable(instant: datetime, zone: str = TIMEZONE) -> str:
    """Format for display, e.g. ``Dec 23, 2025, 3:45 PM``.

    No zone abbreviation is included; append ``current_offset_label()`` if needed.
    """
    local = _localize(instant, zone)
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{_MONTHS[local.month - 1]} {local.day}, {local.year}, {hour}:{local:%M} {meridiem}"


def format_full_timestamp(instant: datetime, zone: str = TIMEZONE) -> str:
    """Format as ``MM/DD/YYYY, HH:MM:SS`` (24-hour) in the zone."""
    return _localize(instant, zone).strftime("%m/%d/%Y, %H:%M:%S")
