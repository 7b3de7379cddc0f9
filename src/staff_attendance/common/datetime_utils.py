from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def load_timezone(name: str | None) -> Optional[tzinfo]:
    """Resolve an IANA zone name; empty means naive server-local time."""
    if not name:
        return None
    return ZoneInfo(name)


def now_local(tz: Optional[tzinfo] = None) -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    if tz is None:
        return datetime.now()
    return datetime.now(tz=tz)


def local_midnight(now: datetime) -> datetime:
    return datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)


def day_window(now: datetime) -> tuple[datetime, datetime]:
    """Half-open [local midnight, next local midnight) around `now`.

    Aware datetimes keep their zone, so the end is the next wall-clock midnight
    even across DST changes.
    """
    start = local_midnight(now)
    return start, start + timedelta(days=1)


def date_window(day: date, tz: Optional[tzinfo] = None) -> tuple[datetime, datetime]:
    return day_window(datetime.combine(day, time.min, tzinfo=tz))


def to_naive_local(dt: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Convert to the app zone and strip tzinfo (MySQL DATETIME storage)."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(tz).replace(tzinfo=None)


def as_local(dt: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Bring a stored timestamp back into the app's notion of local time."""
    if tz is None:
        return dt.astimezone().replace(tzinfo=None) if dt.tzinfo else dt
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)
