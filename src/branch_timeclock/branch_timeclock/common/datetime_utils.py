from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local(tz: Optional[tzinfo] = None) -> datetime:
    """Current wall-clock time at the branch, as a naive datetime.

    With ``tz`` the time is read in that zone and stored naive, so punches and
    day buckets follow the branch clock rather than the server's zone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    if tz is None:
        return datetime.now()
    return datetime.now(tz).replace(tzinfo=None)


def load_timezone(name: Optional[str]) -> Optional[tzinfo]:
    if not name:
        return None
    return ZoneInfo(name)


def local_day(value: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar day of a timestamp as seen on the branch clock.

    Naive datetimes are already branch-local (see ``now_local``). Aware ones are
    converted to ``tz`` (or the host timezone) before taking the date, never to UTC.
    """
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(tz).date()
