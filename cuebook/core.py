# cuebook/core.py

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Iterable


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    # Half-open [start, end): a booking ending at T does not clash with one starting at T
    return a_start < b_end and b_start < a_end


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_storage(moment: datetime) -> datetime:
    """Aware instant -> aware UTC, the form kept in the database."""
    return moment.astimezone(timezone.utc)


def from_storage(moment: datetime) -> datetime:
    """Database value -> aware UTC. SQLite hands back naive UTC on some drivers."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def venue_timezone(offset_hours: int) -> timezone:
    return timezone(timedelta(hours=offset_hours))


def local_day_bounds(day: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """UTC instants delimiting the civil date `day` in `tz`, as [start, end)."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = start + timedelta(days=1)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


SNOOKER = "Snooker"
POOL = "Pool"
TABLE = "Table"


def resource_type(name: str, pool_synonyms: Iterable[str] = ()) -> str:
    """
    Coarse display label for a table, from the first word of its name.

    "Snooker 2" -> "Snooker", "pool table" -> "Pool", anything else -> "Table".
    """
    words = name.split()
    if not words:
        return TABLE
    first = words[0].lower()
    if first == "snooker":
        return SNOOKER
    if first == "pool" or first in {s.lower() for s in pool_synonyms}:
        return POOL
    return TABLE
