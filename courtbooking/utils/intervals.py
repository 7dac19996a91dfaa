"""Time interval helpers shared by the availability and pricing services."""
from datetime import datetime, timezone
import pytz

# Fixed-width so that string comparison in storage queries is chronological
STORAGE_FORMAT = "%Y-%m-%dT%H:%M:%S.%f+00:00"

def ensure_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC; aware ones are converted to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

def overlaps(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """
    Half-open interval intersection: [start_a, end_a) and [start_b, end_b)
    conflict iff each starts before the other ends. Touching endpoints do not.

    CosmosBookingLedger expresses the same test in its overlap queries
    (c.start_time < @end_time AND c.end_time > @start_time).
    """
    return start_a < end_b and end_a > start_b

def to_storage(value: datetime) -> str:
    return ensure_utc(value).strftime(STORAGE_FORMAT)

def local_hour_and_weekday(value: datetime, tz_name: str) -> tuple[int, int]:
    """
    Hour of day and weekday of `value` in the named zone.
    Weekdays are numbered 0=Sunday .. 6=Saturday.
    """
    local = ensure_utc(value).astimezone(pytz.timezone(tz_name))
    return local.hour, (local.weekday() + 1) % 7
