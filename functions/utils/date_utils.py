from datetime import datetime, date, timedelta
from zoneinfo import ZoneInfo
import logging

from constants import APP_TIMEZONE

log = logging.getLogger(__name__)


class InvalidDateError(ValueError):
    """Raised when a record's date field is missing or is not a calendar date."""

    def __init__(self, field: str, value, record_id: str | None = None):
        self.field = field
        self.value = value
        self.record_id = record_id
        target = f" on record {record_id}" if record_id else ""
        super().__init__(f"Invalid date in '{field}'{target}: {value!r}")


def _to_local_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(APP_TIMEZONE)).replace(tzinfo=None)


def parse_date(value, field: str, record_id: str | None = None) -> datetime:
    """
    Normalizes a stored date value to a naive datetime in the app timezone.

    Accepts datetime objects (including Firestore timestamps), date objects,
    and ISO-8601 strings such as '2023-10-01' or '2023-11-10T10:00:00'.
    """
    if isinstance(value, datetime):
        return _to_local_naive(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value.strip():
        try:
            return _to_local_naive(datetime.fromisoformat(value.strip()))
        except ValueError:
            raise InvalidDateError(field, value, record_id) from None
    raise InvalidDateError(field, value, record_id)


def normalize_now(now: datetime) -> datetime:
    """Brings an injected "now" onto the same naive app-local clock as parsed record dates."""
    return _to_local_naive(now)


def to_midnight(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def elapsed_days(start: datetime, end: datetime) -> int:
    """Whole days from start to end, floored (negative if end is earlier)."""
    return (end - start) // timedelta(days=1)


def add_days(value: datetime, days: int) -> datetime:
    return value + timedelta(days=days)


def current_time() -> datetime:
    """
    Wall-clock "now" in the app timezone. Only entry points should call this;
    the evaluation logic always receives the time as an argument.
    """
    return datetime.now(ZoneInfo(APP_TIMEZONE)).replace(tzinfo=None)
