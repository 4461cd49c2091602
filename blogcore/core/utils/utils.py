import calendar
import unicodedata
from datetime import date, datetime, time, timezone
from typing import Optional, Tuple, Union

DateLike = Union[date, datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_storage_time(value: Optional[datetime]) -> Optional[datetime]:
    """Convert to aware UTC; naive values are taken as UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return to_storage_time(value).date()  # type: ignore
    return value


def month_bounds(value: DateLike) -> Tuple[datetime, datetime]:
    day = _as_date(value)
    last_day = calendar.monthrange(day.year, day.month)[1]
    return (
        datetime.combine(day.replace(day=1), time.min, tzinfo=timezone.utc),
        datetime.combine(day.replace(day=last_day), time.max, tzinfo=timezone.utc),
    )


def year_bounds(value: DateLike) -> Tuple[datetime, datetime]:
    day = _as_date(value)
    return (
        datetime.combine(date(day.year, 1, 1), time.min, tzinfo=timezone.utc),
        datetime.combine(date(day.year, 12, 31), time.max, tzinfo=timezone.utc),
    )


def ascii_fold(text: str) -> str:
    normalized = unicodedata.normalize("NFKD", text)
    return normalized.encode("ascii", "ignore").decode("ascii")
