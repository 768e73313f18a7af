# utils/date_utils.py
"""
Calendar-day helpers. Progress rows are keyed by the UTC date as YYYY-MM-DD,
so every caller resolves "today" through here.
"""
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

DATE_FORMAT = "%Y-%m-%d"


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def to_date_str(day: date) -> str:
    return day.strftime(DATE_FORMAT)


def parse_date_str(value: str) -> date:
    """Raises ValueError for anything that is not a real YYYY-MM-DD date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def today_str(today: Optional[date] = None) -> str:
    return to_date_str(today or utc_today())


def window_dates(end: date, days: int) -> List[str]:
    """`days` date strings walking backward from `end` (inclusive)."""
    return [to_date_str(end - timedelta(days=offset)) for offset in range(days)]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(moment: datetime) -> datetime:
    # SQLite hands timezone-aware columns back naive; they were written as UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def is_expired(expires_at: Optional[datetime], now: Optional[datetime] = None) -> bool:
    if expires_at is None:
        return True
    return (now or utc_now()) > as_utc(expires_at)
