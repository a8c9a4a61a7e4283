# =============================================================================
# Core Utilities for Shift Request Calendar
# =============================================================================

from datetime import datetime, date, timedelta
from typing import Tuple, Union
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

from core.exceptions import ValidationError
from models.constants import APP_TIMEZONE

def parse_date(value: Union[str, date, None]) -> date:
    """Accept a date or an ISO 'YYYY-MM-DD' string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not str(value).strip():
        raise ValidationError("日付を選択してください")
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError(f"日付の形式が正しくありません: {value}")

def date_range(start: date, end: date):
    """Generate date range from start to end (inclusive)."""
    d = start
    while d <= end:
        yield d
        d += timedelta(days=1)

def validate_month(year: int, month: int) -> None:
    if not 1 <= month <= 12:
        raise ValidationError(f"月の指定が正しくありません: {year}-{month}")

def month_start_end(year: int, month: int) -> Tuple[date, date]:
    """Get start and end dates for a month."""
    validate_month(year, month)
    start = date(year, month, 1)
    end = (start + relativedelta(months=1)) - timedelta(days=1)
    return start, end

def add_months(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move (year, month) by delta months, wrapping the year."""
    moved = date(year, month, 1) + relativedelta(months=delta)
    return moved.year, moved.month

def month_key(year: int, month: int) -> str:
    return f"{year}-{month:02d}"

def app_now(tz_name: str = APP_TIMEZONE) -> datetime:
    """Current wall-clock time in the app timezone, as a naive datetime."""
    return datetime.now(ZoneInfo(tz_name)).replace(tzinfo=None)
