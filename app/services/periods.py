"""Reporting windows in the store's local time zone."""

from datetime import datetime, time, timedelta
from zoneinfo import ZoneInfo

PERIODS = ("day", "week", "month")


def start_of_day(moment: datetime, tz: ZoneInfo) -> datetime:
    local = moment.astimezone(tz)
    return datetime.combine(local.date(), time.min, tzinfo=tz)


def day_bounds(moment: datetime, tz: ZoneInfo, days_ago: int = 0) -> tuple[datetime, datetime]:
    """Local calendar day containing ``moment`` shifted back ``days_ago`` days."""
    local_date = moment.astimezone(tz).date() - timedelta(days=days_ago)
    start = datetime.combine(local_date, time.min, tzinfo=tz)
    end = datetime.combine(local_date + timedelta(days=1), time.min, tzinfo=tz)
    return start, end


def month_bounds(moment: datetime, tz: ZoneInfo, months_ago: int = 0) -> tuple[datetime, datetime]:
    """Local calendar month containing ``moment`` shifted back ``months_ago`` months."""
    local = moment.astimezone(tz)
    index = local.year * 12 + (local.month - 1) - months_ago
    year, month = divmod(index, 12)
    start = datetime(year, month + 1, 1, tzinfo=tz)
    next_year, next_month = divmod(index + 1, 12)
    end = datetime(next_year, next_month + 1, 1, tzinfo=tz)
    return start, end


def period_bounds(period: str, moment: datetime, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """Window from the period start to the end of today."""
    _, end = day_bounds(moment, tz)
    if period == "day":
        start = start_of_day(moment, tz)
    elif period == "week":
        start, _ = day_bounds(moment, tz, days_ago=7)
    elif period == "month":
        start, _ = month_bounds(moment, tz)
    else:
        raise ValueError(f"Unknown period: {period}")
    return start, end
