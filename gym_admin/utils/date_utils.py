"""Date manipulation utilities"""

import calendar
from datetime import date, datetime, time, timedelta


def add_months(from_date: date, months: int) -> date:
    """Add calendar months, clamping the day to the last day of the target month"""
    month_index = from_date.month - 1 + months
    year = from_date.year + month_index // 12
    month = month_index % 12 + 1
    day = min(from_date.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def month_key(day: date) -> str:
    """YYYY-MM bucket used for monthly aggregation"""
    return f"{day.year:04d}-{day.month:02d}"


def end_of_previous_day(now: datetime) -> datetime:
    """Last representable instant of the day before `now`"""
    yesterday = now.date() - timedelta(days=1)
    return datetime.combine(yesterday, time.max)


def next_anniversary(original: date, today: date) -> date:
    """Next occurrence (today or later) of original's month/day; Feb 29 maps to Feb 28 in common years"""
    def on_year(year: int) -> date:
        day = min(original.day, calendar.monthrange(year, original.month)[1])
        return date(year, original.month, day)

    candidate = on_year(today.year)
    return candidate if candidate >= today else on_year(today.year + 1)
