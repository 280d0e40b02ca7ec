"""
Date utilities for lease schedules
"""

from datetime import date, datetime
from dateutil.relativedelta import relativedelta
from typing import Optional, Union


def add_months(d: Union[date, datetime], months: int) -> Union[date, datetime]:
    """
    Add months to a date - similar to EDATE in Excel
    Day of month is preserved when possible, otherwise clamped to month end
    """
    return d + relativedelta(months=months)


def add_years(d: date, years: int) -> date:
    """Add whole years; 29 Feb falls back to 28 Feb in non-leap years"""
    return d + relativedelta(years=years)


def schedule_anchor(start_date: Optional[date] = None) -> date:
    """
    Date that period offsets are counted from
    Uses the lease commencement date when known, otherwise today
    """
    if start_date is None:
        return date.today()
    if isinstance(start_date, datetime):
        return start_date.date()
    return start_date


def parse_date(value) -> Optional[date]:
    """Parse 'YYYY-MM-DD' (or a date) to a date object; None if missing or malformed"""
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value)[:10], '%Y-%m-%d').date()
    except (ValueError, TypeError):
        return None
