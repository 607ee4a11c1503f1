"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "15/01/2024", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "tomorrow", "last month",
      "this year", "next week", "+5", "-3" (days from today)

    Slash dates are read day first, as the dashboard displays them.

    Args:
        date_str: Date string in various formats
        today: Date that relative expressions are resolved against
            (defaults to the system date)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if today is None:
        today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    # Day offsets such as "+5" or "-3"
    if date_str[:1] in ("+", "-") and date_str[1:].isdigit():
        return today + timedelta(days=int(date_str))

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    elif date_str.startswith("next "):
        period = date_str[5:]
        if period == "month":
            return (today + relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=1)
        elif period == "week":
            return today + timedelta(days=(7 - today.weekday()))

    try:
        dt = date_parser.parse(date_str, dayfirst="/" in date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    Unlike the history-oriented ranges of a ledger, deadline periods look
    forward too, so "this-month" covers the whole calendar month.

    Args:
        period: Period string (this-month, this-year, this-week, last-month,
            next-month, next-7-days, next-30-days)
        today: Date the period is resolved against (defaults to the system date)

    Returns:
        Tuple of (start_date, end_date) for the specified period, both inclusive

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    if today is None:
        today = date.today()

    if period == "this-month":
        start_date = today.replace(day=1)
        end_date = start_date + relativedelta(months=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "this-year":
        return (today.replace(month=1, day=1), today.replace(month=12, day=31))

    elif period == "this-week":
        start_date = today - timedelta(days=today.weekday())
        return (start_date, start_date + timedelta(days=6))

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "next-month":
        start_date = (today + relativedelta(months=1)).replace(day=1)
        end_date = start_date + relativedelta(months=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "next-7-days":
        return (today, today + timedelta(days=7))

    elif period == "next-30-days":
        return (today, today + timedelta(days=30))

    else:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: this-month, this-year, "
            "this-week, last-month, next-month, next-7-days, next-30-days"
        )
