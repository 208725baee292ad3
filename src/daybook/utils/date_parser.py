"""Date parsing utilities."""

import re
from datetime import date, datetime, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from daybook.domain.errors import ValidationError

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

PERIODS = ["this-week", "this-month", "this-year", "last-week", "last-month", "last-year"]


def as_day(value: date | datetime) -> date:
    """Drop any time-of-day component."""
    if isinstance(value, datetime):
        return value.date()
    return value


def iter_days(start: date, end: date):
    """Yield every calendar day in [start, end]."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def _parse_relative(date_str: str, today: date) -> date | None:
    fixed = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in fixed:
        return fixed[date_str]

    prefix, _, period = date_str.partition(" ")
    if prefix not in ("last", "this", "next") or not period:
        return None

    if period == "week":
        monday = today - timedelta(days=today.weekday())
        return monday + timedelta(days={"last": -7, "this": 0, "next": 7}[prefix])
    if period == "month":
        shift = {"last": -1, "this": 0, "next": 1}[prefix]
        return (today + relativedelta(months=shift)).replace(day=1)
    if period == "year":
        shift = {"last": -1, "this": 0, "next": 1}[prefix]
        return today.replace(month=1, day=1) + relativedelta(years=shift)
    if prefix == "last" and period in WEEKDAYS:
        days_ago = (today.weekday() - WEEKDAYS.index(period)) % 7 or 7
        return today - timedelta(days=days_ago)
    return None


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports:
    - ISO dates: "2025-01-15"
    - Display dates: "01/15/2025", "1/15/2025" and the compact "01152025"
    - Relative dates: "today", "yesterday", "last month", "this week", ...

    Args:
        date_str: Date string in one of the formats above

    Returns:
        Date object

    Raises:
        ValidationError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if not date_str:
        raise ValidationError("Empty date string")

    relative = _parse_relative(date_str, date.today())
    if relative is not None:
        return relative

    if re.fullmatch(r"\d{8}", date_str):
        try:
            return datetime.strptime(date_str, "%m%d%Y").date()
        except ValueError as e:
            raise ValidationError(f"Could not parse date '{date_str}': {e}") from e

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValidationError(f"Could not parse date '{date_str}': {e}") from e


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Periods that include today end today; "last-*" periods end on the final
    day of that period.

    Raises:
        ValidationError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-week":
        return today - timedelta(days=today.weekday()), today
    if period == "this-month":
        return today.replace(day=1), today
    if period == "this-year":
        return today.replace(month=1, day=1), today
    if period == "last-week":
        start = today - timedelta(days=today.weekday() + 7)
        return start, start + timedelta(days=6)
    if period == "last-month":
        first_of_month = today.replace(day=1)
        return first_of_month - relativedelta(months=1), first_of_month - timedelta(days=1)
    if period == "last-year":
        first_of_year = today.replace(month=1, day=1)
        return first_of_year - relativedelta(years=1), first_of_year - timedelta(days=1)

    raise ValidationError(
        f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}"
    )
