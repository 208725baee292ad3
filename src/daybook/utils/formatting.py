"""Display formatting for amounts, dates and screen time."""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENTS = Decimal("0.01")
WHOLE = Decimal("1")


def is_storable_amount(value: Decimal) -> bool:
    """True when value is finite and can be rounded to cents.

    Rounding needs every digit to fit the decimal context, so amounts
    such as 1e30 are rejected.
    """
    if not value.is_finite():
        return False
    try:
        value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return False
    return True


def round_amount(value: Decimal, places: Decimal) -> Decimal:
    """Round half away from zero, dropping any negative zero."""
    rounded = value.quantize(places, rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        return abs(rounded)
    return rounded


def format_plain_cad(amount: Decimal) -> str:
    """Format a CAD amount with exactly two decimals and no symbol."""
    return str(round_amount(amount, CENTS))


def format_plain_idr(amount: Decimal) -> str:
    """Format an IDR amount as a rounded integer with no symbol."""
    return str(round_amount(amount, WHOLE))


def format_cad(amount: Decimal) -> str:
    """Format CAD amount with currency symbol, e.g. ``-$4.50``."""
    plain = format_plain_cad(amount)
    if plain.startswith("-"):
        return f"-${plain[1:]}"
    return f"${plain}"


def format_idr(amount: Decimal) -> str:
    """Format IDR amount with currency symbol, e.g. ``Rp 53100``."""
    plain = format_plain_idr(amount)
    if plain.startswith("-"):
        return f"-Rp {plain[1:]}"
    return f"Rp {plain}"


def format_date_iso(day: date) -> str:
    """YYYY-MM-DD, used for storage."""
    return day.strftime("%Y-%m-%d")


def format_date_display(day: date) -> str:
    """MM/DD/YYYY."""
    return day.strftime("%m/%d/%Y")


def format_date_short_numeric(day: date) -> str:
    """M/D/YYYY without zero padding."""
    return f"{day.month}/{day.day}/{day.year}"


def format_date_human(day: date) -> str:
    """January 2, 2006."""
    return f"{day.strftime('%B')} {day.day}, {day.year}"


def format_date_short(day: date) -> str:
    """Jan 2."""
    return f"{day.strftime('%b')} {day.day}"


def format_datetime_human(moment: datetime) -> str:
    """Jan 2, 2006 at 3:04 PM."""
    hour = moment.hour % 12 or 12
    meridiem = "PM" if moment.hour >= 12 else "AM"
    return (
        f"{moment.strftime('%b')} {moment.day}, {moment.year} "
        f"at {hour}:{moment.minute:02d} {meridiem}"
    )


def truncate(text: str, max_len: int) -> str:
    """Shorten text to max_len characters, ending with an ellipsis."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def parse_screen_time(value: str) -> int:
    """Convert a duration such as ``3h45m`` to minutes.

    Unrecognised text counts as zero minutes.
    """
    minutes = 0
    hours_match = re.search(r"(\d+)h", value)
    minutes_match = re.search(r"(\d+)m", value)
    if hours_match:
        minutes += int(hours_match.group(1)) * 60
    if minutes_match:
        minutes += int(minutes_match.group(1))
    return minutes
