"""Date parsing and formatting utilities."""

from datetime import date, datetime, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

# Fixed English names so formatting does not depend on the process locale
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Two unrelated defaults; a field dateutil had to fill in differs between them
_FILL_A = datetime(2000, 1, 1)
_FILL_B = datetime(2001, 2, 2)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "15 January 2024", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed or leaves out the day, month or year
    """
    date_str = date_str.strip().lower()
    today = date.today()

    # Handle relative dates
    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            days_since_monday = today.weekday()
            return today - timedelta(days=days_since_monday + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    # Try parsing as absolute date
    try:
        first = date_parser.parse(date_str, default=_FILL_A)
        second = date_parser.parse(date_str, default=_FILL_B)
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
    if first.date() != second.date():
        raise ValueError(f"Date '{date_str}' must give a day, month and year")
    return first.date()


def coerce_date(value: "date | datetime | str") -> date:
    """Return value as a date, parsing strings with parse_date.

    Spreadsheet cells arrive as datetime objects, CLI input as strings.

    Raises:
        ValueError: If value is a string that cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None:
        raise ValueError("Date is required")
    return parse_date(str(value))


def format_issue_date(value: date) -> str:
    """Format a date as ``DD Month YYYY`` (e.g. ``05 March 2025``)."""
    return f"{value.day:02d} {MONTH_NAMES[value.month - 1]} {value.year:04d}"
