"""Tests for date parsing and issue date formatting."""

import pytest
from datetime import date, datetime, timedelta
from letterdesk.utils.date_parser import coerce_date, format_issue_date, parse_date


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    result = parse_date("2024-01-15")
    assert result == date(2024, 1, 15)


def test_parse_written_date():
    """Test parsing dates as printed on letters."""
    assert parse_date("05 March 2025") == date(2025, 3, 5)
    assert parse_date("March 5, 2025") == date(2025, 3, 5)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today") == date.today()


def test_parse_yesterday():
    """Test parsing 'yesterday'."""
    assert parse_date(" Yesterday ") == date.today() - timedelta(days=1)


def test_parse_this_month():
    """Test parsing 'this month'."""
    today = date.today()
    assert parse_date("this month") == date(today.year, today.month, 1)


def test_parse_last_week():
    """Test parsing 'last week' as Monday of last week."""
    result = parse_date("last week")
    assert result.weekday() == 0
    assert result == date.today() - timedelta(days=date.today().weekday() + 7)


def test_parse_invalid():
    """Test parsing an invalid date."""
    with pytest.raises(ValueError):
        parse_date("not a date")


@pytest.mark.parametrize("value", ["March 2025", "2025-03", "5 March"])
def test_parse_rejects_partial_dates(value):
    """Missing parts are refused rather than taken from today."""
    with pytest.raises(ValueError, match="day, month and year"):
        parse_date(value)


def test_coerce_date_accepts_dates_and_datetimes():
    assert coerce_date(date(2025, 3, 5)) == date(2025, 3, 5)
    assert coerce_date(datetime(2025, 3, 5, 23, 59)) == date(2025, 3, 5)
    assert coerce_date("2025-03-05") == date(2025, 3, 5)


def test_coerce_date_rejects_none():
    with pytest.raises(ValueError):
        coerce_date(None)


@pytest.mark.parametrize(
    "value,expected",
    [
        (date(2025, 3, 5), "05 March 2025"),
        (date(2024, 12, 31), "31 December 2024"),
        (date(999, 1, 1), "01 January 0999"),
    ],
)
def test_format_issue_date(value, expected):
    assert format_issue_date(value) == expected
