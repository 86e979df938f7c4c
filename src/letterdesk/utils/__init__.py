"""Utility functions for letterdesk."""

from letterdesk.utils.date_parser import parse_date, coerce_date, format_issue_date

__all__ = ["parse_date", "coerce_date", "format_issue_date"]
