"""Database layer for letterdesk application."""

from letterdesk.database.base import Database
from letterdesk.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
