"""Database factory functions for creating database instances."""

from pathlib import Path
from typing import Optional

from letterdesk.config import load_settings
from letterdesk.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(
    database_path: Optional[str] = None, timeout: Optional[float] = None
) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks LETTERDESK_DB_PATH
            environment variable, then defaults to ~/.letterdesk/letterdesk.db
        timeout: Busy timeout in seconds. If None, uses LETTERDESK_DB_TIMEOUT

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    settings = load_settings()
    if database_path is None:
        database_path = settings.database_path

    if database_path is None:
        # Default to ~/.letterdesk/letterdesk.db
        home = Path.home()
        db_dir = home / ".letterdesk"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "letterdesk.db")

    if timeout is None:
        timeout = settings.db_timeout

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url, timeout=timeout)
