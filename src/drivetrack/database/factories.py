"""Database factory functions for creating database instances."""

from pathlib import Path
from typing import Optional

from drivetrack.config import get_settings
from drivetrack.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, uses the configured
            path (DRIVETRACK_DB_PATH, defaulting to ~/.drivetrack/drivetrack.db)

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = get_settings().database_path

    path = Path(database_path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    database_url = f"sqlite:///{path}"
    return SQLAlchemyDatabase(database_url)
