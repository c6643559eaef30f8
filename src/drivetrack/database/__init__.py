"""Record store layer for drivetrack application."""

from drivetrack.database.base import Database
from drivetrack.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
