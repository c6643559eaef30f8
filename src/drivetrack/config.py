"""Environment-driven settings."""

import os
from functools import lru_cache
from pathlib import Path


class Settings:
    def __init__(self, database_path: str, default_user: str, log_level: str) -> None:
        self.database_path = database_path
        self.default_user = default_user
        self.log_level = log_level


def _default_database_path() -> str:
    return str(Path.home() / ".drivetrack" / "drivetrack.db")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    database_path = os.getenv("DRIVETRACK_DB_PATH") or _default_database_path()
    default_user = os.getenv("DRIVETRACK_USER", "default")
    log_level = os.getenv("DRIVETRACK_LOG_LEVEL", "WARNING")
    return Settings(
        database_path=database_path,
        default_user=default_user,
        log_level=log_level,
    )
