"""Database factory functions for creating database instances."""

import logging
import os
from pathlib import Path
from typing import Optional

from kakebo.database.sqlalchemy_db import SQLAlchemyDatabase

logger = logging.getLogger(__name__)

DB_PATH_ENV_VAR = "KAKEBO_DB_PATH"
DEFAULT_DB_PATH = Path.home() / ".kakebo" / "kakebo.db"


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the database file: explicit path, then environment, then default.

    The parent directory of the default location is created on demand.
    """
    if database_path is not None:
        return Path(database_path)

    from_env = os.environ.get(DB_PATH_ENV_VAR)
    if from_env:
        return Path(from_env)

    DEFAULT_DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    return DEFAULT_DB_PATH


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks
            KAKEBO_DB_PATH, then defaults to ~/.kakebo/kakebo.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    path = resolve_database_path(database_path)
    logger.debug("Using SQLite database at %s", path)
    return SQLAlchemyDatabase(f"sqlite:///{path}")
