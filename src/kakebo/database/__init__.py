"""Database layer for kakebo application."""

from kakebo.database.base import Database
from kakebo.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
