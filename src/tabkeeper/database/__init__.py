"""Database layer for tabkeeper application."""

from tabkeeper.database.base import Database
from tabkeeper.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
