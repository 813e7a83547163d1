"""Database layer for moneybook application."""

from moneybook.database.base import Database
from moneybook.database.factories import create_database, create_sqlite_database
from moneybook.database.sqlalchemy_db import SQLAlchemyDatabase

__all__ = ["Database", "SQLAlchemyDatabase", "create_database", "create_sqlite_database"]
