"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from moneybook.config import Settings
from moneybook.database.sqlalchemy_db import SQLAlchemyDatabase


def default_database_path() -> str:
    """Return the default database location, ~/.moneybook/moneybook.db."""
    db_dir = Path.home() / ".moneybook"
    db_dir.mkdir(exist_ok=True)
    return str(db_dir / "moneybook.db")


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks MONEYBOOK_DATABASE_PATH
            environment variable, then defaults to ~/.moneybook/moneybook.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite (not yet connected)
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("MONEYBOOK_DATABASE_PATH")

    if database_path is None:
        database_path = default_database_path()

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)


def create_database(settings: Settings) -> SQLAlchemyDatabase:
    """Create a database instance from application settings.

    An explicit ``database_url`` wins over ``database_path``.

    Returns:
        SQLAlchemyDatabase instance (not yet connected)
    """
    if settings.database_url:
        return SQLAlchemyDatabase(settings.database_url)
    return create_sqlite_database(settings.database_path)
