"""Ledger store factory functions."""

import os
from pathlib import Path
from typing import Optional

from finchat.database.sqlalchemy_db import SQLAlchemyLedgerStore

DATABASE_URL_ENV = "FINCHAT_DATABASE_URL"


def default_database_url() -> str:
    """Return the configured database URL.

    Checks the FINCHAT_DATABASE_URL environment variable, then defaults to
    a SQLite file at ~/.finchat/finchat.db.
    """
    database_url = os.environ.get(DATABASE_URL_ENV)
    if database_url:
        return database_url

    db_dir = Path.home() / ".finchat"
    db_dir.mkdir(exist_ok=True)
    return f"sqlite:///{db_dir / 'finchat.db'}"


def create_ledger_store(database_url: Optional[str] = None) -> SQLAlchemyLedgerStore:
    """Create a ledger store.

    Args:
        database_url: SQLAlchemy database URL. If None, see default_database_url().

    Returns:
        SQLAlchemyLedgerStore instance
    """
    if database_url is None:
        database_url = default_database_url()
    return SQLAlchemyLedgerStore(database_url)


def create_sqlite_store(database_path: str) -> SQLAlchemyLedgerStore:
    """Create a ledger store backed by a SQLite file."""
    return SQLAlchemyLedgerStore(f"sqlite:///{database_path}")
