"""Ledger store layer for finchat."""

from finchat.database.base import LedgerStore
from finchat.database.factories import create_ledger_store, create_sqlite_store

__all__ = ["LedgerStore", "create_ledger_store", "create_sqlite_store"]
