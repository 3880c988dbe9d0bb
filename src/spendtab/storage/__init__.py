"""Storage layer for spendtab application."""

from spendtab.storage.base import LedgerStore, StorageLayout
from spendtab.storage.factories import create_json_store

__all__ = ["LedgerStore", "StorageLayout", "create_json_store"]
