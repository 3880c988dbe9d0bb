"""Store factory functions for creating ledger store instances."""

import os
from pathlib import Path
from typing import Optional, Union

from spendtab.storage.base import LedgerStore, StorageLayout
from spendtab.storage.json_store import CollectionFileStore, FilePerLedgerStore

DATA_DIR_ENV = "SPENDTAB_DATA_DIR"
LAYOUT_ENV = "SPENDTAB_STORAGE_LAYOUT"


def default_storage_dir() -> Path:
    """Return ``~/.spendtab``, the storage directory used when none is configured."""
    return Path.home() / ".spendtab"


def create_json_store(
    storage_dir: Optional[Union[str, Path]] = None,
    layout: Optional[Union[str, StorageLayout]] = None,
) -> LedgerStore:
    """Create a JSON ledger store.

    Args:
        storage_dir: Directory for ledger files. If None, checks SPENDTAB_DATA_DIR
            environment variable, then defaults to ~/.spendtab
        layout: "per-ledger" (one file per tab) or "collection" (single tabs.json).
            If None, checks SPENDTAB_STORAGE_LAYOUT, then defaults to per-ledger

    Returns:
        LedgerStore for the requested layout

    Raises:
        ValueError: If layout is not a known storage layout
    """
    if storage_dir is None:
        storage_dir = os.environ.get(DATA_DIR_ENV) or None

    if storage_dir is None:
        storage_dir = default_storage_dir()

    if layout is None:
        layout = os.environ.get(LAYOUT_ENV) or StorageLayout.PER_LEDGER

    try:
        layout = StorageLayout(layout)
    except ValueError:
        choices = ", ".join(item.value for item in StorageLayout)
        raise ValueError(f"Unknown storage layout '{layout}' (expected one of: {choices})")

    if layout is StorageLayout.COLLECTION:
        return CollectionFileStore(Path(storage_dir))
    return FilePerLedgerStore(Path(storage_dir))
