"""Shared pytest fixtures for spendtab tests."""

import pytest

from spendtab.domain.entities import Ledger
from spendtab.domain.tabs import TabService
from spendtab.storage.json_store import CollectionFileStore, FilePerLedgerStore


@pytest.fixture
def storage_dir(tmp_path):
    """Return a fresh directory for tab files."""
    path = tmp_path / "tabs"
    path.mkdir()
    return path


@pytest.fixture
def file_store(storage_dir):
    """Create a one-file-per-tab store in a temporary directory."""
    return FilePerLedgerStore(storage_dir)


@pytest.fixture
def collection_store(storage_dir):
    """Create a single-file store in a temporary directory."""
    return CollectionFileStore(storage_dir)


@pytest.fixture(params=["per-ledger", "collection"])
def store(request, storage_dir):
    """Run a test against both storage layouts."""
    if request.param == "collection":
        return CollectionFileStore(storage_dir)
    return FilePerLedgerStore(storage_dir)


@pytest.fixture
def tab_service(file_store):
    """Create a TabService backed by a temporary directory."""
    service = TabService(file_store)
    service.load()
    return service


@pytest.fixture
def groceries():
    """A tab with two expenses."""
    ledger = Ledger.create("Groceries")
    ledger.add_entry("12.50")
    ledger.add_entry("-2.00")
    return ledger


@pytest.fixture
def full_ledger():
    """A tab tracking both reasons and total changes."""
    ledger = Ledger.create("Trip", track_reasons=True, track_changes=True)
    ledger.add_entry("40.00", "Train")
    ledger.add_entry("12.25", "Dinner")
    ledger.update_entry(1, "15.75")
    return ledger


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
