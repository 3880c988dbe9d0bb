"""Domain layer for spendtab application."""

from spendtab.domain.entities import Ledger
from spendtab.domain.collection import LedgerCollection
from spendtab.domain.tabs import TabService

__all__ = [
    "Ledger",
    "LedgerCollection",
    "TabService",
]
