"""Tab domain service."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Optional

from spendtab.domain.collection import LedgerCollection
from spendtab.domain.entities import Amount, Ledger
from spendtab.domain.errors import (
    ConflictError,
    NotFoundError,
    duplicate_tab_name,
    tab_not_found,
)

if TYPE_CHECKING:
    from spendtab.storage.base import LedgerStore, LoadResult, ReconcileResult, SaveResult

logger = logging.getLogger(__name__)


class TabService:
    """Service for managing tabs and keeping them persisted.

    Every mutating call changes the in-memory ledger first and then saves it.
    Contract violations raise before anything is written; storage problems
    come back in the returned result instead of raising.
    """

    def __init__(
        self, store: LedgerStore, track_reasons: bool = False, track_changes: bool = False
    ):
        """Initialize tab service.

        Args:
            store: Ledger store instance
            track_reasons: Default for new tabs: keep a reason per expense
            track_changes: Default for new tabs: keep a log of total changes
        """
        self.store = store
        self.track_reasons = track_reasons
        self.track_changes = track_changes
        self.tabs = LedgerCollection()

    def load(self) -> LoadResult:
        """Replace the in-memory tabs with what the store holds.

        Returns:
            Load result; unreadable files are listed in its failures
        """
        result = self.store.load_all()
        self.tabs = result.ledgers
        logger.debug("Loaded %d tab(s)", len(self.tabs))
        return result

    def list_tabs(self) -> list[Ledger]:
        """List all tabs sorted by name."""
        return list(self.tabs)

    def get_tab(self, name: str) -> Ledger:
        """Get tab by name.

        Raises:
            NotFoundError: If no tab has this name
        """
        tab = self.tabs.get(name)
        if tab is None:
            raise NotFoundError(tab_not_found(name))
        return tab

    def create_tab(
        self,
        name: str,
        track_reasons: Optional[bool] = None,
        track_changes: Optional[bool] = None,
    ) -> tuple[Ledger, SaveResult]:
        """Create and save a new empty tab.

        Args:
            name: Tab name
            track_reasons: Override the service default
            track_changes: Override the service default

        Returns:
            The new tab and the result of saving it

        Raises:
            InvalidNameError: If name is empty or not usable as a file name
            ConflictError: If a tab with this name already exists
        """
        if name in self.tabs:
            raise ConflictError(duplicate_tab_name(name))

        tab = Ledger.create(
            name,
            track_reasons=self.track_reasons if track_reasons is None else track_reasons,
            track_changes=self.track_changes if track_changes is None else track_changes,
        )
        self.tabs.add(tab)
        return tab, self.store.save_all([tab])

    def delete_tab(self, name: str) -> ReconcileResult:
        """Delete a tab and remove its stored data.

        Raises:
            NotFoundError: If no tab has this name
        """
        self.get_tab(name)
        self.tabs.remove(name)
        return self.store.reconcile_deleted(self.tabs)

    def add_expense(self, name: str, amount: Amount, reason: Optional[str] = None) -> SaveResult:
        """Add an expense to a tab.

        Raises:
            NotFoundError: If no tab has this name
        """
        tab = self.get_tab(name)
        tab.add_entry(amount, reason)
        return self.store.save_all([tab])

    def subtract_expense(
        self, name: str, amount: Amount, reason: Optional[str] = None
    ) -> SaveResult:
        """Add the negated amount to a tab."""
        tab = self.get_tab(name)
        tab.subtract_entry(amount, reason)
        return self.store.save_all([tab])

    def update_expense(
        self, name: str, index: int, amount: Amount, reason: Optional[str] = None
    ) -> SaveResult:
        """Replace one expense of a tab.

        Raises:
            NotFoundError: If no tab has this name
            IndexOutOfRangeError: If index does not address an expense
        """
        tab = self.get_tab(name)
        tab.update_entry(index, amount, reason)
        return self.store.save_all([tab])

    def remove_expenses(self, name: str, indices: Iterable[int]) -> SaveResult:
        """Remove expenses from a tab by position.

        Raises:
            NotFoundError: If no tab has this name
            IndexOutOfRangeError: If any index is out of range
        """
        tab = self.get_tab(name)
        tab.remove_entries(indices)
        return self.store.save_all([tab])

    def save(self) -> SaveResult:
        """Save every tab."""
        return self.store.save_all(self.tabs)
