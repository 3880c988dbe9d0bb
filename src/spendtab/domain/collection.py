"""Name-ordered collection of tabs."""

import bisect
from typing import Iterable, Iterator, Optional

from spendtab.domain.entities import Ledger


class LedgerCollection:
    """Ledgers kept sorted by name.

    Ordering is Python's default string ordering (case-sensitive, by code
    point). Ledgers with equal names keep their insertion order.
    """

    def __init__(self, ledgers: Optional[Iterable[Ledger]] = None):
        self._ledgers: list[Ledger] = sorted(ledgers or [], key=lambda ledger: ledger.name)

    def add(self, ledger: Ledger) -> None:
        """Insert a ledger at its sorted position."""
        names = self.names()
        self._ledgers.insert(bisect.bisect_right(names, ledger.name), ledger)

    def get(self, name: str) -> Optional[Ledger]:
        """Return the first ledger with this name, or None."""
        for ledger in self._ledgers:
            if ledger.name == name:
                return ledger
        return None

    def remove(self, name: str) -> Optional[Ledger]:
        """Remove and return the ledger with this name, or None if absent."""
        ledger = self.get(name)
        if ledger is not None:
            self._ledgers.remove(ledger)
        return ledger

    def names(self) -> list[str]:
        return [ledger.name for ledger in self._ledgers]

    def __contains__(self, name: object) -> bool:
        return any(ledger.name == name for ledger in self._ledgers)

    def __iter__(self) -> Iterator[Ledger]:
        return iter(self._ledgers)

    def __len__(self) -> int:
        return len(self._ledgers)

    def __getitem__(self, index: int) -> Ledger:
        return self._ledgers[index]

    def __repr__(self) -> str:
        return f"LedgerCollection({self.names()!r})"
