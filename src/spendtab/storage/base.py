"""Abstract ledger store interface and operation outcomes."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from spendtab.domain.collection import LedgerCollection
from spendtab.domain.entities import Ledger


class StorageLayout(str, Enum):
    """How ledgers are laid out in the storage directory."""

    PER_LEDGER = "per-ledger"
    COLLECTION = "collection"


@dataclass(frozen=True)
class StoreFailure:
    """One ledger or file the store could not handle."""

    name: Optional[str]
    path: Path
    error: Exception

    def __str__(self) -> str:
        subject = f"tab '{self.name}'" if self.name is not None else str(self.path)
        return f"{subject}: {self.error}"


@dataclass
class SaveResult:
    """Outcome of ``save_all``."""

    saved: list[str] = field(default_factory=list)
    failures: list[StoreFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass
class LoadResult:
    """Outcome of ``load_all``; ``ledgers`` holds whatever parsed."""

    ledgers: LedgerCollection = field(default_factory=LedgerCollection)
    failures: list[StoreFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass
class ReconcileResult:
    """Outcome of ``reconcile_deleted``."""

    deleted: list[Path] = field(default_factory=list)
    failures: list[StoreFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class LedgerStore(ABC):
    """Abstract persistence interface for ledgers.

    Implementations never raise for filesystem or parse problems; those are
    logged and reported in the returned result so that one bad file cannot
    abort a batch.
    """

    def __init__(self, storage_dir: Path):
        """Initialize store.

        Args:
            storage_dir: Directory holding the ledger files
        """
        self.storage_dir = Path(storage_dir)

    @property
    @abstractmethod
    def layout(self) -> StorageLayout:
        """Storage layout implemented by this store."""
        pass

    @abstractmethod
    def save_all(self, ledgers: Iterable[Ledger]) -> SaveResult:
        """Write every ledger, overwriting earlier versions."""
        pass

    @abstractmethod
    def load_all(self) -> LoadResult:
        """Read every stored ledger, sorted by name."""
        pass

    @abstractmethod
    def reconcile_deleted(self, current_ledgers: Iterable[Ledger]) -> ReconcileResult:
        """Drop stored ledgers whose name is not among ``current_ledgers``."""
        pass
