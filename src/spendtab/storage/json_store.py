"""JSON file implementations of the ledger store."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, Optional

import simplejson

from spendtab.domain.collection import LedgerCollection
from spendtab.domain.entities import Ledger
from spendtab.domain.errors import SerializationError, StorageError
from spendtab.storage.base import (
    LedgerStore,
    LoadResult,
    ReconcileResult,
    SaveResult,
    StorageLayout,
    StoreFailure,
)
from spendtab.storage.mappers import ledger_from_record, ledger_to_record

logger = logging.getLogger(__name__)

JSON_SUFFIX = ".json"
COLLECTION_FILE_NAME = "tabs.json"


def write_json_atomic(path: Path, payload: Any) -> None:
    """Write JSON to ``path`` through a temporary file in the same directory.

    Decimals are written as exact JSON numbers. The target is only replaced
    once the new content is fully on disk, so a failed write leaves the
    previous version in place.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=".tmp_", suffix=JSON_SUFFIX, dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            simplejson.dump(
                payload, f, indent=2, ensure_ascii=False, use_decimal=True, allow_nan=False
            )
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def read_json(path: Path) -> Any:
    """Read a JSON document, decoding numbers with a fraction as Decimal.

    Raises:
        SerializationError: If the file is not UTF-8 or not valid JSON
        OSError: If the file cannot be read
    """
    with path.open("r", encoding="utf-8") as f:
        try:
            return simplejson.load(f, use_decimal=True)
        except UnicodeDecodeError as e:
            raise SerializationError(f"{path.name} is not valid UTF-8: {e}")
        except RecursionError:
            raise SerializationError(f"{path.name} is nested too deeply")
        except simplejson.JSONDecodeError as e:
            raise SerializationError(f"Invalid JSON in {path.name}: {e}")


def _failure(name: Optional[str], path: Path, error: Exception, action: str) -> StoreFailure:
    if isinstance(error, OSError) and not isinstance(error, StorageError):
        error = StorageError(f"Could not {action} {path}: {error.strerror or error}")
    logger.warning("Could not %s %s: %s", action, path, error)
    return StoreFailure(name=name, path=path, error=error)


class FilePerLedgerStore(LedgerStore):
    """Stores each ledger as ``<name>.json`` in the storage directory."""

    @property
    def layout(self) -> StorageLayout:
        return StorageLayout.PER_LEDGER

    def path_for(self, name: str) -> Path:
        """Return the file that holds the ledger called ``name``."""
        return self.storage_dir / f"{name}{JSON_SUFFIX}"

    def _ledger_files(self) -> list[Path]:
        # ".tmp_" files are leftovers from interrupted writes
        return sorted(
            p
            for p in self.storage_dir.iterdir()
            if p.suffix == JSON_SUFFIX and not p.name.startswith(".tmp_") and p.is_file()
        )

    def save_all(self, ledgers: Iterable[Ledger]) -> SaveResult:
        result = SaveResult()
        for ledger in ledgers:
            path = self.path_for(ledger.name)
            try:
                write_json_atomic(path, ledger_to_record(ledger))
            except (OSError, TypeError, ValueError) as e:
                result.failures.append(_failure(ledger.name, path, e, "save"))
                continue
            logger.debug("Saved tab '%s' to %s", ledger.name, path)
            result.saved.append(ledger.name)
        return result

    def _read_ledger(self, path: Path) -> Ledger:
        """Read one file and check it holds the ledger its name promises.

        Raises:
            SerializationError: If the file is malformed or its ledger name
                does not match the file name
            OSError: If the file cannot be read
        """
        ledger = ledger_from_record(read_json(path))
        if self.path_for(ledger.name).name != path.name:
            raise SerializationError(
                f"{path.name} holds tab '{ledger.name}', expected '{path.stem}'"
            )
        return ledger

    def load_all(self) -> LoadResult:
        result = LoadResult()
        try:
            if not self.storage_dir.exists():
                logger.debug("Storage directory %s does not exist yet", self.storage_dir)
                return result
            paths = self._ledger_files()
        except OSError as e:
            result.failures.append(_failure(None, self.storage_dir, e, "list"))
            return result

        loaded = []
        for path in paths:
            try:
                loaded.append(self._read_ledger(path))
            except (OSError, SerializationError) as e:
                result.failures.append(_failure(None, path, e, "load"))
                continue
            logger.debug("Loaded %s", path)
        result.ledgers = LedgerCollection(loaded)
        return result

    def reconcile_deleted(self, current_ledgers: Iterable[Ledger]) -> ReconcileResult:
        """Delete files of tabs that are no longer current.

        Files that do not hold a readable tab matching their own name were
        never loaded, so they are left in place rather than deleted unseen.
        """
        result = ReconcileResult()
        keep = {self.path_for(ledger.name).name for ledger in current_ledgers}
        try:
            if not self.storage_dir.exists():
                return result
            paths = self._ledger_files()
        except OSError as e:
            result.failures.append(_failure(None, self.storage_dir, e, "list"))
            return result

        for path in paths:
            if path.name in keep:
                continue
            try:
                self._read_ledger(path)
            except (OSError, SerializationError) as e:
                logger.warning("Not deleting %s: %s", path, e)
                continue
            try:
                path.unlink()
            except OSError as e:
                result.failures.append(_failure(path.stem, path, e, "delete"))
                continue
            logger.debug("Deleted %s", path)
            result.deleted.append(path)
        return result


class CollectionFileStore(LedgerStore):
    """Stores all ledgers as one JSON array in ``tabs.json``.

    Saving merges by name into the existing array, so saving one ledger keeps
    the records of the others.
    """

    def __init__(self, storage_dir: Path, file_name: str = COLLECTION_FILE_NAME):
        """Initialize store.

        Args:
            storage_dir: Directory holding the collection file
            file_name: Name of the collection file
        """
        super().__init__(storage_dir)
        self.path = self.storage_dir / file_name

    @property
    def layout(self) -> StorageLayout:
        return StorageLayout.COLLECTION

    def _read_records(self) -> list[Any]:
        if not self.path.exists():
            return []
        records = read_json(self.path)
        if not isinstance(records, list):
            raise SerializationError(f"{self.path.name} must contain a JSON array")
        return records

    @staticmethod
    def _record_name(record: Any) -> Optional[str]:
        if isinstance(record, dict) and isinstance(record.get("name"), str):
            return record["name"]
        return None

    def save_all(self, ledgers: Iterable[Ledger]) -> SaveResult:
        result = SaveResult()
        ledgers = list(ledgers)
        try:
            records = self._read_records()
        except (OSError, SerializationError) as e:
            # Refuse to overwrite a file we could not understand
            for ledger in ledgers:
                result.failures.append(_failure(ledger.name, self.path, e, "save"))
            return result

        incoming: dict[str, dict[str, Any]] = {}
        for ledger in ledgers:
            try:
                incoming[ledger.name] = ledger_to_record(ledger)
            except (TypeError, ValueError) as e:
                result.failures.append(_failure(ledger.name, self.path, e, "save"))
        saving = list(incoming)

        merged = []
        for record in records:
            name = self._record_name(record)
            if name in incoming:
                merged.append(incoming.pop(name))
            else:
                merged.append(record)
        merged.extend(incoming.values())

        try:
            write_json_atomic(self.path, merged)
        except (OSError, TypeError, ValueError) as e:
            for name in saving:
                result.failures.append(_failure(name, self.path, e, "save"))
            return result

        logger.debug("Saved %d tab(s) to %s", len(saving), self.path)
        result.saved.extend(saving)
        return result

    def load_all(self) -> LoadResult:
        result = LoadResult()
        try:
            records = self._read_records()
        except (OSError, SerializationError) as e:
            result.failures.append(_failure(None, self.path, e, "load"))
            return result

        loaded = []
        seen: set[str] = set()
        for position, record in enumerate(records):
            try:
                ledger = ledger_from_record(record)
                if ledger.name in seen:
                    raise SerializationError(f"duplicate tab name '{ledger.name}'")
                seen.add(ledger.name)
                loaded.append(ledger)
            except SerializationError as e:
                name = self._record_name(record)
                logger.warning("Skipping record %d in %s: %s", position, self.path, e)
                result.failures.append(StoreFailure(name=name, path=self.path, error=e))
        result.ledgers = LedgerCollection(loaded)
        return result

    def reconcile_deleted(self, current_ledgers: Iterable[Ledger]) -> ReconcileResult:
        result = ReconcileResult()
        keep = {ledger.name for ledger in current_ledgers}
        try:
            records = self._read_records()
        except (OSError, SerializationError) as e:
            result.failures.append(_failure(None, self.path, e, "reconcile"))
            return result

        remaining = [r for r in records if self._record_name(r) in keep]
        if len(remaining) == len(records):
            return result
        try:
            write_json_atomic(self.path, remaining)
        except OSError as e:
            result.failures.append(_failure(None, self.path, e, "reconcile"))
            return result

        logger.debug("Removed %d tab(s) from %s", len(records) - len(remaining), self.path)
        result.deleted.append(self.path)
        return result
