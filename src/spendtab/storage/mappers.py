"""Mapper functions to convert between ledgers and persisted JSON records.

The record keys (``totalAmount``, ``totalChanges``) are the on-disk format and
stay camelCase regardless of the Python attribute names.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from spendtab.domain.entities import Ledger
from spendtab.domain.errors import SerializationError

REQUIRED_KEYS = ("id", "name", "totalAmount", "expenses")


def ledger_to_record(ledger: Ledger) -> dict[str, Any]:
    """Convert a ledger to a record for ``simplejson`` with ``use_decimal``.

    Amounts stay Decimal so they are written exactly as held in memory.
    """
    record: dict[str, Any] = {
        "id": ledger.id,
        "name": ledger.name,
        "totalAmount": ledger.total_amount,
        "expenses": list(ledger.expenses),
    }
    if ledger.reasons is not None:
        record["reasons"] = list(ledger.reasons)
    if ledger.total_changes is not None:
        record["totalChanges"] = list(ledger.total_changes)
    return record


def _decimal(value: Any, key: str) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise SerializationError(f"'{key}' must be a number, got {type(value).__name__}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as e:
        raise SerializationError(f"'{key}' is not a valid amount: {e}")
    if not result.is_finite():
        raise SerializationError(f"'{key}' must be finite")
    return result


def _decimal_list(value: Any, key: str) -> list[Decimal]:
    if not isinstance(value, list):
        raise SerializationError(f"'{key}' must be a list")
    return [_decimal(item, key) for item in value]


def ledger_from_record(record: Any) -> Ledger:
    """Convert a decoded JSON record to a ledger.

    Raises:
        SerializationError: If the record is missing keys or has wrong types
    """
    if not isinstance(record, dict):
        raise SerializationError("Ledger record must be a JSON object")
    missing = [key for key in REQUIRED_KEYS if key not in record]
    if missing:
        raise SerializationError(f"Ledger record is missing {', '.join(missing)}")

    ledger_id = record["id"]
    name = record["name"]
    if not isinstance(ledger_id, str) or not ledger_id:
        raise SerializationError("'id' must be a non-empty string")
    if not isinstance(name, str) or not name:
        raise SerializationError("'name' must be a non-empty string")

    expenses = _decimal_list(record["expenses"], "expenses")

    reasons = record.get("reasons")
    if reasons is not None:
        if not isinstance(reasons, list) or not all(isinstance(r, str) for r in reasons):
            raise SerializationError("'reasons' must be a list of strings")
        if len(reasons) != len(expenses):
            raise SerializationError(
                f"'reasons' has {len(reasons)} items but 'expenses' has {len(expenses)}"
            )

    total_changes = record.get("totalChanges")
    if total_changes is not None:
        total_changes = _decimal_list(total_changes, "totalChanges")

    return Ledger(
        id=ledger_id,
        name=name,
        total_amount=_decimal(record["totalAmount"], "totalAmount"),
        expenses=expenses,
        reasons=list(reasons) if reasons is not None else None,
        total_changes=total_changes,
    )
