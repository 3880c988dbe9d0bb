"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidNameError(ValidationError):
    """Tab name is empty or cannot be used as a storage key."""


class IndexOutOfRangeError(DomainError, IndexError):
    """Expense index does not address an existing entry."""


class NotFoundError(DomainError):
    """Requested tab does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as two tabs sharing a name."""


class SerializationError(DomainError):
    """Persisted record is malformed and cannot be turned into a ledger."""


class StorageError(DomainError, OSError):
    """Filesystem access failed while reading or writing ledgers."""


def tab_not_found(name: str) -> str:
    """Return message for missing tab."""
    return f"Tab '{name}' not found"


def duplicate_tab_name(name: str) -> str:
    """Return message for a tab name that is already taken."""
    return f"Tab with name '{name}' already exists"


def entry_index_out_of_range(index: int, count: int) -> str:
    """Return message for an expense index outside the ledger."""
    if count == 0:
        return f"Expense index {index} is out of range: the tab has no expenses"
    return (
        f"Expense index {index} is out of range: "
        f"expected 0 to {count - 1} ({count} expense{'s' if count != 1 else ''})"
    )
