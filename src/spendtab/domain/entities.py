"""Domain model entities for spendtab.

A ``Ledger`` is one tab: a named account holding a running total and the
ordered list of signed expenses that produced it. Entities are plain data with
arithmetic only; persistence lives in ``spendtab.storage``.
"""

import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Optional, Union

from spendtab.domain.errors import (
    IndexOutOfRangeError,
    InvalidNameError,
    entry_index_out_of_range,
)

Amount = Union[Decimal, int, str]

# Characters that cannot appear in a file name on the supported platforms
_FORBIDDEN_NAME_CHARS = ("/", "\\", "\x00")


def to_decimal(amount: Amount) -> Decimal:
    """Coerce an amount to Decimal.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.
    """
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, float):
        return Decimal(str(amount))
    return Decimal(amount)


def format_amount(amount: Decimal) -> str:
    """Render an amount with exactly two decimals and a period separator."""
    return f"{to_decimal(amount):.2f}"


def validate_name(name: str) -> str:
    """Return ``name`` unchanged if it can name a tab.

    Raises:
        InvalidNameError: If the name is empty or cannot be used as a file key
    """
    if not name:
        raise InvalidNameError("Tab name cannot be empty")
    if name in (".", "..") or any(ch in name for ch in _FORBIDDEN_NAME_CHARS):
        raise InvalidNameError(f"Tab name '{name}' cannot be used as a file name")
    return name


@dataclass
class Ledger:
    """A spending tab with its running total.

    ``reasons`` and ``total_changes`` are ``None`` when the tab does not track
    them. When tracked, ``reasons[i]`` describes ``expenses[i]`` and
    ``total_changes`` records every delta applied to ``total_amount``.
    """

    id: str
    name: str
    total_amount: Decimal = Decimal("0")
    expenses: list[Decimal] = field(default_factory=list)
    reasons: Optional[list[str]] = None
    total_changes: Optional[list[Decimal]] = None

    @classmethod
    def create(
        cls, name: str, track_reasons: bool = False, track_changes: bool = False
    ) -> "Ledger":
        """Create an empty tab with a fresh identifier.

        Args:
            name: Tab name, also used as its storage key
            track_reasons: Keep a free-text reason per expense
            track_changes: Keep a log of every change to the total

        Returns:
            New ledger with no expenses and a zero total

        Raises:
            InvalidNameError: If name is empty or not usable as a file name
        """
        return cls(
            id=str(uuid.uuid4()),
            name=validate_name(name),
            total_amount=Decimal("0"),
            expenses=[],
            reasons=[] if track_reasons else None,
            total_changes=[] if track_changes else None,
        )

    @property
    def tracks_reasons(self) -> bool:
        return self.reasons is not None

    @property
    def tracks_changes(self) -> bool:
        return self.total_changes is not None

    def add_entry(self, amount: Amount, reason: Optional[str] = None) -> None:
        """Append an expense and add it to the total.

        Negative amounts are how subtraction is expressed.
        """
        amount = to_decimal(amount)
        self.expenses.append(amount)
        if self.reasons is not None:
            self.reasons.append(reason or "")
        self._apply_delta(amount)

    def subtract_entry(self, amount: Amount, reason: Optional[str] = None) -> None:
        """Append the negated amount."""
        self.add_entry(-to_decimal(amount), reason)

    def update_entry(
        self, index: int, new_amount: Amount, reason: Optional[str] = None
    ) -> None:
        """Replace the expense at ``index`` and shift the total by the difference.

        Args:
            index: Position of the expense, 0-based
            new_amount: Replacement amount
            reason: New reason; ignored unless reasons are tracked

        Raises:
            IndexOutOfRangeError: If index does not address an expense
        """
        self._check_index(index)
        new_amount = to_decimal(new_amount)
        delta = new_amount - self.expenses[index]
        self.expenses[index] = new_amount
        if self.reasons is not None and reason is not None:
            self.reasons[index] = reason
        self._apply_delta(delta)

    def remove_entries(self, indices: Iterable[int]) -> None:
        """Remove the expenses at the given positions.

        Reasons at the same positions are removed in the same pass. The total
        drops by the removed amounts so it keeps matching the expenses.

        Raises:
            IndexOutOfRangeError: If any index is out of range; nothing is removed
        """
        doomed = set(indices)
        for index in doomed:
            self._check_index(index)
        if not doomed:
            return

        removed = sum((self.expenses[i] for i in doomed), Decimal("0"))
        self.expenses = [e for i, e in enumerate(self.expenses) if i not in doomed]
        if self.reasons is not None:
            self.reasons = [r for i, r in enumerate(self.reasons) if i not in doomed]
        self._apply_delta(-removed)

    def formatted_total(self) -> str:
        """Total with two decimals, e.g. ``"10.50"``."""
        return format_amount(self.total_amount)

    def _apply_delta(self, delta: Decimal) -> None:
        self.total_amount += delta
        if self.total_changes is not None:
            self.total_changes.append(delta)

    def _check_index(self, index: int) -> None:
        if not isinstance(index, int) or not 0 <= index < len(self.expenses):
            raise IndexOutOfRangeError(entry_index_out_of_range(index, len(self.expenses)))
