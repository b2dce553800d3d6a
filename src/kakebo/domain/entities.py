"""Domain model entities for kakebo.

These are pure data classes representing business concepts, independent of
database schema. Progress aggregates (profile, goals, periods) live in their
own modules because they carry behavior; this module holds the plain
records they consume.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Kind of money movement."""

    INCOME = "income"
    EXPENSE = "expense"
    SAVING = "saving"
    TRANSFER = "transfer"

    @property
    def color(self) -> str:
        return _TRANSACTION_TYPE_COLORS[self]


_TRANSACTION_TYPE_COLORS = {
    TransactionType.INCOME: "#10B981",
    TransactionType.EXPENSE: "#EF4444",
    TransactionType.SAVING: "#3B82F6",
    TransactionType.TRANSFER: "#6B7280",
}


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``amount`` is always positive; ``transaction_type`` decides whether it
    adds to or subtracts from the available balance.
    """

    id: Optional[int]
    amount: Decimal
    transaction_type: TransactionType
    description: str
    date: date
    created_at: datetime
    category: Optional[str] = None
    notes: Optional[str] = None
    period_id: Optional[int] = None

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign it has on the available balance."""
        if self.transaction_type == TransactionType.INCOME:
            return self.amount
        if self.transaction_type in (TransactionType.EXPENSE, TransactionType.SAVING):
            return -self.amount
        return Decimal("0")


def validate_transaction(transaction: Transaction) -> list[str]:
    """Return validation messages for a transaction, empty when valid."""
    errors = []
    if transaction.amount <= 0:
        errors.append("Amount must be greater than zero")
    if not transaction.description or not transaction.description.strip():
        errors.append("Description is required")
    return errors
