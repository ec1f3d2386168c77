"""Transaction domain model and its balance effects."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from finledger.domain.models.enums import TransactionType


@dataclass(frozen=True)
class BalanceEffect:
    """Signed change a transaction causes on one account."""

    account_id: str
    delta: Decimal

    def reversed(self) -> "BalanceEffect":
        return BalanceEffect(account_id=self.account_id, delta=-self.delta)


@dataclass
class Transaction:
    """
    Ledger entry (source of truth for balances).

    - INCOME/EXPENSE require a category of the same type
    - TRANSFER requires to_account_id != account_id and carries no category
    - amount is always positive; the sign comes from the type
    """

    txn_id: str
    owner_id: str
    txn_type: TransactionType
    amount: Decimal
    account_id: str
    txn_date: date
    description: str
    to_account_id: Optional[str] = None
    category_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.txn_type, str):
            self.txn_type = TransactionType(self.txn_type)

    @property
    def is_transfer(self) -> bool:
        return self.txn_type == TransactionType.TRANSFER

    def effects(self) -> list[BalanceEffect]:
        """
        Balance effects of this transaction.

        INCOME: +amount on account_id. EXPENSE: -amount on account_id.
        TRANSFER: -amount on account_id, +amount on to_account_id.
        """
        if self.txn_type == TransactionType.INCOME:
            return [BalanceEffect(self.account_id, self.amount)]
        if self.txn_type == TransactionType.EXPENSE:
            return [BalanceEffect(self.account_id, -self.amount)]
        return [
            BalanceEffect(self.account_id, -self.amount),
            BalanceEffect(self.to_account_id, self.amount),
        ]

    def reverse_effects(self) -> list[BalanceEffect]:
        return [effect.reversed() for effect in self.effects()]

    @property
    def account_ids(self) -> list[str]:
        """Accounts touched by this transaction."""
        return [effect.account_id for effect in self.effects()]
