"""Transaction repository protocol."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Protocol, Optional

from finledger.domain.models import Transaction, TransactionType


@dataclass
class TransactionFilter:
    """Query filters for ledger reads; None means unfiltered."""

    txn_types: Optional[list[TransactionType]] = None
    account_id: Optional[str] = None
    category_ids: Optional[list[str]] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None
    search: Optional[str] = None


class TransactionRepository(Protocol):
    """Interface for transaction (ledger) data access."""

    def add(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        ...

    def get(self, owner_id: str, txn_id: str) -> Optional[Transaction]:
        """Retrieve a transaction owned by owner_id."""
        ...

    def update(self, transaction: Transaction) -> Transaction:
        """Overwrite every field of an existing transaction."""
        ...

    def delete(self, txn_id: str) -> None:
        """Remove a transaction row."""
        ...

    def query(
        self,
        owner_id: str,
        filters: Optional[TransactionFilter] = None,
        sort_by: str = "date",
        descending: bool = True,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Transaction]:
        """Query transactions with filters."""
        ...

    def count(self, owner_id: str, filters: Optional[TransactionFilter] = None) -> int:
        """Count transactions matching filters."""
        ...

    def list_touching_account(
        self,
        account_id: str,
        after: Optional[date] = None,
    ) -> list[Transaction]:
        """Transactions whose source or destination is account_id, optionally dated after a day."""
        ...

    def count_touching_account(self, account_id: str) -> int:
        """Number of transactions referencing account_id on either leg."""
        ...
