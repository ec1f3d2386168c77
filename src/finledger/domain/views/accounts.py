"""View models for account summaries."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from finledger.domain.models import Account


@dataclass
class AccountTypeTotal:
    account_type: str
    count: int
    total_balance: Decimal


@dataclass
class AccountsSummary:
    """Aggregates over a user's active accounts."""

    total_accounts: int
    total_balance: Decimal
    by_type: list[AccountTypeTotal] = field(default_factory=list)
    by_currency: dict[str, Decimal] = field(default_factory=dict)
    richest_account: Optional[Account] = None
    poorest_account: Optional[Account] = None


@dataclass
class Reconciliation:
    """Stored running balance against the balance recomputed from the ledger."""

    account_id: str
    stored_balance: Decimal
    computed_balance: Decimal

    @property
    def difference(self) -> Decimal:
        return self.stored_balance - self.computed_balance

    @property
    def is_consistent(self) -> bool:
        return self.difference == Decimal("0")
