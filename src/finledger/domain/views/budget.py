"""View models for budget progress."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from finledger.domain.models import Budget


@dataclass
class BudgetProgress:
    """Spend-vs-limit for a budget, recomputed from the ledger on every call."""

    budget: Budget
    window_start: date
    window_end: date
    spent: Decimal
    percentage: Decimal
    remaining: Decimal
    days_remaining: int

    @property
    def is_exceeded(self) -> bool:
        return self.spent > self.budget.amount
