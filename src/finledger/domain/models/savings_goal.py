"""Savings goal domain model."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass
class SavingsGoal:
    """Target amount accumulated through contributions, independent of accounts."""

    goal_id: str
    owner_id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal = field(default_factory=lambda: Decimal("0"))
    deadline: Optional[date] = None
    description: Optional[str] = None
    version: int = 0
    created_at: Optional[datetime] = field(default=None)

    @property
    def is_completed(self) -> bool:
        return self.current_amount >= self.target_amount

    @property
    def remaining_amount(self) -> Decimal:
        return max(self.target_amount - self.current_amount, Decimal("0"))
