"""Budget domain model."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from finledger.domain.models.enums import BudgetPeriod


@dataclass
class Budget:
    """Spending limit for one expense category over a period."""

    budget_id: str
    owner_id: str
    category_id: str
    amount: Decimal
    period: BudgetPeriod
    start_date: date
    end_date: Optional[date] = None
    is_active: bool = True
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.period, str):
            self.period = BudgetPeriod(self.period)
