"""Savings goal repository protocol."""

from decimal import Decimal
from typing import Protocol, Optional

from finledger.domain.models import SavingsGoal, GoalStatus


class SavingsGoalRepository(Protocol):
    """Interface for savings goal data access."""

    def add(self, goal: SavingsGoal) -> SavingsGoal:
        ...

    def get(self, owner_id: str, goal_id: str, for_update: bool = False) -> Optional[SavingsGoal]:
        ...

    def list_by_owner(self, owner_id: str, status: GoalStatus = GoalStatus.ALL) -> list[SavingsGoal]:
        ...

    def set_current_amount(
        self,
        goal_id: str,
        current_amount: Decimal,
        is_completed: bool,
        expected_version: int,
        target_amount: Optional[Decimal] = None,
    ) -> int:
        """Write a new running total (and target) if the row is still at expected_version; return the new version."""
        ...

    def update_details(self, goal: SavingsGoal) -> None:
        """Write name, deadline and description; amounts go through set_current_amount."""
        ...

    def delete(self, goal_id: str) -> None:
        ...
