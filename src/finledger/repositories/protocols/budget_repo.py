"""Budget repository protocol."""

from typing import Protocol, Optional

from finledger.domain.models import Budget


class BudgetRepository(Protocol):
    """Interface for budget data access."""

    def add(self, budget: Budget) -> Budget:
        ...

    def get(self, owner_id: str, budget_id: str) -> Optional[Budget]:
        ...

    def list_by_owner(self, owner_id: str, is_active: Optional[bool] = None) -> list[Budget]:
        ...

    def update(self, budget: Budget) -> Budget:
        """Overwrite the mutable fields of an existing budget."""
        ...

    def delete(self, budget_id: str) -> None:
        ...
