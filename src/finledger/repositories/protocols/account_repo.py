"""Account repository protocol."""

from decimal import Decimal
from typing import Protocol, Optional

from finledger.domain.models import Account


class AccountRepository(Protocol):
    """Interface for account data access."""

    def add(self, account: Account) -> Account:
        """Persist a new account."""
        ...

    def get(self, owner_id: str, account_id: str) -> Optional[Account]:
        """Retrieve an account owned by owner_id."""
        ...

    def list_by_owner(self, owner_id: str, active_only: bool = False) -> list[Account]:
        """List accounts of an owner ordered by name."""
        ...

    def lock(self, account_ids: list[str]) -> dict[str, Account]:
        """Lock accounts for update in ascending id order and return fresh copies."""
        ...

    def set_balance(self, account_id: str, balance: Decimal, expected_version: int) -> int:
        """Write a new balance if the row is still at expected_version; return the new version."""
        ...

    def set_active(self, account_id: str, is_active: bool) -> None:
        """Activate or deactivate an account."""
        ...

    def delete(self, account_id: str) -> None:
        """Delete an account (hard delete)."""
        ...
