"""Account domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from finledger.domain.models.enums import AccountType


@dataclass
class Account:
    """
    Financial account with a maintained running balance.

    `balance` is mutated only by balance postings; `opening_balance` is the
    balance the account was created with and never changes.
    """

    account_id: str
    owner_id: str
    name: str
    account_type: AccountType = AccountType.BANK_ACCOUNT
    balance: Decimal = field(default_factory=lambda: Decimal("0"))
    opening_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    currency: str = "USD"
    is_active: bool = True
    version: int = 0
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.account_type, str):
            self.account_type = AccountType(self.account_type)
