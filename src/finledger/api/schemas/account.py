"""Pydantic schemas for account endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from finledger.domain.models.enums import AccountType


class AccountCreateRequest(BaseModel):
    """Request schema for creating an account."""

    name: str = Field(..., min_length=1, max_length=100)
    account_type: AccountType = Field(default=AccountType.BANK_ACCOUNT)
    opening_balance: Decimal = Field(
        default=Decimal("0"),
        max_digits=14,
        decimal_places=2,
        description="Starting balance; may be negative for credit accounts",
    )
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)


class AccountResponse(BaseModel):
    """Response schema for a single account."""

    model_config = {"from_attributes": True}

    account_id: str
    name: str
    account_type: AccountType
    balance: Decimal
    opening_balance: Decimal
    currency: str
    is_active: bool
    created_at: Optional[datetime] = None


class AccountListResponse(BaseModel):
    """Response schema for listing accounts."""

    accounts: list[AccountResponse]
    count: int


class AccountTypeTotalResponse(BaseModel):
    model_config = {"from_attributes": True}

    account_type: str
    count: int
    total_balance: Decimal


class AccountsSummaryResponse(BaseModel):
    model_config = {"from_attributes": True}

    total_accounts: int
    total_balance: Decimal
    by_type: list[AccountTypeTotalResponse]
    by_currency: dict[str, Decimal]
    richest_account: Optional[AccountResponse] = None
    poorest_account: Optional[AccountResponse] = None


class ReconciliationResponse(BaseModel):
    model_config = {"from_attributes": True}

    account_id: str
    stored_balance: Decimal
    computed_balance: Decimal
    difference: Decimal
    is_consistent: bool
