"""Pydantic schemas for transaction endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from finledger.domain.models.enums import TransactionType
from finledger.services.ledger_service import (
    ExpenseCreate,
    IncomeCreate,
    TransactionPatch,
    TransferCreate,
)

Amount = Annotated[Decimal, Field(gt=0, max_digits=14, decimal_places=2)]


class _TransactionCreateBase(BaseModel):
    account_id: str = Field(..., min_length=1, description="Account the money moves in or out of")
    amount: Amount
    description: str = Field(..., min_length=1, max_length=200)
    txn_date: Optional[date] = Field(default=None, description="Calendar day; defaults to today")
    notes: Optional[str] = Field(default=None, max_length=1000)


class IncomeCreateRequest(_TransactionCreateBase):
    type: Literal["INCOME"]
    category_id: str = Field(..., min_length=1)

    def to_input(self) -> IncomeCreate:
        return IncomeCreate(
            account_id=self.account_id,
            amount=self.amount,
            category_id=self.category_id,
            description=self.description,
            txn_date=self.txn_date,
            notes=self.notes,
        )


class ExpenseCreateRequest(_TransactionCreateBase):
    type: Literal["EXPENSE"]
    category_id: str = Field(..., min_length=1)

    def to_input(self) -> ExpenseCreate:
        return ExpenseCreate(
            account_id=self.account_id,
            amount=self.amount,
            category_id=self.category_id,
            description=self.description,
            txn_date=self.txn_date,
            notes=self.notes,
        )


class TransferCreateRequest(_TransactionCreateBase):
    type: Literal["TRANSFER"]
    to_account_id: str = Field(..., min_length=1)

    def to_input(self) -> TransferCreate:
        return TransferCreate(
            account_id=self.account_id,
            to_account_id=self.to_account_id,
            amount=self.amount,
            description=self.description,
            txn_date=self.txn_date,
            notes=self.notes,
        )


# Tagged on "type"; routers pass discriminator="type" to Body.
TransactionCreateRequest = Union[IncomeCreateRequest, ExpenseCreateRequest, TransferCreateRequest]


class TransactionUpdateRequest(BaseModel):
    """Request schema for updating a transaction (partial update)."""

    type: Optional[TransactionType] = None
    amount: Optional[Amount] = None
    account_id: Optional[str] = Field(default=None, min_length=1)
    to_account_id: Optional[str] = Field(default=None, min_length=1)
    category_id: Optional[str] = Field(default=None, min_length=1)
    txn_date: Optional[date] = None
    description: Optional[str] = Field(default=None, min_length=1, max_length=200)
    notes: Optional[str] = Field(default=None, max_length=1000)

    def to_patch(self) -> TransactionPatch:
        return TransactionPatch(
            txn_type=self.type,
            amount=self.amount,
            account_id=self.account_id,
            to_account_id=self.to_account_id,
            category_id=self.category_id,
            txn_date=self.txn_date,
            description=self.description,
            notes=self.notes,
        )


class TransferRequest(BaseModel):
    """Request schema for a transfer between two accounts."""

    from_account_id: str = Field(..., min_length=1)
    to_account_id: str = Field(..., min_length=1)
    amount: Amount
    txn_date: Optional[date] = None
    description: str = Field(default="Transfer", min_length=1, max_length=200)
    notes: Optional[str] = Field(default=None, max_length=1000)


class TransactionResponse(BaseModel):
    """Response schema for a single transaction."""

    model_config = {"from_attributes": True}

    txn_id: str
    txn_type: TransactionType
    amount: Decimal
    account_id: str
    to_account_id: Optional[str] = None
    category_id: Optional[str] = None
    txn_date: date
    description: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TransactionListResponse(BaseModel):
    """Response schema for listing transactions."""

    transactions: list[TransactionResponse]
    count: int
    total: int
    limit: int
    offset: int
