"""Pydantic schemas for budget endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from finledger.domain.models.enums import BudgetPeriod
from finledger.services.budget_service import BudgetPatch


class BudgetCreateRequest(BaseModel):
    """Request schema for creating a budget; end_date is derived from period when omitted."""

    category_id: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)
    period: BudgetPeriod
    start_date: date
    end_date: Optional[date] = None
    is_active: bool = True


class BudgetUpdateRequest(BaseModel):
    """Partial budget update; an explicit null end_date clears it."""

    category_id: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[Decimal] = Field(default=None, gt=0, max_digits=14, decimal_places=2)
    period: Optional[BudgetPeriod] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: Optional[bool] = None

    def to_patch(self) -> BudgetPatch:
        return BudgetPatch(
            category_id=self.category_id,
            amount=self.amount,
            period=self.period,
            start_date=self.start_date,
            end_date=self.end_date,
            clear_end_date="end_date" in self.model_fields_set and self.end_date is None,
            is_active=self.is_active,
        )


class BudgetResponse(BaseModel):
    model_config = {"from_attributes": True}

    budget_id: str
    category_id: str
    amount: Decimal
    period: BudgetPeriod
    start_date: date
    end_date: Optional[date] = None
    is_active: bool
    created_at: Optional[datetime] = None


class BudgetProgressResponse(BaseModel):
    """Spend-vs-limit for one budget."""

    model_config = {"from_attributes": True}

    budget: BudgetResponse
    window_start: date
    window_end: date
    spent: Decimal
    percentage: Decimal
    remaining: Decimal
    days_remaining: int
    is_exceeded: bool


class BudgetProgressListResponse(BaseModel):
    budgets: list[BudgetProgressResponse]
    count: int
