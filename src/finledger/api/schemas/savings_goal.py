"""Pydantic schemas for savings goal endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from finledger.services.savings_goal_service import SavingsGoalPatch

GOAL_AMOUNT_LIMIT = Decimal("999999999.99")


class SavingsGoalCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    target_amount: Decimal = Field(..., gt=0, le=GOAL_AMOUNT_LIMIT, decimal_places=2)
    current_amount: Decimal = Field(default=Decimal("0"), ge=0, le=GOAL_AMOUNT_LIMIT, decimal_places=2)
    deadline: Optional[date] = None
    description: Optional[str] = Field(default=None, max_length=500)


class SavingsGoalUpdateRequest(BaseModel):
    """Partial goal update; an explicit null deadline clears it."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    target_amount: Optional[Decimal] = Field(default=None, gt=0, le=GOAL_AMOUNT_LIMIT, decimal_places=2)
    current_amount: Optional[Decimal] = Field(default=None, ge=0, le=GOAL_AMOUNT_LIMIT, decimal_places=2)
    deadline: Optional[date] = None
    description: Optional[str] = Field(default=None, max_length=500)

    def to_patch(self) -> SavingsGoalPatch:
        return SavingsGoalPatch(
            name=self.name,
            target_amount=self.target_amount,
            current_amount=self.current_amount,
            deadline=self.deadline,
            clear_deadline="deadline" in self.model_fields_set and self.deadline is None,
            description=self.description,
        )


class ContributeRequest(BaseModel):
    amount: Decimal = Field(..., gt=0, le=GOAL_AMOUNT_LIMIT, decimal_places=2)


class SavingsGoalResponse(BaseModel):
    model_config = {"from_attributes": True}

    goal_id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal
    remaining_amount: Decimal
    is_completed: bool
    deadline: Optional[date] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None


class SavingsGoalListResponse(BaseModel):
    goals: list[SavingsGoalResponse]
    count: int
