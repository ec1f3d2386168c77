"""Budget endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from finledger.api.deps import get_budget_service, get_owner_id
from finledger.api.schemas import (
    BudgetCreateRequest,
    BudgetProgressListResponse,
    BudgetProgressResponse,
    BudgetResponse,
    BudgetUpdateRequest,
)
from finledger.services import BudgetCreate, BudgetService

router = APIRouter(prefix="/budgets", tags=["budgets"])


@router.post("", response_model=BudgetResponse, status_code=201)
def create_budget(
    request: BudgetCreateRequest,
    owner_id: str = Depends(get_owner_id),
    budgets: BudgetService = Depends(get_budget_service),
) -> BudgetResponse:
    """Create a budget on an EXPENSE category."""
    budget = budgets.create_budget(
        owner_id,
        BudgetCreate(
            category_id=request.category_id,
            amount=request.amount,
            period=request.period,
            start_date=request.start_date,
            end_date=request.end_date,
            is_active=request.is_active,
        ),
    )
    return BudgetResponse.model_validate(budget)


@router.get("", response_model=BudgetProgressListResponse)
def list_budgets(
    is_active: Optional[bool] = Query(None),
    owner_id: str = Depends(get_owner_id),
    budgets: BudgetService = Depends(get_budget_service),
) -> BudgetProgressListResponse:
    """List budgets with their current progress."""
    items = budgets.list_budget_progress(owner_id, active=is_active)
    return BudgetProgressListResponse(
        budgets=[BudgetProgressResponse.model_validate(p) for p in items],
        count=len(items),
    )


@router.get("/{budget_id}/progress", response_model=BudgetProgressResponse)
def get_budget_progress(
    budget_id: str,
    owner_id: str = Depends(get_owner_id),
    budgets: BudgetService = Depends(get_budget_service),
) -> BudgetProgressResponse:
    return BudgetProgressResponse.model_validate(budgets.get_budget_progress(owner_id, budget_id))


@router.patch("/{budget_id}", response_model=BudgetResponse)
def update_budget(
    budget_id: str,
    request: BudgetUpdateRequest,
    owner_id: str = Depends(get_owner_id),
    budgets: BudgetService = Depends(get_budget_service),
) -> BudgetResponse:
    """Edit a budget; a new category must be an EXPENSE category."""
    return BudgetResponse.model_validate(budgets.update_budget(owner_id, budget_id, request.to_patch()))


@router.delete("/{budget_id}", status_code=204)
def delete_budget(
    budget_id: str,
    owner_id: str = Depends(get_owner_id),
    budgets: BudgetService = Depends(get_budget_service),
) -> Response:
    budgets.delete_budget(owner_id, budget_id)
    return Response(status_code=204)
