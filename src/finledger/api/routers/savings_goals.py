"""Savings goal endpoints."""

from fastapi import APIRouter, Depends, Query, Response

from finledger.api.deps import get_owner_id, get_savings_goal_service
from finledger.api.schemas import (
    ContributeRequest,
    SavingsGoalCreateRequest,
    SavingsGoalListResponse,
    SavingsGoalResponse,
    SavingsGoalUpdateRequest,
)
from finledger.domain.models import GoalStatus
from finledger.services import SavingsGoalCreate, SavingsGoalService

router = APIRouter(prefix="/savings-goals", tags=["savings-goals"])


@router.post("", response_model=SavingsGoalResponse, status_code=201)
def create_goal(
    request: SavingsGoalCreateRequest,
    owner_id: str = Depends(get_owner_id),
    goals: SavingsGoalService = Depends(get_savings_goal_service),
) -> SavingsGoalResponse:
    goal = goals.create_goal(
        owner_id,
        SavingsGoalCreate(
            name=request.name,
            target_amount=request.target_amount,
            current_amount=request.current_amount,
            deadline=request.deadline,
            description=request.description,
        ),
    )
    return SavingsGoalResponse.model_validate(goal)


@router.get("", response_model=SavingsGoalListResponse)
def list_goals(
    status: GoalStatus = Query(GoalStatus.ALL),
    owner_id: str = Depends(get_owner_id),
    goals: SavingsGoalService = Depends(get_savings_goal_service),
) -> SavingsGoalListResponse:
    items = goals.list_goals(owner_id, status)
    return SavingsGoalListResponse(
        goals=[SavingsGoalResponse.model_validate(g) for g in items],
        count=len(items),
    )


@router.get("/{goal_id}", response_model=SavingsGoalResponse)
def get_goal(
    goal_id: str,
    owner_id: str = Depends(get_owner_id),
    goals: SavingsGoalService = Depends(get_savings_goal_service),
) -> SavingsGoalResponse:
    return SavingsGoalResponse.model_validate(goals.get_goal(owner_id, goal_id))


@router.patch("/{goal_id}", response_model=SavingsGoalResponse)
def update_goal(
    goal_id: str,
    request: SavingsGoalUpdateRequest,
    owner_id: str = Depends(get_owner_id),
    goals: SavingsGoalService = Depends(get_savings_goal_service),
) -> SavingsGoalResponse:
    """Edit a goal; completion is recomputed from the new target and running total."""
    return SavingsGoalResponse.model_validate(goals.update_goal(owner_id, goal_id, request.to_patch()))


@router.delete("/{goal_id}", status_code=204)
def delete_goal(
    goal_id: str,
    owner_id: str = Depends(get_owner_id),
    goals: SavingsGoalService = Depends(get_savings_goal_service),
) -> Response:
    goals.delete_goal(owner_id, goal_id)
    return Response(status_code=204)


@router.post("/{goal_id}/contribute", response_model=SavingsGoalResponse)
def contribute(
    goal_id: str,
    request: ContributeRequest,
    owner_id: str = Depends(get_owner_id),
    goals: SavingsGoalService = Depends(get_savings_goal_service),
) -> SavingsGoalResponse:
    """Add to a goal's running total; completed goals reject contributions."""
    return SavingsGoalResponse.model_validate(goals.contribute(owner_id, goal_id, request.amount))
