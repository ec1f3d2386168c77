"""Savings goals: creation, edits, listing and contributions."""

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from finledger.core.exceptions import NotFoundError, ValidationError
from finledger.core.money import ZERO, require_positive, to_decimal
from finledger.core.timezone import now_local, today_local
from finledger.domain.models import GoalStatus, SavingsGoal
from finledger.repositories.protocols import UnitOfWork, UnitOfWorkFactory
from finledger.services.posting import run_atomic, run_read

logger = logging.getLogger(__name__)

MAX_GOAL_AMOUNT = Decimal("999999999.99")
MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500


@dataclass
class SavingsGoalCreate:
    """Input data for creating a savings goal."""

    name: str
    target_amount: Decimal
    current_amount: Decimal = Decimal("0")
    deadline: Optional[date] = None
    description: Optional[str] = None


@dataclass
class SavingsGoalPatch:
    """Partial goal edit; None leaves the stored value in place."""

    name: Optional[str] = None
    target_amount: Optional[Decimal] = None
    current_amount: Optional[Decimal] = None
    deadline: Optional[date] = None
    clear_deadline: bool = False
    description: Optional[str] = None


def _clean_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Goal name is required")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"Goal name cannot exceed {MAX_NAME_LENGTH} characters")
    return name


def _check_description(description: Optional[str]) -> None:
    if description and len(description) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters")


def _check_deadline(deadline: Optional[date]) -> None:
    if deadline is not None and deadline < today_local():
        raise ValidationError("Deadline must be today or in the future")


def _target(value) -> Decimal:
    target = require_positive(value, "target_amount")
    if target > MAX_GOAL_AMOUNT:
        raise ValidationError("Amount is too large")
    return target


def _current(value) -> Decimal:
    current = to_decimal(value, "current_amount")
    if current < ZERO:
        raise ValidationError("current_amount cannot be negative")
    if current > MAX_GOAL_AMOUNT:
        raise ValidationError("Amount is too large")
    return current


class SavingsGoalService:
    """
    Savings goals accumulate contributions toward a target.

    A goal is completed once current_amount >= target_amount; completed
    goals reject further contributions. Contributions larger than the
    remaining amount are accepted in full. Editing the target or the
    running total recomputes completion, so raising the target of a
    completed goal reopens it.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow_factory = uow_factory

    def create_goal(self, owner_id: str, data: SavingsGoalCreate) -> SavingsGoal:
        name = _clean_name(data.name)
        _check_description(data.description)
        target = _target(data.target_amount)
        current = _current(data.current_amount)
        _check_deadline(data.deadline)

        goal = SavingsGoal(
            goal_id=str(uuid.uuid4()),
            owner_id=owner_id,
            name=name,
            target_amount=target,
            current_amount=current,
            deadline=data.deadline,
            description=data.description,
            created_at=now_local(),
        )
        created = run_atomic(self._uow_factory, lambda uow: uow.goals.add(goal))
        logger.info("Created savings goal %s for owner %s", created.goal_id, owner_id)
        return created

    def update_goal(self, owner_id: str, goal_id: str, patch: SavingsGoalPatch) -> SavingsGoal:
        """
        Edit a goal's details and amounts in one version-checked write.

        Raises:
            NotFoundError: goal missing or owned by someone else
            ValidationError: invalid name, amounts or deadline
            ConflictError: the goal changed concurrently and retries ran out
        """
        name = _clean_name(patch.name) if patch.name is not None else None
        _check_description(patch.description)
        target = _target(patch.target_amount) if patch.target_amount is not None else None
        current = _current(patch.current_amount) if patch.current_amount is not None else None
        if not patch.clear_deadline:
            _check_deadline(patch.deadline)

        def work(uow: UnitOfWork) -> SavingsGoal:
            goal = uow.goals.get(owner_id, goal_id, for_update=True)
            if goal is None:
                raise NotFoundError("SavingsGoal", goal_id)

            if name is not None:
                goal.name = name
            if patch.description is not None:
                goal.description = patch.description or None
            if patch.clear_deadline:
                goal.deadline = None
            elif patch.deadline is not None:
                goal.deadline = patch.deadline
            if target is not None:
                goal.target_amount = target
            if current is not None:
                goal.current_amount = current

            goal.version = uow.goals.set_current_amount(
                goal_id,
                goal.current_amount,
                goal.current_amount >= goal.target_amount,
                goal.version,
                target_amount=goal.target_amount,
            )
            uow.goals.update_details(goal)
            return goal

        goal = run_atomic(self._uow_factory, work)
        logger.info("Updated savings goal %s for owner %s", goal_id, owner_id)
        return goal

    def delete_goal(self, owner_id: str, goal_id: str) -> None:
        def work(uow: UnitOfWork) -> None:
            if uow.goals.get(owner_id, goal_id) is None:
                raise NotFoundError("SavingsGoal", goal_id)
            uow.goals.delete(goal_id)

        run_atomic(self._uow_factory, work)
        logger.info("Deleted savings goal %s for owner %s", goal_id, owner_id)

    def get_goal(self, owner_id: str, goal_id: str) -> SavingsGoal:
        goal = run_read(self._uow_factory, lambda uow: uow.goals.get(owner_id, goal_id))
        if goal is None:
            raise NotFoundError("SavingsGoal", goal_id)
        return goal

    def list_goals(self, owner_id: str, status: GoalStatus = GoalStatus.ALL) -> list[SavingsGoal]:
        return run_read(
            self._uow_factory,
            lambda uow: uow.goals.list_by_owner(owner_id, GoalStatus(status)),
        )

    def contribute(self, owner_id: str, goal_id: str, amount: Decimal) -> SavingsGoal:
        """
        Add amount to a goal's running total.

        Raises:
            NotFoundError: goal missing or owned by someone else
            ValidationError: amount not positive, or the goal is already completed
        """
        amount = require_positive(amount)
        if amount > MAX_GOAL_AMOUNT:
            raise ValidationError("Amount is too large")

        def work(uow: UnitOfWork) -> SavingsGoal:
            goal = uow.goals.get(owner_id, goal_id, for_update=True)
            if goal is None:
                raise NotFoundError("SavingsGoal", goal_id)
            if goal.is_completed:
                raise ValidationError("This goal has already been completed", code="GOAL_COMPLETED")

            new_amount = goal.current_amount + amount
            goal.version = uow.goals.set_current_amount(
                goal_id,
                new_amount,
                new_amount >= goal.target_amount,
                goal.version,
            )
            goal.current_amount = new_amount
            return goal

        goal = run_atomic(self._uow_factory, work)
        logger.info(
            "Contributed %s to goal %s (now %s of %s)",
            amount, goal_id, goal.current_amount, goal.target_amount,
        )
        return goal
