"""SQLAlchemy implementation of SavingsGoalRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from finledger.core.exceptions import ConflictError
from finledger.domain.models import SavingsGoal, GoalStatus
from finledger.repositories.sqlalchemy.orm_models import SavingsGoalORM


class SqlAlchemySavingsGoalRepository:
    """SQLAlchemy-backed savings goal repository."""

    def __init__(self, db: Session):
        self._db = db

    def add(self, goal: SavingsGoal) -> SavingsGoal:
        orm_goal = SavingsGoalORM(
            goal_id=goal.goal_id,
            owner_id=goal.owner_id,
            name=goal.name,
            target_amount=goal.target_amount,
            current_amount=goal.current_amount,
            is_completed=goal.is_completed,
            deadline=goal.deadline,
            description=goal.description,
            version=goal.version,
            created_at=goal.created_at,
        )
        self._db.add(orm_goal)
        self._db.flush()
        return self._to_domain(orm_goal)

    def get(self, owner_id: str, goal_id: str, for_update: bool = False) -> Optional[SavingsGoal]:
        query = self._db.query(SavingsGoalORM).filter(
            SavingsGoalORM.goal_id == goal_id,
            SavingsGoalORM.owner_id == owner_id,
        )
        if for_update:
            query = query.with_for_update()
        orm_goal = query.populate_existing().first()
        return self._to_domain(orm_goal) if orm_goal else None

    def list_by_owner(self, owner_id: str, status: GoalStatus = GoalStatus.ALL) -> list[SavingsGoal]:
        query = self._db.query(SavingsGoalORM).filter(SavingsGoalORM.owner_id == owner_id)
        if status == GoalStatus.ACTIVE:
            query = query.filter(SavingsGoalORM.is_completed == False)  # noqa: E712
        elif status == GoalStatus.COMPLETED:
            query = query.filter(SavingsGoalORM.is_completed == True)  # noqa: E712
        query = query.order_by(SavingsGoalORM.created_at.desc(), SavingsGoalORM.goal_id)
        return [self._to_domain(g) for g in query.populate_existing().all()]

    def set_current_amount(
        self,
        goal_id: str,
        current_amount: Decimal,
        is_completed: bool,
        expected_version: int,
        target_amount: Optional[Decimal] = None,
    ) -> int:
        """Write a new running total (and target) if the row is still at expected_version; return the new version."""
        values = dict(
            current_amount=current_amount,
            is_completed=is_completed,
            version=expected_version + 1,
        )
        if target_amount is not None:
            values["target_amount"] = target_amount
        result = self._db.execute(
            update(SavingsGoalORM)
            .where(
                SavingsGoalORM.goal_id == goal_id,
                SavingsGoalORM.version == expected_version,
            )
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        if result.rowcount != 1:
            raise ConflictError(f"Savings goal {goal_id} was modified concurrently")
        return expected_version + 1

    def update_details(self, goal: SavingsGoal) -> None:
        self._db.execute(
            update(SavingsGoalORM)
            .where(SavingsGoalORM.goal_id == goal.goal_id)
            .values(name=goal.name, deadline=goal.deadline, description=goal.description)
            .execution_options(synchronize_session="fetch")
        )

    def delete(self, goal_id: str) -> None:
        self._db.query(SavingsGoalORM).filter(
            SavingsGoalORM.goal_id == goal_id
        ).delete(synchronize_session="fetch")

    @staticmethod
    def _to_domain(orm: SavingsGoalORM) -> SavingsGoal:
        return SavingsGoal(
            goal_id=orm.goal_id,
            owner_id=orm.owner_id,
            name=orm.name,
            target_amount=Decimal(orm.target_amount),
            current_amount=Decimal(orm.current_amount),
            deadline=orm.deadline,
            description=orm.description,
            version=orm.version,
            created_at=orm.created_at,
        )
