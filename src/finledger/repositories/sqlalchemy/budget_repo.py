"""SQLAlchemy implementation of BudgetRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from finledger.core.exceptions import NotFoundError
from finledger.domain.models import Budget
from finledger.repositories.sqlalchemy.orm_models import BudgetORM


class SqlAlchemyBudgetRepository:
    """SQLAlchemy-backed budget repository."""

    def __init__(self, db: Session):
        self._db = db

    def add(self, budget: Budget) -> Budget:
        orm_budget = BudgetORM(
            budget_id=budget.budget_id,
            owner_id=budget.owner_id,
            category_id=budget.category_id,
            amount=budget.amount,
            period=budget.period,
            start_date=budget.start_date,
            end_date=budget.end_date,
            is_active=budget.is_active,
            created_at=budget.created_at,
        )
        self._db.add(orm_budget)
        self._db.flush()
        return self._to_domain(orm_budget)

    def get(self, owner_id: str, budget_id: str) -> Optional[Budget]:
        orm_budget = self._db.query(BudgetORM).filter(
            BudgetORM.budget_id == budget_id,
            BudgetORM.owner_id == owner_id,
        ).first()
        return self._to_domain(orm_budget) if orm_budget else None

    def list_by_owner(self, owner_id: str, is_active: Optional[bool] = None) -> list[Budget]:
        query = self._db.query(BudgetORM).filter(BudgetORM.owner_id == owner_id)
        if is_active is not None:
            query = query.filter(BudgetORM.is_active == is_active)
        query = query.order_by(BudgetORM.start_date.desc(), BudgetORM.budget_id)
        return [self._to_domain(b) for b in query.all()]

    def update(self, budget: Budget) -> Budget:
        """Overwrite the mutable fields of an existing budget."""
        orm_budget = self._db.query(BudgetORM).filter(
            BudgetORM.budget_id == budget.budget_id
        ).first()
        if not orm_budget:
            raise NotFoundError("Budget", budget.budget_id)

        orm_budget.category_id = budget.category_id
        orm_budget.amount = budget.amount
        orm_budget.period = budget.period
        orm_budget.start_date = budget.start_date
        orm_budget.end_date = budget.end_date
        orm_budget.is_active = budget.is_active

        self._db.flush()
        return self._to_domain(orm_budget)

    def delete(self, budget_id: str) -> None:
        self._db.query(BudgetORM).filter(
            BudgetORM.budget_id == budget_id
        ).delete(synchronize_session="fetch")

    @staticmethod
    def _to_domain(orm: BudgetORM) -> Budget:
        return Budget(
            budget_id=orm.budget_id,
            owner_id=orm.owner_id,
            category_id=orm.category_id,
            amount=Decimal(orm.amount),
            period=orm.period,
            start_date=orm.start_date,
            end_date=orm.end_date,
            is_active=orm.is_active,
            created_at=orm.created_at,
        )
