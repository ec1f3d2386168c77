"""Budget aggregation: spend-vs-limit recomputed from the ledger on demand."""

import logging
import math
import uuid
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional, Union

from finledger.config.settings import get_settings
from finledger.core.exceptions import NotFoundError, ValidationError
from finledger.core.money import HUNDRED, ZERO, quantize_money, require_positive, sum_money
from finledger.core.periods import end_of_month, end_of_week, end_of_year
from finledger.core.timezone import now_local
from finledger.domain.models import Budget, BudgetPeriod, CategoryType, TransactionType
from finledger.domain.views import BudgetProgress
from finledger.repositories.protocols import TransactionFilter, UnitOfWork, UnitOfWorkFactory
from finledger.services.posting import run_atomic, run_read

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass
class BudgetCreate:
    """Input data for creating a budget."""

    category_id: str
    amount: Decimal
    period: BudgetPeriod
    start_date: date
    end_date: Optional[date] = None
    is_active: bool = True


@dataclass
class BudgetPatch:
    """
    Partial budget edit; None leaves the stored value in place.

    Changing period or start_date without an explicit end_date re-derives the
    window end. clear_end_date stores no end date, so progress falls back to
    the period window.
    """

    category_id: Optional[str] = None
    amount: Optional[Decimal] = None
    period: Optional[BudgetPeriod] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    clear_end_date: bool = False
    is_active: Optional[bool] = None


def derive_end_date(start_date: date, period: BudgetPeriod, week_start: Optional[int] = None) -> date:
    """
    Last day of the week, month or year containing start_date.

    Budget weeks follow budget_week_start (Sunday by default, so a weekly
    budget closes on Saturday), independent of the reporting week.
    """
    period = BudgetPeriod(period)
    if period == BudgetPeriod.WEEKLY:
        if week_start is None:
            week_start = get_settings().budget_week_start
        return end_of_week(start_date, week_start)
    if period == BudgetPeriod.MONTHLY:
        return end_of_month(start_date)
    return end_of_year(start_date)


def compute_progress(budget: Budget, spent: Decimal, as_of: datetime) -> BudgetProgress:
    """Pure progress arithmetic for a budget whose spend is already known."""
    window_end = budget.end_date or derive_end_date(budget.start_date, budget.period)

    ratio = spent / budget.amount * HUNDRED if budget.amount > ZERO else ZERO
    percentage = quantize_money(min(ratio, HUNDRED))
    remaining = quantize_money(max(budget.amount - spent, ZERO))

    end_of_window = datetime.combine(window_end, time.max)
    seconds_left = (end_of_window - as_of).total_seconds()
    days_remaining = max(math.ceil(seconds_left / SECONDS_PER_DAY), 0)

    return BudgetProgress(
        budget=budget,
        window_start=budget.start_date,
        window_end=window_end,
        spent=quantize_money(spent),
        percentage=percentage,
        remaining=remaining,
        days_remaining=days_remaining,
    )


class BudgetService:
    """
    Computes budget progress from raw EXPENSE transactions.

    Progress is never stored: every call re-reads the ledger, so it always
    reflects the latest edits and deletions.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow_factory = uow_factory

    def create_budget(self, owner_id: str, data: BudgetCreate) -> Budget:
        """Create a budget on one of the owner's EXPENSE categories."""
        amount = require_positive(data.amount)
        period = BudgetPeriod(data.period)
        end_date = data.end_date or derive_end_date(data.start_date, period)
        if end_date < data.start_date:
            raise ValidationError("Budget end date cannot be before its start date")

        def work(uow: UnitOfWork) -> Budget:
            self._require_expense_category(uow, owner_id, data.category_id)
            return uow.budgets.add(
                Budget(
                    budget_id=str(uuid.uuid4()),
                    owner_id=owner_id,
                    category_id=data.category_id,
                    amount=amount,
                    period=period,
                    start_date=data.start_date,
                    end_date=end_date,
                    is_active=data.is_active,
                    created_at=now_local(),
                )
            )

        budget = run_atomic(self._uow_factory, work)
        logger.info("Created %s budget %s for owner %s", period.value, budget.budget_id, owner_id)
        return budget

    def update_budget(self, owner_id: str, budget_id: str, patch: BudgetPatch) -> Budget:
        """
        Edit a budget in place.

        A new category must be one of the owner's EXPENSE categories, and the
        resulting window may not end before it starts.
        """
        amount = require_positive(patch.amount) if patch.amount is not None else None

        def work(uow: UnitOfWork) -> Budget:
            budget = uow.budgets.get(owner_id, budget_id)
            if budget is None:
                raise NotFoundError("Budget", budget_id)

            if patch.category_id:
                self._require_expense_category(uow, owner_id, patch.category_id)
                budget.category_id = patch.category_id
            if amount is not None:
                budget.amount = amount

            window_moved = False
            if patch.period is not None:
                budget.period = BudgetPeriod(patch.period)
                window_moved = True
            if patch.start_date is not None:
                budget.start_date = patch.start_date
                window_moved = True

            if patch.clear_end_date:
                budget.end_date = None
            elif patch.end_date is not None:
                budget.end_date = patch.end_date
            elif window_moved:
                budget.end_date = derive_end_date(budget.start_date, budget.period)
            if budget.end_date is not None and budget.end_date < budget.start_date:
                raise ValidationError("Budget end date cannot be before its start date")

            if patch.is_active is not None:
                budget.is_active = patch.is_active
            return uow.budgets.update(budget)

        budget = run_atomic(self._uow_factory, work)
        logger.info("Updated budget %s for owner %s", budget_id, owner_id)
        return budget

    def delete_budget(self, owner_id: str, budget_id: str) -> None:
        def work(uow: UnitOfWork) -> None:
            if uow.budgets.get(owner_id, budget_id) is None:
                raise NotFoundError("Budget", budget_id)
            uow.budgets.delete(budget_id)

        run_atomic(self._uow_factory, work)
        logger.info("Deleted budget %s for owner %s", budget_id, owner_id)

    def progress(
        self,
        budget: Budget,
        as_of: Optional[Union[datetime, date]] = None,
    ) -> BudgetProgress:
        """Progress of a budget as of a moment (defaults to now)."""
        return run_read(self._uow_factory, lambda uow: self._progress_in(uow, budget, as_of))

    def get_budget_progress(
        self,
        owner_id: str,
        budget_id: str,
        as_of: Optional[Union[datetime, date]] = None,
    ) -> BudgetProgress:
        def work(uow: UnitOfWork) -> BudgetProgress:
            budget = uow.budgets.get(owner_id, budget_id)
            if budget is None:
                raise NotFoundError("Budget", budget_id)
            return self._progress_in(uow, budget, as_of)

        return run_read(self._uow_factory, work)

    def list_budget_progress(
        self,
        owner_id: str,
        active: Optional[bool] = None,
        as_of: Optional[Union[datetime, date]] = None,
    ) -> list[BudgetProgress]:
        def work(uow: UnitOfWork) -> list[BudgetProgress]:
            return [
                self._progress_in(uow, budget, as_of)
                for budget in uow.budgets.list_by_owner(owner_id, is_active=active)
            ]

        return run_read(self._uow_factory, work)

    @staticmethod
    def _require_expense_category(uow: UnitOfWork, owner_id: str, category_id: str) -> None:
        category = uow.categories.get(owner_id, category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        if category.category_type != CategoryType.EXPENSE:
            raise ValidationError("Budgets can only be created for expense categories")

    @staticmethod
    def _progress_in(
        uow: UnitOfWork,
        budget: Budget,
        as_of: Optional[Union[datetime, date]],
    ) -> BudgetProgress:
        if as_of is None:
            as_of = now_local()
        elif not isinstance(as_of, datetime):
            as_of = datetime.combine(as_of, time.min)

        window_end = budget.end_date or derive_end_date(budget.start_date, budget.period)
        expenses = uow.transactions.query(
            budget.owner_id,
            TransactionFilter(
                txn_types=[TransactionType.EXPENSE],
                category_ids=[budget.category_id],
                start_date=budget.start_date,
                end_date=window_end,
            ),
        )
        spent = sum_money(txn.amount for txn in expenses)
        return compute_progress(budget, spent, as_of)
