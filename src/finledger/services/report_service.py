"""Report aggregation: periodic, annual, net-worth and category reports from the ledger."""

import calendar
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Union

from finledger.config.settings import get_settings
from finledger.core.exceptions import NotFoundError, ValidationError
from finledger.core.money import (
    CENT,
    HUNDRED,
    ZERO,
    percent_change,
    percentage,
    quantize_money,
    sum_money,
)
from finledger.core.periods import (
    DateWindow,
    add_months,
    end_of_month,
    month_window,
    start_of_month,
    trailing_month_ends,
    week_window,
    year_window,
)
from finledger.core.timezone import today_local
from finledger.domain.models import (
    Account,
    Category,
    ReportType,
    Transaction,
    TransactionType,
)
from finledger.domain.views import (
    AccountGrowth,
    AccountShare,
    AnnualReport,
    BalancePoint,
    CategoryAmount,
    CategoryBreakdown,
    CategoryReport,
    CategoryTransactionLine,
    DashboardSummary,
    NetWorthReport,
    PeriodBucket,
    PeriodComparison,
    PeriodReport,
)
from finledger.repositories.protocols import TransactionFilter, UnitOfWork, UnitOfWorkFactory
from finledger.services.posting import run_read

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"
OTHER = "Other"
NET_WORTH_MONTHS = 12
DASHBOARD_MONTHS = 6
GROWTH_MONTHS = 3

Report = Union[PeriodReport, AnnualReport, NetWorthReport, CategoryBreakdown, CategoryReport]


@dataclass
class ReportQuery:
    """Parameters for get_report; each report type reads only the fields it needs."""

    start: Optional[date] = None
    end: Optional[date] = None
    year: Optional[int] = None
    month: Optional[int] = None
    category_id: Optional[str] = None
    top_n: Optional[int] = None
    as_of: Optional[date] = None


# ----------------------------------------------------------------------
# Pure aggregation helpers
# ----------------------------------------------------------------------


def split_totals(transactions: Iterable[Transaction]) -> tuple[Decimal, Decimal]:
    """(income, expenses) of a set of transactions; transfers move money but are neither."""
    income = ZERO
    expenses = ZERO
    for txn in transactions:
        if txn.txn_type == TransactionType.INCOME:
            income += txn.amount
        elif txn.txn_type == TransactionType.EXPENSE:
            expenses += txn.amount
    return income, expenses


def compare_periods(
    current: tuple[Decimal, Decimal],
    previous: tuple[Decimal, Decimal],
) -> PeriodComparison:
    cur_income, cur_expenses = current
    prev_income, prev_expenses = previous
    return PeriodComparison(
        income_change=percent_change(cur_income, prev_income),
        expenses_change=percent_change(cur_expenses, prev_expenses),
        savings_change=percent_change(cur_income - cur_expenses, prev_income - prev_expenses),
    )


def group_expenses(
    transactions: Iterable[Transaction],
    categories: dict[str, Category],
) -> tuple[Decimal, list[CategoryAmount]]:
    """
    Group EXPENSE transactions by category, largest first.

    Returns the grand total and one entry per category with its share of it.
    """
    amounts: dict[Optional[str], Decimal] = {}
    for txn in transactions:
        if txn.txn_type != TransactionType.EXPENSE:
            continue
        amounts[txn.category_id] = amounts.get(txn.category_id, ZERO) + txn.amount

    total = sum_money(amounts.values())
    items = []
    for category_id, amount in amounts.items():
        category = categories.get(category_id) if category_id else None
        items.append(
            CategoryAmount(
                name=category.name if category else UNCATEGORIZED,
                amount=quantize_money(amount),
                percentage=percentage(amount, total),
                category_id=category_id,
                color=category.color if category else None,
            )
        )
    items.sort(key=lambda item: (-item.amount, item.name))
    return total, items


def collapse_tail(items: list[CategoryAmount], top_n: int) -> list[CategoryAmount]:
    """Keep the first top_n entries and fold the rest into a single Other entry."""
    if top_n < 1:
        raise ValidationError("top_n must be at least 1")
    if len(items) <= top_n:
        return list(items)
    head, tail = items[:top_n], items[top_n:]
    other = CategoryAmount(
        name=OTHER,
        amount=sum_money(item.amount for item in tail),
        percentage=sum_money(item.percentage for item in tail),
    )
    return head + [other]


def fill_buckets(buckets: list[PeriodBucket], transactions: Iterable[Transaction]) -> list[PeriodBucket]:
    """Add each transaction's amount to the bucket whose range contains its date."""
    for txn in transactions:
        if txn.txn_type == TransactionType.TRANSFER:
            continue
        for bucket in buckets:
            if bucket.start <= txn.txn_date <= bucket.end:
                if txn.txn_type == TransactionType.INCOME:
                    bucket.income += txn.amount
                else:
                    bucket.expenses += txn.amount
                break
    return buckets


def daily_buckets(window: DateWindow) -> list[PeriodBucket]:
    return [PeriodBucket(label=day.isoformat(), start=day, end=day) for day in window.iter_days()]


def week_of_month_buckets(window: DateWindow) -> list[PeriodBucket]:
    """'Week N' buckets where day d of the month falls into week ceil(d / 7)."""
    buckets = []
    first = window.start
    week = 1
    while True:
        start = first + timedelta(days=7 * (week - 1))
        if start > window.end:
            break
        end = min(start + timedelta(days=6), window.end)
        buckets.append(PeriodBucket(label=f"Week {week}", start=start, end=end))
        week += 1
    return buckets


def month_buckets(first_month: date, count: int, with_year: bool = False) -> list[PeriodBucket]:
    buckets = []
    for offset in range(count):
        start = add_months(start_of_month(first_month), offset)
        buckets.append(
            PeriodBucket(
                label=month_label(start, with_year),
                start=start,
                end=end_of_month(start),
            )
        )
    return buckets


def balances_as_of(
    accounts: list[Account],
    later_transactions: list[Transaction],
    days: list[date],
) -> list[Decimal]:
    """
    Total balance of accounts at the end of each day.

    The running balance is rolled back by the effect of every transaction
    dated after the day; later_transactions must cover all of those.
    """
    account_ids = {account.account_id for account in accounts}
    current = sum_money(account.balance for account in accounts)
    totals = []
    for day in days:
        later_delta = ZERO
        for txn in later_transactions:
            if txn.txn_date <= day:
                continue
            for effect in txn.effects():
                if effect.account_id in account_ids:
                    later_delta += effect.delta
        totals.append(current - later_delta)
    return totals


def net_flow(account_id: str, transactions: Iterable[Transaction]) -> Decimal:
    flow = ZERO
    for txn in transactions:
        for effect in txn.effects():
            if effect.account_id == account_id:
                flow += effect.delta
    return flow


def growth_change(recent: Decimal, older: Decimal) -> Decimal:
    """Percentage change of net flow, measured against the magnitude of the older flow."""
    if older == ZERO:
        return (HUNDRED if recent > ZERO else ZERO).quantize(CENT)
    return quantize_money((recent - older) / abs(older) * HUNDRED)


def month_label(day: date, with_year: bool = False) -> str:
    # calendar names keep labels independent of the process locale
    if with_year:
        return f"{calendar.month_abbr[day.month]} {day.year}"
    return calendar.month_abbr[day.month]


# ----------------------------------------------------------------------
# Service
# ----------------------------------------------------------------------


class ReportService:
    """
    Builds reports from raw transactions and current balances.

    Each report is computed inside one read-only unit of work, so all of
    its figures come from the same snapshot. Nothing is cached or written.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow_factory = uow_factory

    def get_report(
        self,
        owner_id: str,
        report_type: ReportType,
        query: Optional[ReportQuery] = None,
    ) -> Report:
        """Dispatch on report type; missing window parameters default to the current period."""
        query = query or ReportQuery()
        report_type = ReportType(report_type)
        today = query.as_of or today_local()

        if report_type == ReportType.WEEKLY:
            return self.weekly_report(owner_id, query.start, query.end, as_of=today)
        if report_type == ReportType.MONTHLY:
            if (query.year is None) != (query.month is None):
                raise ValidationError("Monthly reports need both year and month")
            return self.monthly_report(
                owner_id,
                query.year if query.year is not None else today.year,
                query.month if query.month is not None else today.month,
            )
        if report_type == ReportType.ANNUAL:
            return self.annual_report(owner_id, query.year if query.year is not None else today.year)
        if report_type == ReportType.NET_WORTH:
            return self.net_worth_report(owner_id, as_of=today)
        if report_type == ReportType.CATEGORY_BREAKDOWN:
            return self.category_breakdown(owner_id, query.start, query.end, top_n=query.top_n)
        if report_type == ReportType.CATEGORY:
            if not query.category_id:
                raise ValidationError("Category reports need a category_id")
            if query.start is None or query.end is None:
                raise ValidationError("Category reports need both start and end dates")
            return self.category_report(owner_id, query.category_id, query.start, query.end)
        raise ValidationError(f"Unsupported report type: {report_type}")

    # -- weekly / monthly ------------------------------------------------

    def weekly_report(
        self,
        owner_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
        as_of: Optional[date] = None,
    ) -> PeriodReport:
        """
        Report over a window (default: the current week).

        Daily buckets cover every day of the window; the comparison is with
        the immediately preceding window of the same length.
        """
        if (start is None) != (end is None):
            raise ValidationError("Weekly reports need both start and end dates")
        if start is None:
            window = week_window(as_of or today_local(), get_settings().week_start)
        else:
            window = DateWindow(start, end)
        return run_read(
            self._uow_factory,
            lambda uow: self._period_report(
                uow, owner_id, window, window.previous(), daily_buckets(window)
            ),
        )

    def monthly_report(self, owner_id: str, year: int, month: int) -> PeriodReport:
        """Calendar-month report with 'Week N' buckets, compared with the previous month."""
        window = month_window(year, month)
        previous_first = add_months(window.start, -1)
        previous = month_window(previous_first.year, previous_first.month)
        return run_read(
            self._uow_factory,
            lambda uow: self._period_report(
                uow, owner_id, window, previous, week_of_month_buckets(window)
            ),
        )

    def _period_report(
        self,
        uow: UnitOfWork,
        owner_id: str,
        window: DateWindow,
        previous: DateWindow,
        buckets: list[PeriodBucket],
    ) -> PeriodReport:
        transactions = self._transactions(uow, owner_id, window.start, window.end)
        previous_transactions = self._transactions(uow, owner_id, previous.start, previous.end)
        categories = self._categories(uow, owner_id)

        income, expenses = split_totals(transactions)
        _, grouped = group_expenses(transactions, categories)
        limit = get_settings().top_categories_limit

        return PeriodReport(
            start=window.start,
            end=window.end,
            total_income=quantize_money(income),
            total_expenses=quantize_money(expenses),
            savings=quantize_money(income - expenses),
            transactions_count=len(transactions),
            top_categories=grouped[:limit],
            buckets=fill_buckets(buckets, transactions),
            comparison=compare_periods((income, expenses), split_totals(previous_transactions)),
        )

    # -- annual ------------------------------------------------------------

    def annual_report(self, owner_id: str, year: int) -> AnnualReport:
        """Calendar-year totals, monthly buckets and month-end net worth."""
        window = year_window(year)

        def work(uow: UnitOfWork) -> AnnualReport:
            transactions = self._transactions(uow, owner_id, window.start, window.end)
            categories = self._categories(uow, owner_id)
            accounts = uow.accounts.list_by_owner(owner_id, active_only=True)
            month_ends = [end_of_month(date(year, month, 1)) for month in range(1, 13)]
            later = self._transactions(uow, owner_id, month_ends[0] + timedelta(days=1), None)

            income, expenses = split_totals(transactions)
            _, grouped = group_expenses(transactions, categories)
            balances = balances_as_of(accounts, later, month_ends)

            return AnnualReport(
                year=year,
                total_income=quantize_money(income),
                total_expenses=quantize_money(expenses),
                savings=quantize_money(income - expenses),
                transactions_count=len(transactions),
                monthly=fill_buckets(month_buckets(window.start, 12), transactions),
                top_expense_category=grouped[0] if grouped else None,
                net_worth_evolution=[
                    BalancePoint(label=month_label(day), as_of=day, balance=quantize_money(balance))
                    for day, balance in zip(month_ends, balances)
                ],
                average_monthly_income=quantize_money(income / 12),
                average_monthly_expenses=quantize_money(expenses / 12),
            )

        return run_read(self._uow_factory, work)

    # -- net worth -----------------------------------------------------------

    def net_worth_report(self, owner_id: str, as_of: Optional[date] = None) -> NetWorthReport:
        """
        Current net worth across active accounts.

        Includes the distribution of positive balances, a trailing 12-month
        month-end series and each account's net-flow growth over the last
        3 months against the 3 before.
        """
        today = as_of or today_local()

        def work(uow: UnitOfWork) -> NetWorthReport:
            accounts = uow.accounts.list_by_owner(owner_id, active_only=True)
            current = sum_money(account.balance for account in accounts)

            month_ends = trailing_month_ends(today, NET_WORTH_MONTHS)
            growth_start = add_months(today, -2 * GROWTH_MONTHS)
            history_start = min(month_ends[0] + timedelta(days=1), growth_start)
            later = self._transactions(uow, owner_id, history_start, None)
            balances = balances_as_of(accounts, later, month_ends)

            positive = sorted(
                (account for account in accounts if account.balance > ZERO),
                key=lambda account: (-account.balance, account.name),
            )
            shares = [
                AccountShare(
                    account_id=account.account_id,
                    name=account.name,
                    account_type=account.account_type.value,
                    balance=quantize_money(account.balance),
                    percentage=percentage(account.balance, current) if current > ZERO else ZERO.quantize(CENT),
                )
                for account in positive
            ]

            recent_start = add_months(today, -GROWTH_MONTHS)
            recent = [txn for txn in later if txn.txn_date >= recent_start]
            older = [txn for txn in later if growth_start <= txn.txn_date < recent_start]
            growth = [
                AccountGrowth(
                    account_id=account.account_id,
                    name=account.name,
                    growth=growth_change(
                        net_flow(account.account_id, recent),
                        net_flow(account.account_id, older),
                    ),
                )
                for account in accounts
            ]

            return NetWorthReport(
                as_of=today,
                current_balance=quantize_money(current),
                accounts=shares,
                evolution=[
                    BalancePoint(label=month_label(day, with_year=True), as_of=day, balance=quantize_money(balance))
                    for day, balance in zip(month_ends, balances)
                ],
                accounts_growth=growth,
            )

        return run_read(self._uow_factory, work)

    # -- categories ------------------------------------------------------------

    def category_breakdown(
        self,
        owner_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
        top_n: Optional[int] = None,
    ) -> CategoryBreakdown:
        """
        EXPENSE totals per category, all-time unless a window is given.

        With top_n, categories past the first top_n are folded into "Other".
        """
        if start is not None and end is not None and end < start:
            raise ValidationError("Breakdown end date cannot be before its start date")

        def work(uow: UnitOfWork) -> CategoryBreakdown:
            return self._breakdown(uow, owner_id, start, end, top_n)

        return run_read(self._uow_factory, work)

    def _breakdown(
        self,
        uow: UnitOfWork,
        owner_id: str,
        start: Optional[date],
        end: Optional[date],
        top_n: Optional[int],
    ) -> CategoryBreakdown:
        transactions = self._transactions(uow, owner_id, start, end, txn_types=[TransactionType.EXPENSE])
        total, items = group_expenses(transactions, self._categories(uow, owner_id))
        if top_n is not None:
            items = collapse_tail(items, top_n)
        return CategoryBreakdown(start=start, end=end, total=quantize_money(total), items=items)

    def category_report(
        self,
        owner_id: str,
        category_id: str,
        start: date,
        end: date,
    ) -> CategoryReport:
        """Totals, monthly series and the transactions of one category within a window."""
        window = DateWindow(start, end)

        def work(uow: UnitOfWork) -> CategoryReport:
            category = uow.categories.get(owner_id, category_id)
            if category is None:
                raise NotFoundError("Category", category_id)
            transactions = uow.transactions.query(
                owner_id,
                TransactionFilter(
                    category_ids=[category_id],
                    start_date=window.start,
                    end_date=window.end,
                ),
                sort_by="date",
                descending=True,
            )
            account_names = {
                account.account_id: account.name
                for account in uow.accounts.list_by_owner(owner_id)
            }

            total = sum_money(txn.amount for txn in transactions)
            count = len(transactions)
            months = (window.end.year - window.start.year) * 12 + window.end.month - window.start.month + 1

            return CategoryReport(
                category_id=category.category_id,
                category_name=category.name,
                color=category.color,
                start=window.start,
                end=window.end,
                total_amount=quantize_money(total),
                transactions_count=count,
                average_transaction=quantize_money(total / count) if count else ZERO.quantize(CENT),
                monthly=fill_buckets(month_buckets(window.start, months, with_year=True), transactions),
                transactions=[
                    CategoryTransactionLine(
                        txn_id=txn.txn_id,
                        description=txn.description,
                        amount=txn.amount,
                        txn_date=txn.txn_date,
                        account_name=account_names.get(txn.account_id, ""),
                    )
                    for txn in transactions
                ],
            )

        return run_read(self._uow_factory, work)

    # -- dashboard ---------------------------------------------------------------

    def dashboard_summary(self, owner_id: str, as_of: Optional[date] = None) -> DashboardSummary:
        """Current-month figures, expense breakdown and a 6-month income/expenses series."""
        today = as_of or today_local()
        month = month_window(today.year, today.month)
        previous_first = add_months(month.start, -1)
        previous = month_window(previous_first.year, previous_first.month)
        series_start = add_months(month.start, -(DASHBOARD_MONTHS - 1))

        def work(uow: UnitOfWork) -> DashboardSummary:
            accounts = uow.accounts.list_by_owner(owner_id, active_only=True)
            recent = self._transactions(uow, owner_id, series_start, month.end)
            current = [txn for txn in recent if month.contains(txn.txn_date)]
            before = [txn for txn in recent if previous.contains(txn.txn_date)]
            income, expenses = split_totals(current)

            return DashboardSummary(
                as_of=today,
                total_balance=quantize_money(sum_money(account.balance for account in accounts)),
                month_income=quantize_money(income),
                month_expenses=quantize_money(expenses),
                month_savings=quantize_money(income - expenses),
                comparison=compare_periods((income, expenses), split_totals(before)),
                expenses_by_category=self._breakdown(
                    uow, owner_id, month.start, month.end, get_settings().top_categories_limit
                ),
                income_vs_expenses=fill_buckets(month_buckets(series_start, DASHBOARD_MONTHS), recent),
            )

        return run_read(self._uow_factory, work)

    # -- reads -------------------------------------------------------------------

    @staticmethod
    def _transactions(
        uow: UnitOfWork,
        owner_id: str,
        start: Optional[date],
        end: Optional[date],
        txn_types: Optional[list[TransactionType]] = None,
    ) -> list[Transaction]:
        return uow.transactions.query(
            owner_id,
            TransactionFilter(txn_types=txn_types, start_date=start, end_date=end),
            sort_by="date",
            descending=False,
        )

    @staticmethod
    def _categories(uow: UnitOfWork, owner_id: str) -> dict[str, Category]:
        return {category.category_id: category for category in uow.categories.list_by_owner(owner_id)}
