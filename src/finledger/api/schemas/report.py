"""Pydantic schemas for report endpoints (mirrors of the report view models)."""

from datetime import date
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel

_ORM = {"from_attributes": True}


class CategoryAmountResponse(BaseModel):
    model_config = _ORM

    name: str
    amount: Decimal
    percentage: Decimal
    category_id: Optional[str] = None
    color: Optional[str] = None


class PeriodBucketResponse(BaseModel):
    model_config = _ORM

    label: str
    start: date
    end: date
    income: Decimal
    expenses: Decimal
    savings: Decimal


class PeriodComparisonResponse(BaseModel):
    model_config = _ORM

    income_change: Decimal
    expenses_change: Decimal
    savings_change: Decimal


class PeriodReportResponse(BaseModel):
    """Weekly or monthly report."""

    model_config = _ORM

    start: date
    end: date
    total_income: Decimal
    total_expenses: Decimal
    savings: Decimal
    transactions_count: int
    top_categories: list[CategoryAmountResponse]
    buckets: list[PeriodBucketResponse]
    comparison: PeriodComparisonResponse


class BalancePointResponse(BaseModel):
    model_config = _ORM

    label: str
    as_of: date
    balance: Decimal


class AnnualReportResponse(BaseModel):
    model_config = _ORM

    year: int
    total_income: Decimal
    total_expenses: Decimal
    savings: Decimal
    transactions_count: int
    monthly: list[PeriodBucketResponse]
    top_expense_category: Optional[CategoryAmountResponse] = None
    net_worth_evolution: list[BalancePointResponse]
    average_monthly_income: Decimal
    average_monthly_expenses: Decimal


class AccountShareResponse(BaseModel):
    model_config = _ORM

    account_id: str
    name: str
    account_type: str
    balance: Decimal
    percentage: Decimal


class AccountGrowthResponse(BaseModel):
    model_config = _ORM

    account_id: str
    name: str
    growth: Decimal


class NetWorthReportResponse(BaseModel):
    model_config = _ORM

    as_of: date
    current_balance: Decimal
    accounts: list[AccountShareResponse]
    evolution: list[BalancePointResponse]
    accounts_growth: list[AccountGrowthResponse]


class CategoryBreakdownResponse(BaseModel):
    model_config = _ORM

    start: Optional[date] = None
    end: Optional[date] = None
    total: Decimal
    items: list[CategoryAmountResponse]


class CategoryTransactionLineResponse(BaseModel):
    model_config = _ORM

    txn_id: str
    description: str
    amount: Decimal
    txn_date: date
    account_name: str


class CategoryReportResponse(BaseModel):
    model_config = _ORM

    category_id: str
    category_name: str
    color: Optional[str] = None
    start: date
    end: date
    total_amount: Decimal
    transactions_count: int
    average_transaction: Decimal
    monthly: list[PeriodBucketResponse]
    transactions: list[CategoryTransactionLineResponse]


class DashboardSummaryResponse(BaseModel):
    model_config = _ORM

    as_of: date
    total_balance: Decimal
    month_income: Decimal
    month_expenses: Decimal
    month_savings: Decimal
    comparison: PeriodComparisonResponse
    expenses_by_category: CategoryBreakdownResponse
    income_vs_expenses: list[PeriodBucketResponse]


ReportResponse = Union[
    PeriodReportResponse,
    AnnualReportResponse,
    NetWorthReportResponse,
    CategoryBreakdownResponse,
    CategoryReportResponse,
]
