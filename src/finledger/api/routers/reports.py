"""Report endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from finledger.api.deps import get_owner_id, get_report_service
from finledger.api.schemas import (
    AnnualReportResponse,
    CategoryBreakdownResponse,
    CategoryReportResponse,
    DashboardSummaryResponse,
    NetWorthReportResponse,
    PeriodReportResponse,
    ReportResponse,
)
from finledger.domain.models import ReportType
from finledger.services import ReportQuery, ReportService

router = APIRouter(prefix="/reports", tags=["reports"])

_RESPONSE_MODELS = {
    ReportType.WEEKLY: PeriodReportResponse,
    ReportType.MONTHLY: PeriodReportResponse,
    ReportType.ANNUAL: AnnualReportResponse,
    ReportType.NET_WORTH: NetWorthReportResponse,
    ReportType.CATEGORY_BREAKDOWN: CategoryBreakdownResponse,
    ReportType.CATEGORY: CategoryReportResponse,
}


@router.get("", response_model=ReportResponse)
def get_report(
    report_type: ReportType = Query(..., alias="type"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    year: Optional[int] = Query(None, ge=1900, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    category_id: Optional[str] = Query(None),
    top_n: Optional[int] = Query(None, ge=1, le=50),
    owner_id: str = Depends(get_owner_id),
    reports: ReportService = Depends(get_report_service),
):
    """
    Build a report.

    weekly: start_date/end_date (default current week); monthly: year/month
    (default current month); annual: year; networth; breakdown: optional
    window and top_n; category: category_id, start_date and end_date.
    """
    query = ReportQuery(
        start=start_date,
        end=end_date,
        year=year,
        month=month,
        category_id=category_id,
        top_n=top_n,
    )
    report = reports.get_report(owner_id, report_type, query)
    return _RESPONSE_MODELS[report_type].model_validate(report)


@router.get("/dashboard", response_model=DashboardSummaryResponse)
def dashboard(
    owner_id: str = Depends(get_owner_id),
    reports: ReportService = Depends(get_report_service),
) -> DashboardSummaryResponse:
    """Landing dashboard figures for the current month."""
    return DashboardSummaryResponse.model_validate(reports.dashboard_summary(owner_id))
