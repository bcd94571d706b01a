"""
Pydantic models for derived financial figures.

None of these are persisted; they are recomputed from the record set
on every request.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .service import ServiceRecord


class PeriodStats(BaseModel):
    revenue: float = 0
    expenses: float = 0
    profit: float = 0


class StatusCounts(BaseModel):
    ongoing: int = 0
    workshop: int = 0
    completed: int = 0


class DashboardStats(BaseModel):
    """Totals over every record plus current month and year figures."""

    total_services: int = Field(0, alias="totalServices")
    total_revenue: float = Field(0, alias="totalRevenue")
    total_expenses: float = Field(0, alias="totalExpenses")
    profit: float = 0
    monthly_stats: PeriodStats = Field(default_factory=PeriodStats, alias="monthlyStats")
    yearly_stats: PeriodStats = Field(default_factory=PeriodStats, alias="yearlyStats")
    status_counts: StatusCounts = Field(default_factory=StatusCounts, alias="statusCounts")

    model_config = {"populate_by_name": True}


class ReportRow(BaseModel):
    """One completed record with its derived money figures."""

    record: ServiceRecord
    revenue: float
    expenses: float
    net_profit: float = Field(..., alias="netProfit")
    profit_share: float = Field(..., alias="profitShare")
    remaining: float

    model_config = {"populate_by_name": True}


class ReportSummary(BaseModel):
    """Aggregate figures over a set of completed records."""

    count: int = 0
    revenue: float = 0
    expenses: float = 0
    net_profit: float = Field(0, alias="netProfit")
    profit_share: float = Field(0, alias="profitShare")
    remaining: float = 0

    model_config = {"populate_by_name": True}


class FinancialReport(BaseModel):
    month: int
    year: int
    month_name: str = Field(..., alias="monthName")
    profit_share_rate: float = Field(..., alias="profitShareRate")
    sort_key: Optional[str] = Field(None, alias="sortKey")
    direction: str = "asc"
    rows: List[ReportRow]
    monthly: ReportSummary
    yearly: ReportSummary

    model_config = {"populate_by_name": True}
