"""
Financial report endpoints for API v1.

The monthly report lists completed jobs of one month with their net
profit, profit share and remaining amount, along with monthly and
yearly totals.  Rows may be narrowed with ``search`` and
``date_filter`` and sorted by any column.
"""

from datetime import datetime
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from ...deps import get_report_service, get_service_records
from ....schemas.service import ServiceRecord
from ....schemas.statistics import FinancialReport
from ....services.report_service import ReportService
from ....services.service_record_service import ServiceRecordService


router = APIRouter()

SortKey = Literal["date", "address", "phone", "revenue", "expenses", "profit", "remaining"]
Direction = Literal["asc", "desc"]


class ReportReorderRequest(BaseModel):
    from_index: int = Field(..., ge=0, alias="fromIndex")
    to_index: int = Field(..., ge=0, alias="toIndex")
    month: int = Field(..., ge=1, le=12)
    year: int
    search: Optional[str] = None
    date_filter: Optional[str] = Field(None, alias="dateFilter")
    sort_key: Optional[SortKey] = Field(None, alias="sortKey")
    direction: Direction = "asc"

    model_config = {"populate_by_name": True}


@router.get("/monthly", response_model=FinancialReport)
async def monthly_report(
    month: Optional[int] = Query(None, ge=1, le=12, description="Defaults to the current month"),
    year: Optional[int] = Query(None, description="Defaults to the current year"),
    search: Optional[str] = Query(None, description="Phone, address or date fragment"),
    date_filter: Optional[str] = Query(None, description="Date fragment, e.g. 2024, 03 or 15.03.2024"),
    sort_key: Optional[SortKey] = Query(None),
    direction: Direction = Query("asc"),
    records: ServiceRecordService = Depends(get_service_records),
    report: ReportService = Depends(get_report_service),
) -> FinancialReport:
    now = datetime.now()
    try:
        return report.build_report(
            records.list_services(),
            month or now.month,
            year or now.year,
            search=search,
            date_filter=date_filter,
            sort_key=sort_key,
            direction=direction,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))


@router.post("/reorder", response_model=List[ServiceRecord])
async def reorder_report(
    data: ReportReorderRequest,
    records: ServiceRecordService = Depends(get_service_records),
    report: ReportService = Depends(get_report_service),
) -> List[ServiceRecord]:
    """Move one row of the monthly report; the new order is saved for all lists."""
    return records.reorder_report(
        data.from_index,
        data.to_index,
        data.month,
        data.year,
        search=data.search,
        date_filter=data.date_filter,
        sort_key=data.sort_key,
        direction=data.direction,
        report=report,
    )
