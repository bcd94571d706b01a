"""
Statistics endpoints for API v1.

``/dashboard`` returns totals over all records (any status) and the
same figures for the current calendar month and year.
"""

from fastapi import APIRouter, Depends

from ...deps import get_service_records
from ....schemas.statistics import DashboardStats
from ....services.service_record_service import ServiceRecordService
from ....services.statistics_service import StatisticsService


router = APIRouter()


@router.get("/dashboard", response_model=DashboardStats)
async def dashboard_statistics(service: ServiceRecordService = Depends(get_service_records)) -> DashboardStats:
    return StatisticsService.compute_stats(service.list_services())
