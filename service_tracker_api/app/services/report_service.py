"""
Service layer for the monthly and yearly financial report.

Only completed jobs are reported.  For each job the report derives

* revenue: the amount collected (``cost``)
* net profit: revenue minus expenses
* profit share: ``net profit * rate``, the partner's cut
* remaining: net profit minus the profit share

The same rate is used for rows, for sorting by remaining amount and for
the aggregate figures.  It defaults to ``settings.profit_share_rate``.

The monthly list can be narrowed with a free-text search and a date
filter and sorted by any column.  Monthly totals follow the narrowed
list; yearly totals always cover every completed job of the year.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from ..core.config import settings
from ..schemas.service import ServiceRecord, ServiceStatus
from ..schemas.statistics import FinancialReport, ReportRow, ReportSummary
from ..utils.formatting import MONTH_NAMES, date_search_forms, turkish_lower, turkish_sort_key
from .statistics_service import effective_date


logger = logging.getLogger(__name__)


SORT_KEYS = ("date", "address", "phone", "revenue", "expenses", "profit", "remaining")
SORT_DIRECTIONS = ("asc", "desc")


@dataclass(frozen=True)
class SortState:
    """Current sort column and direction of the report table.

    ``key`` of ``None`` means rows keep their filtered order.
    """

    key: Optional[str] = None
    direction: str = "asc"

    def toggle(self, key: str) -> "SortState":
        """Select ``key``; selecting the active ascending key flips to descending."""
        if key not in SORT_KEYS:
            raise ValueError(f"Unknown sort key '{key}'. Valid keys: {', '.join(SORT_KEYS)}")
        if self.key == key and self.direction == "asc":
            return SortState(key, "desc")
        return SortState(key, "asc")


def matches_date(record: ServiceRecord, term: str) -> bool:
    return any(term in form for form in date_search_forms(effective_date(record)))


def matches_search(record: ServiceRecord, term: str) -> bool:
    """Phone substring, case-insensitive address substring or date match."""
    if term in record.customer_phone:
        return True
    if turkish_lower(term) in turkish_lower(record.address):
        return True
    return matches_date(record, term)


def matches_filters(record: ServiceRecord, search: Optional[str] = None, date_filter: Optional[str] = None) -> bool:
    """Both filters are optional; when both are given both must match."""
    if search and not matches_search(record, search):
        return False
    if date_filter and not matches_date(record, date_filter):
        return False
    return True


class ReportService:
    """Financial report over completed service records."""

    def __init__(self, profit_share_rate: Optional[float] = None) -> None:
        self.profit_share_rate = settings.profit_share_rate if profit_share_rate is None else profit_share_rate

    @staticmethod
    def filter_period(records: Sequence[ServiceRecord], month: int, year: int) -> List[ServiceRecord]:
        """Completed records created in ``month``/``year``."""
        selected = []
        for record in records:
            created = effective_date(record)
            if (
                record.status == ServiceStatus.COMPLETED
                and created is not None
                and created.month == month
                and created.year == year
            ):
                selected.append(record)
        return selected

    @staticmethod
    def filter_year(records: Sequence[ServiceRecord], year: int) -> List[ServiceRecord]:
        selected = []
        for record in records:
            created = effective_date(record)
            if record.status == ServiceStatus.COMPLETED and created is not None and created.year == year:
                selected.append(record)
        return selected

    def net_profit(self, record: ServiceRecord) -> float:
        return record.cost - record.expenses

    def remaining(self, record: ServiceRecord) -> float:
        net = self.net_profit(record)
        return net - net * self.profit_share_rate

    def build_row(self, record: ServiceRecord) -> ReportRow:
        net = self.net_profit(record)
        share = net * self.profit_share_rate
        return ReportRow(
            record=record,
            revenue=record.cost,
            expenses=record.expenses,
            net_profit=net,
            profit_share=share,
            remaining=net - share,
        )

    def summarize(self, records: Sequence[ServiceRecord]) -> ReportSummary:
        revenue = sum(record.cost for record in records)
        expenses = sum(record.expenses for record in records)
        net = revenue - expenses
        share = net * self.profit_share_rate
        return ReportSummary(
            count=len(records),
            revenue=revenue,
            expenses=expenses,
            net_profit=net,
            profit_share=share,
            remaining=net - share,
        )

    def _sort_value(self, key: str) -> Callable[[ServiceRecord], object]:
        def date_value(record: ServiceRecord) -> float:
            created = effective_date(record)
            return created.timestamp() if created is not None else 0.0

        values: Dict[str, Callable[[ServiceRecord], object]] = {
            "date": date_value,
            "address": lambda record: turkish_sort_key(record.address),
            "phone": lambda record: turkish_sort_key(record.customer_phone),
            "revenue": lambda record: record.cost,
            "expenses": lambda record: record.expenses,
            "profit": self.net_profit,
            "remaining": self.remaining,
        }
        return values[key]

    def sort_records(
        self,
        records: Sequence[ServiceRecord],
        key: Optional[str] = None,
        direction: str = "asc",
    ) -> List[ServiceRecord]:
        """Sort by one of ``SORT_KEYS``; ``key=None`` keeps the given order."""
        if key is None:
            return list(records)
        if key not in SORT_KEYS:
            raise ValueError(f"Unknown sort key '{key}'. Valid keys: {', '.join(SORT_KEYS)}")
        if direction not in SORT_DIRECTIONS:
            raise ValueError(f"Unknown sort direction '{direction}'")
        return sorted(records, key=self._sort_value(key), reverse=direction == "desc")

    def visible_records(
        self,
        records: Sequence[ServiceRecord],
        month: int,
        year: int,
        search: Optional[str] = None,
        date_filter: Optional[str] = None,
        sort_key: Optional[str] = None,
        direction: str = "asc",
    ) -> List[ServiceRecord]:
        """The monthly list exactly as the report table shows it."""
        selected = [
            record
            for record in self.filter_period(records, month, year)
            if matches_filters(record, search, date_filter)
        ]
        return self.sort_records(selected, sort_key, direction)

    def build_report(
        self,
        records: Sequence[ServiceRecord],
        month: int,
        year: int,
        search: Optional[str] = None,
        date_filter: Optional[str] = None,
        sort_key: Optional[str] = None,
        direction: str = "asc",
    ) -> FinancialReport:
        if not 1 <= month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {month}")
        monthly = self.visible_records(records, month, year, search, date_filter, sort_key, direction)
        yearly = self.filter_year(records, year)
        logger.debug("Report %02d/%d: %d monthly rows, %d yearly records", month, year, len(monthly), len(yearly))
        return FinancialReport(
            month=month,
            year=year,
            month_name=MONTH_NAMES[month],
            profit_share_rate=self.profit_share_rate,
            sort_key=sort_key,
            direction=direction,
            rows=[self.build_row(record) for record in monthly],
            monthly=self.summarize(monthly),
            yearly=self.summarize(yearly),
        )
