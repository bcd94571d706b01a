"""
Service layer for dashboard statistics.

The dashboard shows totals over every service record regardless of
status, together with the same figures restricted to the current
calendar month and year.  Records reach this module already migrated,
so legacy names such as ``feeCollected`` and ``date`` have been folded
into ``cost`` and ``created_at``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..schemas.service import ServiceRecord, ServiceStatus
from ..schemas.statistics import DashboardStats, PeriodStats, StatusCounts
from ..utils.formatting import parse_timestamp


def effective_date(record: ServiceRecord) -> Optional[datetime]:
    """The record's creation timestamp, or ``None`` if it cannot be read."""
    return parse_timestamp(record.created_at)


def period_stats(records: Iterable[ServiceRecord]) -> PeriodStats:
    revenue = 0.0
    expenses = 0.0
    for record in records:
        revenue += record.cost
        expenses += record.expenses
    return PeriodStats(revenue=revenue, expenses=expenses, profit=revenue - expenses)


class StatisticsService:
    """Aggregated figures for the dashboard."""

    @classmethod
    def compute_stats(cls, records: Sequence[ServiceRecord], now: Optional[datetime] = None) -> DashboardStats:
        """Return totals plus current month and year figures.

        ``now`` selects the month and year; it defaults to the current
        local time.  Records with an unreadable date only count
        towards the totals.
        """
        now = now or datetime.now()
        monthly = []
        yearly = []
        for record in records:
            created = effective_date(record)
            if created is None or created.year != now.year:
                continue
            yearly.append(record)
            if created.month == now.month:
                monthly.append(record)

        totals = period_stats(records)
        return DashboardStats(
            total_services=len(records),
            total_revenue=totals.revenue,
            total_expenses=totals.expenses,
            profit=totals.profit,
            monthly_stats=period_stats(monthly),
            yearly_stats=period_stats(yearly),
            status_counts=cls.status_counts(records),
        )

    @staticmethod
    def status_counts(records: Iterable[ServiceRecord]) -> StatusCounts:
        counts = {status.value: 0 for status in ServiceStatus}
        for record in records:
            counts[ServiceStatus(record.status).value] += 1
        return StatusCounts(**counts)
