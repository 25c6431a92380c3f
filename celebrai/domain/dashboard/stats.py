"""
Dashboard statistics

Aggregates a tenant's appointments into the KPI cards and chart series shown
on the admin dashboard.
"""

from collections import Counter
from datetime import date, datetime
from types import MappingProxyType
from typing import Iterable, Optional

from .schemas import CategoryCount, DashboardStats, MonthlyPoint

MONTH_ABBREVIATIONS = ("jan", "fev", "mar", "abr", "mai", "jun", "jul", "ago", "set", "out", "nov", "dez")

STATUS_LABELS = MappingProxyType(
    {
        "pending": "Pendente",
        "confirmed": "Confirmado",
        "completed": "Concluído",
        "cancelled": "Cancelado",
    }
)

UNSPECIFIED_EVENT_TYPE = "Não especificado"
MONTHS_IN_SERIES = 6
TOP_EVENT_TYPES = 6


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def _event_day(value) -> date:
    return value.date() if isinstance(value, datetime) else value


def compute_dashboard_stats(appointments: Iterable, today: Optional[date] = None) -> DashboardStats:
    """
    Build dashboard statistics from appointment rows.

    Rows need ``client_name``, ``event_date``, ``event_type``, ``status`` and
    ``estimated_value`` attributes. Missing values count as zero revenue, an
    unspecified event type and a pending status.
    """
    appointments = list(appointments)
    if not appointments:
        return DashboardStats()

    today = today or date.today()

    by_month = Counter()
    revenue_by_month = Counter()
    for apt in appointments:
        day = _event_day(apt.event_date)
        by_month[(day.year, day.month)] += 1
        revenue_by_month[(day.year, day.month)] += apt.estimated_value or 0

    monthly_data = []
    for offset in range(MONTHS_IN_SERIES - 1, -1, -1):
        key = _shift_month(today.year, today.month, -offset)
        monthly_data.append(
            MonthlyPoint(
                name=MONTH_ABBREVIATIONS[key[1] - 1],
                events=by_month[key],
                revenue=revenue_by_month[key],
            )
        )

    event_types = Counter(apt.event_type or UNSPECIFIED_EVENT_TYPE for apt in appointments)
    event_type_data = [
        CategoryCount(name=name, value=value)
        for name, value in sorted(event_types.items(), key=lambda entry: -entry[1])[:TOP_EVENT_TYPES]
    ]

    statuses = Counter(apt.status or "pending" for apt in appointments)
    status_data = [CategoryCount(name=status_label(status), value=value) for status, value in statuses.items()]

    return DashboardStats(
        totalAppointments=len(appointments),
        totalRevenue=sum(apt.estimated_value or 0 for apt in appointments),
        thisMonthAppointments=by_month[(today.year, today.month)],
        uniqueClients=len({apt.client_name.lower() for apt in appointments}),
        monthlyData=monthly_data,
        eventTypeData=event_type_data,
        statusData=status_data,
    )
