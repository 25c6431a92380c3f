"""Dashboard schemas"""

from pydantic import BaseModel


class MonthlyPoint(BaseModel):
    name: str  # pt-BR month abbreviation
    events: int
    revenue: float


class CategoryCount(BaseModel):
    name: str
    value: int


class DashboardStats(BaseModel):
    totalAppointments: int = 0
    totalRevenue: float = 0
    thisMonthAppointments: int = 0
    uniqueClients: int = 0
    monthlyData: list[MonthlyPoint] = []
    eventTypeData: list[CategoryCount] = []
    statusData: list[CategoryCount] = []
