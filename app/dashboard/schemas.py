# app/dashboard/schemas.py
from pydantic import BaseModel

from app.ticket.schemas import TicketOut


class MonthlyCount(BaseModel):
    mes: str
    tickets: int


class CostCategory(BaseModel):
    name: str
    value: float


class ServiceDuration(BaseModel):
    ticket: str
    duracion: int


class SummaryStats(BaseModel):
    total_tickets: int
    completed_tickets: int
    pending_tickets: int
    total_costs: float


class DashboardSnapshot(BaseModel):
    summary: SummaryStats
    tickets_por_mes: list[MonthlyCount]
    distribucion_costos: list[CostCategory]
    duracion_servicios: list[ServiceDuration]
    tickets_recientes: list[TicketOut]


class DashboardResponse(BaseModel):
    data: DashboardSnapshot
