# app/dashboard/aggregation.py
"""
Dashboard aggregates computed over the full ticket list.

Every function here is pure: it takes the list as fetched (ORM rows or
``TicketOut`` models, anything with the ticket attributes) and recomputes
its result from scratch.  Nothing is cached between calls.
"""
import math
from collections import Counter
from datetime import timedelta
from typing import Iterable, Sequence

from app.dashboard.schemas import (
    CostCategory,
    DashboardSnapshot,
    MonthlyCount,
    ServiceDuration,
    SummaryStats,
)
from app.ticket.schemas import TicketOut

# (attribute, display name), in display order
COST_CATEGORIES = (
    ("costo_repuestos", "Repuestos"),
    ("costo_mano_obra", "Mano de Obra"),
    ("costos_externos_estimados", "Costos Externos"),
)

MAX_SERVICE_DURATIONS = 10
RECENT_TICKETS = 5

_ONE_DAY = timedelta(days=1).total_seconds()


def _cost(ticket, attr: str) -> float:
    return getattr(ticket, attr, None) or 0.0


def is_completed(ticket) -> bool:
    return getattr(ticket, "fecha_fin_servicio", None) is not None


def total_cost(ticket) -> float:
    return sum(_cost(ticket, attr) for attr, _ in COST_CATEGORIES)


def service_days(ticket) -> int:
    """Whole days from service start to end, rounded up and never negative."""
    delta = ticket.fecha_fin_servicio - ticket.fecha_inicio_servicio
    return max(math.ceil(delta.total_seconds() / _ONE_DAY), 0)


def tickets_by_month(tickets: Iterable) -> list[MonthlyCount]:
    counts = Counter(
        f"{t.fecha_entrada.year}-{t.fecha_entrada.month:02d}" for t in tickets
    )
    return [MonthlyCount(mes=month, tickets=n) for month, n in sorted(counts.items())]


def cost_breakdown(tickets: Sequence) -> list[CostCategory]:
    categories = []
    for attr, name in COST_CATEGORIES:
        value = sum(_cost(t, attr) for t in tickets)
        if value > 0:
            categories.append(CostCategory(name=name, value=value))
    return categories


def service_durations(tickets: Iterable, limit: int = MAX_SERVICE_DURATIONS) -> list[ServiceDuration]:
    # list order is kept; this is not a ranking by duration
    completed = [t for t in tickets if is_completed(t)]
    return [
        ServiceDuration(ticket=t.numero_ticket, duracion=service_days(t))
        for t in completed[:limit]
    ]


def summary(tickets: Sequence) -> SummaryStats:
    total = len(tickets)
    completed = sum(1 for t in tickets if is_completed(t))
    return SummaryStats(
        total_tickets=total,
        completed_tickets=completed,
        pending_tickets=total - completed,
        total_costs=sum(total_cost(t) for t in tickets),
    )


def build_dashboard(tickets: Sequence, recent: int = RECENT_TICKETS) -> DashboardSnapshot:
    tickets = list(tickets)
    return DashboardSnapshot(
        summary=summary(tickets),
        tickets_por_mes=tickets_by_month(tickets),
        distribucion_costos=cost_breakdown(tickets),
        duracion_servicios=service_durations(tickets),
        tickets_recientes=[TicketOut.model_validate(t) for t in tickets[:recent]],
    )
