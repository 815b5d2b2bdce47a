# app/dashboard/routes.py
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.core.errors import StoreError
from app.dashboard.aggregation import build_dashboard
from app.dashboard.schemas import DashboardResponse
from app.ticket import services as ticket_service

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

logger = logging.getLogger(__name__)


@router.get("", response_model=DashboardResponse)
def dashboard(db: Session = Depends(get_db)):
    try:
        tickets = ticket_service.get_all_tickets(db)
    except SQLAlchemyError:
        logger.exception("Error al cargar los datos del dashboard")
        raise StoreError("Error al cargar los datos")
    return DashboardResponse(data=build_dashboard(tickets))
