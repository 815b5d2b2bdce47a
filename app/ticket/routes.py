# app/ticket/routes.py
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.core.errors import InvalidTicketIdError, StoreError, TicketNotFoundError
from app.ticket.schemas import (
    ErrorResponse,
    MessageResponse,
    TicketCreate,
    TicketListResponse,
    TicketOut,
    TicketResponse,
    TicketUpdate,
)
from app.ticket import services as ticket_service

router = APIRouter(prefix="/tickets", tags=["Tickets"])

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


# ids are stored as signed 64-bit integers
MAX_TICKET_ID = 2**63 - 1


def parse_ticket_id(raw: str) -> int:
    try:
        tid = int(raw.strip())
    except ValueError:
        tid = None
    if tid is None or not -MAX_TICKET_ID - 1 <= tid <= MAX_TICKET_ID:
        logger.warning("Rejected ticket id %r", raw)
        raise InvalidTicketIdError()
    return tid


@router.get("", response_model=TicketListResponse, responses=ERROR_RESPONSES)
def list_all(db: Session = Depends(get_db)):
    try:
        items = ticket_service.get_all_tickets(db)
    except SQLAlchemyError:
        logger.exception("Error al obtener tickets")
        raise StoreError("Error al obtener tickets")
    return TicketListResponse(data=[TicketOut.model_validate(t) for t in items])


@router.post("", response_model=TicketResponse, status_code=201, responses=ERROR_RESPONSES)
def create(ticket: TicketCreate, db: Session = Depends(get_db)):
    try:
        created = ticket_service.create_ticket(db, ticket)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error al crear ticket")
        raise StoreError("Error al crear ticket")
    return TicketResponse(data=TicketOut.model_validate(created))


@router.put("/{ticket_id}", response_model=TicketResponse, responses=ERROR_RESPONSES)
def update(ticket_id: str, ticket: TicketUpdate, db: Session = Depends(get_db)):
    tid = parse_ticket_id(ticket_id)
    try:
        updated = ticket_service.update_ticket(db, tid, ticket)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error al actualizar el ticket %s", tid)
        raise StoreError("Error al actualizar el ticket")
    if not updated:
        raise TicketNotFoundError()
    return TicketResponse(data=TicketOut.model_validate(updated))


@router.delete("/{ticket_id}", response_model=MessageResponse, responses=ERROR_RESPONSES)
def delete(ticket_id: str, db: Session = Depends(get_db)):
    tid = parse_ticket_id(ticket_id)
    try:
        deleted = ticket_service.delete_ticket(db, tid)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error al eliminar el ticket %s", tid)
        raise StoreError("Error al eliminar el ticket")
    if not deleted:
        raise TicketNotFoundError()
    return MessageResponse(data="Ticket eliminado exitosamente")
