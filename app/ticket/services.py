# app/ticket/services.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateTicketNumberError
from app.ticket.models import Ticket
from app.ticket.schemas import TicketCreate, TicketUpdate

logger = logging.getLogger(__name__)


def _is_unique_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig or exc).lower()
    return "unique" in message or "duplicate" in message


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if _is_unique_violation(exc):
            logger.warning("Duplicate ticket number: %s", exc.orig)
            raise DuplicateTicketNumberError() from exc
        raise


def get_all_tickets(db: Session) -> list[Ticket]:
    return (
        db.query(Ticket)
        .order_by(Ticket.created_at.desc(), Ticket.id.desc())
        .all()
    )


def get_ticket(db: Session, ticket_id: int) -> Ticket | None:
    return db.query(Ticket).filter(Ticket.id == ticket_id).first()


def create_ticket(db: Session, payload: TicketCreate) -> Ticket:
    db_ticket = Ticket(**payload.model_dump())
    db.add(db_ticket)
    _commit(db)
    db.refresh(db_ticket)
    logger.info("Ticket %s created with id %s", db_ticket.numero_ticket, db_ticket.id)
    return db_ticket


def update_ticket(db: Session, ticket_id: int, payload: TicketUpdate) -> Ticket | None:
    db_ticket = get_ticket(db, ticket_id)
    if not db_ticket:
        return None
    for field, value in payload.changes().items():
        setattr(db_ticket, field, value)
    _commit(db)
    db.refresh(db_ticket)
    logger.info("Ticket %s updated", ticket_id)
    return db_ticket


def delete_ticket(db: Session, ticket_id: int) -> Ticket | None:
    db_ticket = get_ticket(db, ticket_id)
    if not db_ticket:
        return None
    db.delete(db_ticket)
    db.commit()
    logger.info("Ticket %s deleted", ticket_id)
    return db_ticket
