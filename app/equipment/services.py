# app/equipment/services.py
from sqlalchemy.orm import Session
from app.ticket.models import Ticket


def list_equipment(db: Session) -> list[str]:
    rows = db.query(Ticket.equipo).distinct().all()
    return sorted({name for (name,) in rows if name and name.strip()})
