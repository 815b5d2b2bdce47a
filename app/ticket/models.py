# app/ticket/models.py
from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, Float, Integer, String, Text
from app.core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    numero_ticket = Column(String, unique=True, index=True, nullable=False)
    equipo = Column(String, index=True, nullable=False)
    fecha_entrada = Column(Date, nullable=False)
    fecha_inicio_servicio = Column(Date, nullable=False)
    fecha_fin_servicio = Column(Date, nullable=True)
    descripcion = Column(Text, nullable=False)
    costo_repuestos = Column(Float, nullable=False, default=0.0)
    costo_mano_obra = Column(Float, nullable=False, default=0.0)
    costos_externos_estimados = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f"<Ticket(numero_ticket='{self.numero_ticket}', equipo='{self.equipo}')>"
