# app/ticket/schemas.py
import math
import re
from datetime import date, datetime

from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError

COST_FIELDS = ("costo_repuestos", "costo_mano_obra", "costos_externos_estimados")

# leading decimal number, as read from text like "12.5 USD"
_NUMBER_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_text(value):
    if _is_blank(value):
        raise PydanticCustomError("required_field", "Campo requerido")
    return value


def parse_date(value) -> date | None:
    """Accept a date, a datetime or ISO text; blank input means no date."""
    if _is_blank(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
    raise PydanticCustomError("invalid_date", "Fecha inválida")


def coerce_cost(value) -> float:
    """Numbers or numeric text become a float; anything unparseable is 0.

    Text is read up to the end of its leading number, so "12abc" is 12.
    """
    if _is_blank(value) or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        match = _NUMBER_PREFIX.match(value)
        if not match:
            return 0.0
        value = match.group()
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(amount):
        return 0.0
    if amount < 0:
        raise PydanticCustomError("negative_cost", "Costo inválido")
    return amount


class _TicketFieldValidators(BaseModel):
    """Coercion shared by the create payload and the patch payload."""

    @field_validator("numero_ticket", "equipo", "descripcion", mode="before", check_fields=False)
    @classmethod
    def _required_text(cls, v):
        return require_text(v)

    @field_validator("fecha_entrada", "fecha_inicio_servicio", mode="before", check_fields=False)
    @classmethod
    def _required_date(cls, v):
        parsed = parse_date(v)
        if parsed is None:
            raise PydanticCustomError("required_field", "Campo requerido")
        return parsed

    @field_validator("fecha_fin_servicio", mode="before", check_fields=False)
    @classmethod
    def _optional_date(cls, v):
        return parse_date(v)

    @field_validator(*COST_FIELDS, mode="before", check_fields=False)
    @classmethod
    def _cost(cls, v):
        return coerce_cost(v)


class TicketCreate(_TicketFieldValidators):
    numero_ticket: str
    equipo: str
    fecha_entrada: date
    fecha_inicio_servicio: date
    fecha_fin_servicio: date | None = None
    descripcion: str
    costo_repuestos: float = 0.0
    costo_mano_obra: float = 0.0
    costos_externos_estimados: float = 0.0


class TicketUpdate(_TicketFieldValidators):
    """Patch: only the keys present in the request body are applied."""

    numero_ticket: str | None = None
    equipo: str | None = None
    fecha_entrada: date | None = None
    fecha_inicio_servicio: date | None = None
    fecha_fin_servicio: date | None = None
    descripcion: str | None = None
    costo_repuestos: float | None = None
    costo_mano_obra: float | None = None
    costos_externos_estimados: float | None = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class TicketOut(BaseModel):
    id: int
    numero_ticket: str
    equipo: str
    fecha_entrada: date
    fecha_inicio_servicio: date
    fecha_fin_servicio: date | None = None
    descripcion: str
    costo_repuestos: float = 0.0
    costo_mano_obra: float = 0.0
    costos_externos_estimados: float = 0.0
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TicketResponse(BaseModel):
    data: TicketOut


class TicketListResponse(BaseModel):
    data: list[TicketOut]


class MessageResponse(BaseModel):
    data: str


class ErrorResponse(BaseModel):
    error: str
