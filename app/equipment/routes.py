# app/equipment/routes.py
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.core.errors import StoreError
from app.equipment import services as equipment_service

router = APIRouter(prefix="/equipment", tags=["Equipment"])

logger = logging.getLogger(__name__)


class EquipmentListResponse(BaseModel):
    data: list[str]


@router.get("", response_model=EquipmentListResponse)
def list_all(db: Session = Depends(get_db)):
    try:
        names = equipment_service.list_equipment(db)
    except SQLAlchemyError:
        logger.exception("Error al obtener equipos")
        raise StoreError("Error al obtener equipos")
    return EquipmentListResponse(data=names)
