from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from gestion.core.database import get_db
from gestion.core.deps import require_estetica_admin
from gestion.models.usuario import Usuario
from gestion.services.estadisticas_service import estadisticas_mensuales


router = APIRouter()


class EstadisticaMensual(BaseModel):
    mes: str
    cantidad_turnos: int
    ingresos: float


@router.get("/", response_model=List[EstadisticaMensual])
def obtener_estadisticas(
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_estetica_admin),
):
    """Turnos e ingresos por mes, del más reciente al más antiguo."""
    return estadisticas_mensuales(db)
