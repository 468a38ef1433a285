import logging
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from gestion.core.database import get_db
from gestion.core.deps import require_alquiler_staff
from gestion.services import reportes_service
from gestion.services.panel_service import ACCIONES, render_panel


router = APIRouter(dependencies=[Depends(require_alquiler_staff)])
logger = logging.getLogger(__name__)


def _ingresos(db: Session, inicio: Optional[date], fin: Optional[date]) -> List[Dict[str, Any]]:
    inicio, fin = reportes_service.rango_por_defecto(inicio, fin)
    try:
        return reportes_service.ingresos_por_dia(db, inicio, fin)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/departamentos-libres")
def departamentos_libres(db: Session = Depends(get_db)):
    return reportes_service.departamentos_libres(db)


@router.get("/alquileres-activos")
def alquileres_activos(db: Session = Depends(get_db)):
    return reportes_service.alquileres_activos(db)


@router.get("/inquilinos-deuda")
def inquilinos_deuda(db: Session = Depends(get_db)):
    return reportes_service.inquilinos_con_deuda(db)


@router.get("/ingresos-dia")
def ingresos_dia(
    inicio: Optional[date] = Query(None, description="Desde (YYYY-MM-DD), por defecto el primer día del mes"),
    fin: Optional[date] = Query(None, description="Hasta (YYYY-MM-DD), por defecto hoy"),
    db: Session = Depends(get_db),
):
    return _ingresos(db, inicio, fin)


@router.get("/panel", response_class=HTMLResponse)
def panel(
    accion: Optional[str] = Query(None),
    inicio: Optional[date] = Query(None),
    fin: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    """
    Panel HTML: formulario de selección y tabla con el resultado de la consulta.
    Las columnas de la tabla son las claves de la primera fila.
    """
    if accion is not None and accion not in ACCIONES:
        raise HTTPException(status_code=400, detail=f"Acción desconocida: {accion}")

    logger.info("panel accion=%s inicio=%s fin=%s", accion, inicio, fin)
    resultado: List[Dict[str, Any]] = []
    if accion == "libres":
        resultado = reportes_service.departamentos_libres(db)
    elif accion == "activos":
        resultado = reportes_service.alquileres_activos(db)
    elif accion == "deudas":
        resultado = reportes_service.inquilinos_con_deuda(db)
    elif accion == "ingresos":
        resultado = _ingresos(db, inicio, fin)

    return HTMLResponse(render_panel(accion, resultado, inicio, fin))
