from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, condecimal, constr
from sqlalchemy.orm import Session

from gestion.core.crud import CrudGenerico
from gestion.core.database import get_db
from gestion.core.deps import require_estetica_admin
from gestion.core.responses import MessageResponse, get_or_404
from gestion.models.promocion import Promocion


router = APIRouter()
crud = CrudGenerico(Promocion)

Porcentaje = condecimal(ge=0, le=100, max_digits=5, decimal_places=2)


class PromocionCreate(BaseModel):
    titulo: constr(strip_whitespace=True, min_length=1, max_length=255)
    descripcion: Optional[str] = None
    descuento_porcentaje: Porcentaje
    fecha_inicio: date
    fecha_fin: date
    imagen: Optional[str] = None


class PromocionUpdate(BaseModel):
    titulo: Optional[constr(strip_whitespace=True, min_length=1, max_length=255)] = None
    descripcion: Optional[str] = None
    descuento_porcentaje: Optional[Porcentaje] = None
    fecha_inicio: Optional[date] = None
    fecha_fin: Optional[date] = None
    imagen: Optional[str] = None


class PromocionOut(BaseModel):
    id: int
    titulo: str
    descripcion: Optional[str]
    descuento_porcentaje: float
    fecha_inicio: date
    fecha_fin: date
    imagen: Optional[str]

    class Config:
        from_attributes = True


def _check_rango(inicio: date, fin: date) -> None:
    if fin < inicio:
        raise HTTPException(status_code=400, detail="fecha_fin no puede ser anterior a fecha_inicio")


@router.get("/", response_model=List[PromocionOut])
def listar_promociones(
    db: Session = Depends(get_db),
    vigentes: bool = Query(False, description="Solo promociones activas hoy"),
):
    query = db.query(Promocion)
    if vigentes:
        hoy = date.today()
        query = query.filter(Promocion.fecha_inicio <= hoy, Promocion.fecha_fin >= hoy)
    return query.order_by(Promocion.fecha_inicio.desc(), Promocion.id.desc()).all()


@router.get("/{promocion_id}", response_model=PromocionOut)
def ver_promocion(promocion_id: int, db: Session = Depends(get_db)):
    return get_or_404(crud.obtener_por_id(db, promocion_id), "Promoción no encontrada")


@router.post("/", response_model=MessageResponse, dependencies=[Depends(require_estetica_admin)])
def crear_promocion(data: PromocionCreate, db: Session = Depends(get_db)):
    _check_rango(data.fecha_inicio, data.fecha_fin)
    promocion = crud.insertar(db, data.model_dump())
    return MessageResponse(message="Promoción creada correctamente", id=promocion.id)


@router.put("/{promocion_id}", response_model=MessageResponse, dependencies=[Depends(require_estetica_admin)])
def actualizar_promocion(promocion_id: int, data: PromocionUpdate, db: Session = Depends(get_db)):
    promocion = get_or_404(crud.obtener_por_id(db, promocion_id), "Promoción no encontrada")
    cambios = data.model_dump(exclude_unset=True, exclude_none=True)
    _check_rango(
        cambios.get("fecha_inicio") or promocion.fecha_inicio,
        cambios.get("fecha_fin") or promocion.fecha_fin,
    )
    crud.actualizar(db, promocion_id, cambios)
    return MessageResponse(message="Promoción actualizada", id=promocion_id)


@router.delete("/{promocion_id}", response_model=MessageResponse, dependencies=[Depends(require_estetica_admin)])
def eliminar_promocion(promocion_id: int, db: Session = Depends(get_db)):
    if not crud.eliminar(db, promocion_id):
        raise HTTPException(status_code=404, detail="Promoción no encontrada")
    return MessageResponse(message="Promoción eliminada", id=promocion_id)
