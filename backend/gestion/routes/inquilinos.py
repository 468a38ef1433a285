import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, EmailStr, constr
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from gestion.core.crud import CrudGenerico
from gestion.core.database import get_db
from gestion.core.deps import require_alquiler_staff
from gestion.core.responses import MessageResponse, get_or_404
from gestion.models.inquilino import Inquilino
from gestion.services.alquiler_service import verificar_sin_alquiler_activo


router = APIRouter(dependencies=[Depends(require_alquiler_staff)])
crud = CrudGenerico(Inquilino)
logger = logging.getLogger(__name__)


class InquilinoBase(BaseModel):
    dni: Optional[str] = None
    telefono: Optional[str] = None
    email: Optional[EmailStr] = None
    direccion_origen: Optional[str] = None
    marca_vehiculo: Optional[str] = None
    modelo_vehiculo: Optional[str] = None
    patente_vehiculo: Optional[str] = None


class InquilinoCreate(InquilinoBase):
    nombre_completo: constr(strip_whitespace=True, min_length=1, max_length=255)


class InquilinoUpdate(InquilinoBase):
    nombre_completo: Optional[constr(strip_whitespace=True, min_length=1, max_length=255)] = None


class InquilinoOut(InquilinoBase):
    id: int
    nombre_completo: str
    email: Optional[str] = None

    class Config:
        from_attributes = True


@router.get("/", response_model=List[InquilinoOut])
def listar_inquilinos(
    db: Session = Depends(get_db),
    q: Optional[str] = Query(None, description="Buscar por nombre o DNI"),
):
    logger.info("listar_inquilinos q=%s", q)
    query = db.query(Inquilino)
    if q:
        qn = q.strip().lower()
        if qn:
            query = query.filter(
                or_(
                    func.lower(Inquilino.nombre_completo).like(f"%{qn}%"),
                    Inquilino.dni.like(f"%{qn}%"),
                )
            )
    return query.order_by(Inquilino.nombre_completo).all()


@router.get("/{inquilino_id}", response_model=InquilinoOut)
def ver_inquilino(inquilino_id: int, db: Session = Depends(get_db)):
    return get_or_404(crud.obtener_por_id(db, inquilino_id), "Inquilino no encontrado")


@router.post("/", response_model=MessageResponse)
def registrar_inquilino(data: InquilinoCreate, db: Session = Depends(get_db)):
    inquilino = crud.insertar(db, data.model_dump())
    return MessageResponse(message="Inquilino registrado", id=inquilino.id)


@router.put("/{inquilino_id}", response_model=MessageResponse)
def actualizar_inquilino(inquilino_id: int, data: InquilinoUpdate, db: Session = Depends(get_db)):
    cambios = data.model_dump(exclude_unset=True)
    if "nombre_completo" in cambios and cambios["nombre_completo"] is None:
        raise HTTPException(status_code=400, detail="nombre_completo no puede quedar vacío")
    get_or_404(crud.actualizar(db, inquilino_id, cambios), "Inquilino no encontrado")
    return MessageResponse(message="Inquilino actualizado", id=inquilino_id)


@router.delete("/{inquilino_id}", response_model=MessageResponse)
def eliminar_inquilino(inquilino_id: int, db: Session = Depends(get_db)):
    verificar_sin_alquiler_activo(db, inquilino_id=inquilino_id)
    if not crud.eliminar(db, inquilino_id):
        raise HTTPException(status_code=404, detail="Inquilino no encontrado")
    return MessageResponse(message="Inquilino eliminado", id=inquilino_id)
