from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session, joinedload

from gestion.core.database import get_db
from gestion.core.deps import require_alquiler_staff
from gestion.core.responses import MessageResponse, get_or_404
from gestion.models.alquiler import Alquiler, EstadoAlquiler
from gestion.services.alquiler_service import crear_alquiler, finalizar_alquiler


router = APIRouter(dependencies=[Depends(require_alquiler_staff)])


class AlquilerCreate(BaseModel):
    departamento_id: int
    inquilino_id: int
    fecha_inicio: date
    fecha_fin: Optional[date] = None


class FinalizarRequest(BaseModel):
    fecha_fin: Optional[date] = None


class AlquilerOut(BaseModel):
    id: int
    departamento_id: int
    inquilino_id: int
    estado: str
    fecha_inicio: date
    fecha_fin: Optional[date]
    departamento: Optional[str] = None
    inquilino: Optional[str] = None


def _to_out(alquiler: Alquiler) -> AlquilerOut:
    return AlquilerOut(
        id=alquiler.id,
        departamento_id=alquiler.departamento_id,
        inquilino_id=alquiler.inquilino_id,
        estado=alquiler.estado,
        fecha_inicio=alquiler.fecha_inicio,
        fecha_fin=alquiler.fecha_fin,
        departamento=alquiler.departamento.numero if alquiler.departamento else None,
        inquilino=alquiler.inquilino.nombre_completo if alquiler.inquilino else None,
    )


def _get_alquiler(db: Session, alquiler_id: int) -> Alquiler:
    return get_or_404(db.query(Alquiler).filter(Alquiler.id == alquiler_id).first(), "Alquiler no encontrado")


@router.get("/", response_model=List[AlquilerOut])
def listar_alquileres(
    db: Session = Depends(get_db),
    estado: Optional[EstadoAlquiler] = Query(None),
):
    query = db.query(Alquiler).options(joinedload(Alquiler.departamento), joinedload(Alquiler.inquilino))
    if estado is not None:
        query = query.filter(Alquiler.estado == estado.value)
    return [_to_out(a) for a in query.order_by(Alquiler.fecha_inicio.desc(), Alquiler.id.desc()).all()]


@router.get("/{alquiler_id}", response_model=AlquilerOut)
def ver_alquiler(alquiler_id: int, db: Session = Depends(get_db)):
    return _to_out(_get_alquiler(db, alquiler_id))


@router.post("/", response_model=MessageResponse)
def registrar_alquiler(data: AlquilerCreate, db: Session = Depends(get_db)):
    alquiler = crear_alquiler(
        db,
        departamento_id=data.departamento_id,
        inquilino_id=data.inquilino_id,
        fecha_inicio=data.fecha_inicio,
        fecha_fin=data.fecha_fin,
    )
    return MessageResponse(message="Alquiler registrado", id=alquiler.id)


@router.post("/{alquiler_id}/finalizar", response_model=MessageResponse)
def finalizar(alquiler_id: int, data: Optional[FinalizarRequest] = None, db: Session = Depends(get_db)):
    alquiler = _get_alquiler(db, alquiler_id)
    finalizar_alquiler(db, alquiler, fecha_fin=data.fecha_fin if data else None)
    return MessageResponse(message="Alquiler finalizado", id=alquiler_id)


@router.delete("/{alquiler_id}", response_model=MessageResponse)
def eliminar_alquiler(alquiler_id: int, db: Session = Depends(get_db)):
    alquiler = _get_alquiler(db, alquiler_id)
    if alquiler.estado == EstadoAlquiler.en_curso.value:
        raise HTTPException(status_code=409, detail="Finalice el alquiler antes de eliminarlo")
    db.delete(alquiler)
    db.commit()
    return MessageResponse(message="Alquiler eliminado", id=alquiler_id)
