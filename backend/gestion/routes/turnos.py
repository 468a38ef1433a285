import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from gestion.core.database import get_db
from gestion.core.deps import get_current_user
from gestion.core.responses import MessageResponse, get_or_404
from gestion.core.roles import ESTETICA_ADMIN_ROLES
from gestion.models.servicio import Servicio
from gestion.models.turno import Turno
from gestion.models.usuario import Usuario


router = APIRouter()
logger = logging.getLogger(__name__)


class TurnoIn(BaseModel):
    fecha_hora: Optional[datetime] = None
    usuario_id: Optional[int] = None
    servicio_id: Optional[int] = None


class TurnoOut(BaseModel):
    id: int
    fecha_hora: datetime
    usuario_id: int
    servicio_id: int

    class Config:
        from_attributes = True


class TurnoDetalle(BaseModel):
    id: int
    fecha_hora: datetime
    usuario: str
    servicio: str
    precio: float
    descuento: float


def _es_admin(user: Usuario) -> bool:
    return user.rol in {r.value for r in ESTETICA_ADMIN_ROLES}


def _turno_visible(db: Session, turno_id: int, user: Usuario) -> Turno:
    turno = get_or_404(db.query(Turno).filter(Turno.id == turno_id).first(), "Turno no encontrado")
    if not _es_admin(user) and turno.usuario_id != user.id:
        # No revelar turnos ajenos
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Turno no encontrado")
    return turno


def _validar_referencias(db: Session, usuario_id: int, servicio_id: int) -> None:
    if not db.query(Usuario).filter(Usuario.id == usuario_id).first():
        raise HTTPException(status_code=404, detail="Usuario no encontrado")
    if not db.query(Servicio).filter(Servicio.id == servicio_id).first():
        raise HTTPException(status_code=404, detail="Servicio no encontrado")


@router.get("/", response_model=List[TurnoDetalle])
def listar_turnos(
    db: Session = Depends(get_db),
    user: Usuario = Depends(get_current_user),
):
    query = (
        db.query(
            Turno.id,
            Turno.fecha_hora,
            Usuario.usuario.label("usuario"),
            Servicio.titulo.label("servicio"),
            Servicio.precio,
            Servicio.descuento,
        )
        .join(Usuario, Turno.usuario_id == Usuario.id)
        .join(Servicio, Turno.servicio_id == Servicio.id)
    )
    if not _es_admin(user):
        query = query.filter(Turno.usuario_id == user.id)
    rows = query.order_by(Turno.fecha_hora.desc()).all()
    return [
        TurnoDetalle(
            id=r.id,
            fecha_hora=r.fecha_hora,
            usuario=r.usuario,
            servicio=r.servicio,
            precio=float(r.precio),
            descuento=float(r.descuento or 0),
        )
        for r in rows
    ]


@router.get("/{turno_id}", response_model=TurnoOut)
def ver_turno(turno_id: int, db: Session = Depends(get_db), user: Usuario = Depends(get_current_user)):
    return _turno_visible(db, turno_id, user)


@router.post("/", response_model=MessageResponse)
def crear_turno(data: TurnoIn, db: Session = Depends(get_db), user: Usuario = Depends(get_current_user)):
    # Un cliente solo reserva para sí mismo
    usuario_id = data.usuario_id if _es_admin(user) else (data.usuario_id or user.id)
    if data.fecha_hora is None or usuario_id is None or data.servicio_id is None:
        raise HTTPException(status_code=400, detail="Faltan campos obligatorios")
    if not _es_admin(user) and usuario_id != user.id:
        raise HTTPException(status_code=403, detail="No puede reservar turnos para otro usuario")

    _validar_referencias(db, usuario_id, data.servicio_id)
    turno = Turno(fecha_hora=data.fecha_hora, usuario_id=usuario_id, servicio_id=data.servicio_id)
    db.add(turno)
    db.commit()
    db.refresh(turno)
    logger.info("turno creado id=%s usuario_id=%s servicio_id=%s", turno.id, usuario_id, data.servicio_id)
    return MessageResponse(message="Turno creado con éxito", id=turno.id)


@router.put("/{turno_id}", response_model=MessageResponse)
def actualizar_turno(
    turno_id: int,
    data: TurnoIn,
    db: Session = Depends(get_db),
    user: Usuario = Depends(get_current_user),
):
    turno = _turno_visible(db, turno_id, user)
    cambios = data.model_dump(exclude_unset=True, exclude_none=True)
    if "usuario_id" in cambios and not _es_admin(user) and cambios["usuario_id"] != user.id:
        raise HTTPException(status_code=403, detail="No puede reasignar turnos a otro usuario")

    _validar_referencias(
        db,
        cambios.get("usuario_id", turno.usuario_id),
        cambios.get("servicio_id", turno.servicio_id),
    )
    for key, value in cambios.items():
        setattr(turno, key, value)
    db.commit()
    return MessageResponse(message="Turno actualizado", id=turno_id)


@router.delete("/{turno_id}", response_model=MessageResponse)
def eliminar_turno(turno_id: int, db: Session = Depends(get_db), user: Usuario = Depends(get_current_user)):
    turno = _turno_visible(db, turno_id, user)
    db.delete(turno)
    db.commit()
    return MessageResponse(message="Turno eliminado", id=turno_id)
