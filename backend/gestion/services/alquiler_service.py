from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from gestion.models.alquiler import Alquiler, EstadoAlquiler
from gestion.models.departamento import Departamento, EstadoDepartamento
from gestion.models.inquilino import Inquilino


logger = logging.getLogger(__name__)


def crear_alquiler(
    db: Session,
    departamento_id: int,
    inquilino_id: int,
    fecha_inicio: date,
    fecha_fin: Optional[date] = None,
) -> Alquiler:
    """
    Registra un alquiler en curso.
    - El departamento debe existir y estar libre; pasa a ocupado.
    - El inquilino debe existir.
    """
    departamento = db.query(Departamento).filter(Departamento.id == departamento_id).first()
    if not departamento:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Departamento no encontrado")
    if not db.query(Inquilino).filter(Inquilino.id == inquilino_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inquilino no encontrado")
    if fecha_fin is not None and fecha_fin < fecha_inicio:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="fecha_fin no puede ser anterior a fecha_inicio")
    if departamento.estado != EstadoDepartamento.libre.value:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"El departamento {departamento.numero} no está libre ({departamento.estado})",
        )

    alquiler = Alquiler(
        departamento_id=departamento_id,
        inquilino_id=inquilino_id,
        estado=EstadoAlquiler.en_curso.value,
        fecha_inicio=fecha_inicio,
        fecha_fin=fecha_fin,
    )
    departamento.estado = EstadoDepartamento.ocupado.value
    db.add(alquiler)
    db.commit()
    db.refresh(alquiler)
    logger.info("alquiler creado id=%s departamento=%s", alquiler.id, departamento.numero)
    return alquiler


def finalizar_alquiler(db: Session, alquiler: Alquiler, fecha_fin: Optional[date] = None) -> Alquiler:
    if alquiler.estado == EstadoAlquiler.finalizado.value:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="El alquiler ya está finalizado")

    fecha_fin = fecha_fin or date.today()
    if fecha_fin < alquiler.fecha_inicio:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="fecha_fin no puede ser anterior a fecha_inicio")

    # La fecha de cierre es la real: la fecha_fin planificada se reemplaza
    alquiler.estado = EstadoAlquiler.finalizado.value
    alquiler.fecha_fin = fecha_fin
    departamento = alquiler.departamento
    if departamento is not None and departamento.estado == EstadoDepartamento.ocupado.value:
        departamento.estado = EstadoDepartamento.libre.value
    db.commit()
    db.refresh(alquiler)
    logger.info("alquiler finalizado id=%s", alquiler.id)
    return alquiler


def verificar_sin_alquiler_activo(db: Session, **filtro) -> None:
    """409 si algún alquiler en curso referencia la fila (``departamento_id=`` o ``inquilino_id=``)."""
    activo = (
        db.query(Alquiler)
        .filter_by(estado=EstadoAlquiler.en_curso.value, **filtro)
        .first()
    )
    if activo is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Tiene un alquiler en curso; finalícelo antes de eliminar",
        )
