"""
Consultas fijas del panel de reportes de alquileres.
Cada función devuelve una lista de dicts (columna -> valor serializable) para
que la misma salida sirva al endpoint JSON y a la tabla HTML.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from gestion.core.serialization_helpers import model_to_dict, rows_to_dicts
from gestion.models.alquiler import Alquiler, EstadoAlquiler
from gestion.models.departamento import Departamento, EstadoDepartamento
from gestion.models.inquilino import Inquilino
from gestion.models.pago import ESTADOS_CON_DEUDA, Pago


Fila = Dict[str, Any]


def departamentos_libres(db: Session) -> List[Fila]:
    departamentos = (
        db.query(Departamento)
        .filter(Departamento.estado == EstadoDepartamento.libre.value)
        .order_by(Departamento.numero)
        .all()
    )
    return [model_to_dict(d) for d in departamentos]


def alquileres_activos(db: Session) -> List[Fila]:
    rows = (
        db.query(
            Inquilino.nombre_completo,
            Alquiler.id,
            Alquiler.departamento_id,
            Alquiler.inquilino_id,
            Alquiler.estado,
            Alquiler.fecha_inicio,
            Alquiler.fecha_fin,
            Departamento.numero.label("departamento"),
        )
        .join(Departamento, Alquiler.departamento_id == Departamento.id)
        .join(Inquilino, Inquilino.id == Alquiler.inquilino_id)
        .filter(Alquiler.estado == EstadoAlquiler.en_curso.value)
        .order_by(Alquiler.fecha_inicio, Alquiler.id)
        .all()
    )
    return rows_to_dicts(rows)


def inquilinos_con_deuda(db: Session) -> List[Fila]:
    rows = (
        db.query(Inquilino.nombre_completo, Pago.monto, Pago.estado, Pago.fecha_pago)
        .select_from(Pago)
        .join(Alquiler, Pago.alquiler_id == Alquiler.id)
        .join(Inquilino, Alquiler.inquilino_id == Inquilino.id)
        .filter(Pago.estado.in_(ESTADOS_CON_DEUDA))
        .order_by(Inquilino.nombre_completo, Pago.id)
        .all()
    )
    return rows_to_dicts(rows)


def rango_por_defecto(
    inicio: Optional[date], fin: Optional[date], hoy: Optional[date] = None
) -> Tuple[date, date]:
    """Sin fechas: desde el primer día del mes en curso hasta hoy."""
    hoy = hoy or date.today()
    return inicio or hoy.replace(day=1), fin or hoy


def ingresos_por_dia(db: Session, inicio: date, fin: date) -> List[Fila]:
    if inicio > fin:
        raise ValueError("La fecha de inicio es posterior a la fecha de fin")
    rows = (
        db.query(Pago.fecha_pago.label("dia"), func.sum(Pago.monto).label("total"))
        .filter(Pago.fecha_pago.isnot(None), Pago.fecha_pago.between(inicio, fin))
        .group_by(Pago.fecha_pago)
        .order_by(Pago.fecha_pago)
        .all()
    )
    return rows_to_dicts(rows)
