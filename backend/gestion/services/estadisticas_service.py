from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Dict, List

from sqlalchemy.orm import Session

from gestion.models.servicio import Servicio
from gestion.models.turno import Turno
from gestion.services.precios import precio_con_descuento


def estadisticas_mensuales(db: Session) -> List[Dict[str, object]]:
    """
    Turnos e ingresos por mes (YYYY-MM), mes más reciente primero.
    Se agrupa en Python para no depender de funciones de fecha del dialecto SQL.
    """
    rows = (
        db.query(Turno.fecha_hora, Servicio.precio, Servicio.descuento)
        .join(Servicio, Turno.servicio_id == Servicio.id)
        .all()
    )

    cantidad: Dict[str, int] = defaultdict(int)
    ingresos: Dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    for fecha_hora, precio, descuento in rows:
        mes = fecha_hora.strftime("%Y-%m")
        cantidad[mes] += 1
        ingresos[mes] += precio_con_descuento(precio, descuento)

    return [
        {"mes": mes, "cantidad_turnos": cantidad[mes], "ingresos": float(ingresos[mes])}
        for mes in sorted(cantidad, reverse=True)
    ]
