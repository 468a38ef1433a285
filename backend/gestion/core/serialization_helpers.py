"""
Helpers genéricos de serialización.
NO contiene lógica de negocio, solo utilidades de formato.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List


def serialize_decimal(value):
    """Convierte Decimal a float para serialización JSON"""
    if value is None:
        return None
    return float(value)


def serialize_date(value):
    """Convierte date/datetime a string ISO para serialización JSON"""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return value.isoformat()


def serialize_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return serialize_decimal(value)
    if isinstance(value, (date, datetime)):
        return serialize_date(value)
    return value


def rows_to_dicts(rows: Iterable[Any]) -> List[Dict[str, Any]]:
    """Filas de un SELECT (Row con ._mapping) a dicts listos para JSON."""
    return [
        {key: serialize_value(value) for key, value in row._mapping.items()}
        for row in rows
    ]


def model_to_dict(obj: Any) -> Dict[str, Any]:
    """Columnas de una instancia ORM a dict, sin relaciones."""
    return {
        column.key: serialize_value(getattr(obj, column.key))
        for column in obj.__table__.columns
    }
