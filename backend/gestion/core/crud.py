from __future__ import annotations

import logging
from typing import Any, Generic, List, Mapping, Optional, Type, TypeVar

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from gestion.models.base import Base


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class CrudGenerico(Generic[ModelT]):
    """
    Operaciones CRUD genéricas sobre un modelo.
    - Las claves de ``datos`` deben ser columnas del modelo (ValueError si no).
    - ``id_column`` permite buscar/actualizar/borrar por otra columna única.
    - No hace commit salvo en los métodos que escriben.
    """

    def __init__(self, model: Type[ModelT], id_column: str = "id"):
        self.model = model
        self.id_column = id_column
        self._columns = {column.key for column in inspect(model).column_attrs}
        if id_column not in self._columns:
            raise ValueError(f"{model.__name__} no tiene la columna {id_column}")

    def _check_columns(self, datos: Mapping[str, Any]) -> None:
        unknown = set(datos) - self._columns
        if unknown:
            raise ValueError(f"Columnas desconocidas para {self.model.__tablename__}: {', '.join(sorted(unknown))}")

    def _filter_by_id(self, db: Session, id_value: Any):
        return db.query(self.model).filter(getattr(self.model, self.id_column) == id_value)

    def insertar(self, db: Session, datos: Mapping[str, Any]) -> ModelT:
        self._check_columns(datos)
        obj = self.model(**dict(datos))
        db.add(obj)
        db.commit()
        db.refresh(obj)
        logger.info("insert %s id=%s", self.model.__tablename__, getattr(obj, self.id_column))
        return obj

    def obtener_todos(self, db: Session) -> List[ModelT]:
        return db.query(self.model).order_by(getattr(self.model, self.id_column)).all()

    def obtener_por_id(self, db: Session, id_value: Any) -> Optional[ModelT]:
        return self._filter_by_id(db, id_value).first()

    def actualizar(self, db: Session, id_value: Any, datos: Mapping[str, Any]) -> Optional[ModelT]:
        self._check_columns(datos)
        obj = self.obtener_por_id(db, id_value)
        if obj is None:
            return None
        for key, value in datos.items():
            if key == self.id_column:
                continue
            setattr(obj, key, value)
        db.commit()
        db.refresh(obj)
        logger.info("update %s id=%s fields=%s", self.model.__tablename__, id_value, sorted(datos))
        return obj

    def eliminar(self, db: Session, id_value: Any) -> bool:
        obj = self.obtener_por_id(db, id_value)
        if obj is None:
            return False
        db.delete(obj)
        db.commit()
        logger.info("delete %s id=%s", self.model.__tablename__, id_value)
        return True
