from enum import Enum

from sqlalchemy import Column, Integer, String, Numeric, UniqueConstraint

from gestion.models.base import Base


class EstadoDepartamento(str, Enum):
    libre = "libre"
    ocupado = "ocupado"
    reservado = "reservado"


class Departamento(Base):
    __tablename__ = "departamentos"
    __table_args__ = (UniqueConstraint("numero", name="uq_departamentos_numero"),)

    id = Column(Integer, primary_key=True, index=True)
    numero = Column(String(20), nullable=False)
    capacidad = Column(Integer, nullable=False, default=1)
    comodidades = Column(String(500), nullable=True)
    estado = Column(String(20), nullable=False, default=EstadoDepartamento.libre.value, index=True)
    tarifa_diaria = Column(Numeric(10, 2), nullable=False, default=0)
