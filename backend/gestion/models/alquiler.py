from enum import Enum

from sqlalchemy import Column, Integer, String, Date, ForeignKey
from sqlalchemy.orm import relationship

from gestion.models.base import Base


class EstadoAlquiler(str, Enum):
    en_curso = "en curso"
    finalizado = "finalizado"


class Alquiler(Base):
    __tablename__ = "alquileres"

    id = Column(Integer, primary_key=True, index=True)
    departamento_id = Column(Integer, ForeignKey("departamentos.id", ondelete="CASCADE"), nullable=False, index=True)
    inquilino_id = Column(Integer, ForeignKey("inquilinos.id", ondelete="CASCADE"), nullable=False, index=True)
    estado = Column(String(20), nullable=False, default=EstadoAlquiler.en_curso.value, index=True)
    fecha_inicio = Column(Date, nullable=False)
    fecha_fin = Column(Date, nullable=True)

    departamento = relationship("Departamento")
    inquilino = relationship("Inquilino")
    pagos = relationship("Pago", back_populates="alquiler", cascade="all, delete-orphan")
