from enum import Enum

from sqlalchemy import Column, Integer, String, Numeric, Date, ForeignKey
from sqlalchemy.orm import relationship

from gestion.models.base import Base


class EstadoPago(str, Enum):
    pagado = "Pagado"
    parcial = "Parcial"
    debe = "Debe"


ESTADOS_CON_DEUDA = (EstadoPago.debe.value, EstadoPago.parcial.value)


class Pago(Base):
    __tablename__ = "pagos"

    id = Column(Integer, primary_key=True, index=True)
    alquiler_id = Column(Integer, ForeignKey("alquileres.id", ondelete="CASCADE"), nullable=False, index=True)
    monto = Column(Numeric(10, 2), nullable=False, default=0)
    estado = Column(String(20), nullable=False, default=EstadoPago.pagado.value, index=True)
    fecha_pago = Column(Date, nullable=True, index=True)  # NULL mientras se adeuda
    forma_pago = Column(String(50), nullable=True)  # Efectivo, Transferencia, ...

    alquiler = relationship("Alquiler", back_populates="pagos")
