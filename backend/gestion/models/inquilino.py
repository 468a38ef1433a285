from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime

from gestion.models.base import Base


class Inquilino(Base):
    __tablename__ = "inquilinos"

    id = Column(Integer, primary_key=True, index=True)
    nombre_completo = Column(String(255), nullable=False)
    dni = Column(String(30), nullable=True, index=True)
    telefono = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    direccion_origen = Column(String(255), nullable=True)
    marca_vehiculo = Column(String(100), nullable=True)
    modelo_vehiculo = Column(String(100), nullable=True)
    patente_vehiculo = Column(String(20), nullable=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
