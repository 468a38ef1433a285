from sqlalchemy import Column, Integer, String, Numeric, Text, Date

from gestion.models.base import Base


class Promocion(Base):
    __tablename__ = "promociones"

    id = Column(Integer, primary_key=True, index=True)
    titulo = Column(String(255), nullable=False)
    descripcion = Column(Text, nullable=True)
    descuento_porcentaje = Column(Numeric(5, 2), nullable=False, default=0)
    fecha_inicio = Column(Date, nullable=False, index=True)
    fecha_fin = Column(Date, nullable=False)
    imagen = Column(String(500), nullable=True)
