from sqlalchemy import Column, Integer, String, Numeric, Text, ForeignKey
from sqlalchemy.orm import relationship

from gestion.models.base import Base


class Servicio(Base):
    __tablename__ = "servicios"

    id = Column(Integer, primary_key=True, index=True)
    titulo = Column(String(255), nullable=False)
    descripcion = Column(Text, nullable=False)
    precio = Column(Numeric(10, 2), nullable=False, default=0)
    # Porcentaje 0-100
    descuento = Column(Numeric(5, 2), nullable=False, default=0)
    imagen = Column(String(500), nullable=True)
    categoria_id = Column(Integer, ForeignKey("categorias.id", ondelete="SET NULL"), nullable=True, index=True)

    categoria = relationship("Categoria")
