from sqlalchemy import Column, Integer, String, UniqueConstraint

from gestion.models.base import Base


class Categoria(Base):
    __tablename__ = "categorias"
    __table_args__ = (UniqueConstraint("nombre", name="uq_categorias_nombre"),)

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(100), nullable=False)
