from sqlalchemy import Column, Integer, String

from gestion.models.base import Base


class Alumno(Base):
    __tablename__ = "alumnos"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(100), nullable=False)
    apellido = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)
    curso = Column(String(100), nullable=True)
