from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint

from gestion.models.base import Base


class Usuario(Base):
    __tablename__ = "usuarios"
    __table_args__ = (
        UniqueConstraint("usuario", name="uq_usuarios_usuario"),
    )

    id = Column(Integer, primary_key=True, index=True)
    usuario = Column(String(100), nullable=False, index=True)
    nombre = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True, index=True)
    hashed_password = Column(String(255), nullable=False)
    rol = Column(String(50), nullable=False, default="cliente")
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
