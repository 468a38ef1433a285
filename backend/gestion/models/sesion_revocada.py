from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint

from gestion.models.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SesionRevocada(Base):
    """Sesión cerrada por logout; invalida todos los tokens que llevan su ``sid``."""

    __tablename__ = "sesiones_revocadas"
    __table_args__ = (UniqueConstraint("sid", name="uq_sesiones_revocadas_sid"),)

    id = Column(Integer, primary_key=True, index=True)
    sid = Column(String(64), nullable=False, index=True)
    usuario_id = Column(Integer, nullable=True)
    revocado_en = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    # Pasada esta fecha ningún token de la sesión es válido y la fila se puede purgar
    expira_en = Column(DateTime(timezone=True), nullable=False, index=True)
