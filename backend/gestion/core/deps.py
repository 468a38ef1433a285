from typing import Any, Iterable, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from gestion.core.database import get_db
from gestion.core.roles import ADMIN_ROLES, ALQUILER_ROLES, ESTETICA_ADMIN_ROLES, Role
from gestion.core.security import decode_token
from gestion.models.sesion_revocada import SesionRevocada
from gestion.models.usuario import Usuario


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    return authorization.split(" ", 1)[1].strip() or None


def session_revoked(db: Session, payload: dict[str, Any]) -> bool:
    return db.query(SesionRevocada).filter(SesionRevocada.sid == payload["sid"]).first() is not None


def get_token_payload(
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(None),
) -> dict[str, Any]:
    token = _bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No autorizado")
    payload = decode_token(token)
    if not payload or payload.get("type") != "access" or not payload.get("sid"):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token inválido")
    if session_revoked(db, payload):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token revocado")
    return payload


def get_current_user(
    db: Session = Depends(get_db),
    payload: dict[str, Any] = Depends(get_token_payload),
) -> Usuario:
    user = db.query(Usuario).filter(Usuario.id == int(payload["sub"])).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Usuario no encontrado")
    return user


def get_optional_user(
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(None),
) -> Optional[Usuario]:
    """Usuario del token si viene uno válido; None para peticiones anónimas."""
    token = _bearer_token(authorization)
    if not token:
        return None
    payload = get_token_payload(db=db, authorization=authorization)
    return get_current_user(db=db, payload=payload)


def _require_roles(roles: Iterable[Role], detail: str):
    allowed = {r.value for r in roles}

    def dependency(user: Usuario = Depends(get_current_user)) -> Usuario:
        if user.rol not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
        return user

    return dependency


require_admin = _require_roles(ADMIN_ROLES, "Rol insuficiente")
require_estetica_admin = _require_roles(ESTETICA_ADMIN_ROLES, "Se requiere rol admin")
require_alquiler_staff = _require_roles(ALQUILER_ROLES, "Se requiere rol dueño o ayudante")
