import logging
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, EmailStr
from sqlalchemy import or_
from sqlalchemy.orm import Session

from gestion.core.config import settings
from gestion.core.database import get_db
from gestion.core.deps import get_current_user, get_optional_user, get_token_payload, session_revoked
from gestion.core.responses import MessageResponse
from gestion.core.roles import ADMIN_ROLES, Role
from gestion.core.security import create_token_pair, decode_token, hash_password, session_expiry, verify_password
from gestion.models.sesion_revocada import SesionRevocada
from gestion.models.usuario import Usuario


router = APIRouter()
logger = logging.getLogger(__name__)


class RegisterRequest(BaseModel):
    usuario: Optional[str] = None
    contrasena: Optional[str] = None
    nombre: Optional[str] = None
    email: Optional[EmailStr] = None
    rol: Role = Role.cliente


class LoginRequest(BaseModel):
    usuario: Optional[str] = None
    contrasena: Optional[str] = None


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    rol: str
    usuario: str


class RefreshRequest(BaseModel):
    refresh_token: str


class MeResponse(BaseModel):
    msg: str
    id: int
    rol: str


def _tokens_for(user: Usuario, sid: Optional[str] = None) -> TokenResponse:
    access, refresh = create_token_pair(user, sid)
    return TokenResponse(access_token=access, refresh_token=refresh, rol=user.rol, usuario=user.usuario)


@router.post("/register", response_model=MessageResponse)
def register(
    data: RegisterRequest,
    db: Session = Depends(get_db),
    current_user: Optional[Usuario] = Depends(get_optional_user),
):
    if not data.usuario or not data.contrasena:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Faltan campos")

    # Solo un admin/dueño puede crear cuentas con rol de personal
    if data.rol != Role.cliente:
        if current_user is None or current_user.rol not in {r.value for r in ADMIN_ROLES}:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Solo un administrador puede registrar este rol",
            )

    usuario = data.usuario.strip()
    if db.query(Usuario).filter(Usuario.usuario == usuario).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="El usuario ya existe")

    user = Usuario(
        usuario=usuario,
        nombre=data.nombre,
        email=data.email,
        hashed_password=hash_password(data.contrasena),
        rol=data.rol.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("registered user id=%s rol=%s", user.id, user.rol)
    return MessageResponse(message="Usuario registrado", id=user.id)


@router.post("/login", response_model=TokenResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    if not data.usuario or not data.contrasena:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Faltan campos")
    user = (
        db.query(Usuario)
        .filter(or_(Usuario.usuario == data.usuario, Usuario.email == data.usuario))
        .first()
    )
    if not user or not verify_password(data.contrasena, user.hashed_password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Credenciales inválidas")
    return _tokens_for(user)


@router.post("/refresh", response_model=TokenResponse)
def refresh_token_endpoint(data: RefreshRequest, db: Session = Depends(get_db)):
    payload = decode_token(data.refresh_token)
    if not payload or payload.get("type") != "refresh" or not payload.get("sid"):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Refresh token inválido")
    if session_revoked(db, payload):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token revocado")

    user = db.query(Usuario).filter(Usuario.id == int(payload["sub"])).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Usuario no encontrado")
    return _tokens_for(user, payload["sid"])


@router.get("/me", response_model=MeResponse)
def me(user: Usuario = Depends(get_current_user)):
    return MeResponse(msg=f"Bienvenido {user.usuario}", id=user.id, rol=user.rol)


@router.post("/logout", response_model=MessageResponse)
def logout(
    db: Session = Depends(get_db),
    payload: dict[str, Any] = Depends(get_token_payload),
):
    """Cierra la sesión: el access token y el refresh token del mismo login dejan de valer."""
    ahora = datetime.now(timezone.utc)
    purgadas = db.query(SesionRevocada).filter(SesionRevocada.expira_en < ahora).delete(synchronize_session=False)
    db.add(SesionRevocada(sid=payload["sid"], usuario_id=int(payload["sub"]), revocado_en=ahora, expira_en=session_expiry()))
    db.commit()
    logger.info("logout usuario_id=%s (sesiones vencidas purgadas: %s)", payload["sub"], purgadas)
    return MessageResponse(message="Sesión cerrada")
