from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from uuid import uuid4

import jwt
from passlib.context import CryptContext

from gestion.core.config import settings


password_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=12,
)


def hash_password(password: str) -> str:
    return password_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    return password_context.verify(password, hashed_password)


def create_token(
    subject: str,
    expires_minutes: int,
    token_type: str,
    extra_claims: Optional[dict[str, Any]] = None,
) -> str:
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": subject,
        "type": token_type,
        "jti": uuid4().hex,
        "exp": now + timedelta(minutes=expires_minutes),
        "iat": now,
    }
    if extra_claims:
        payload.update(extra_claims)
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict[str, Any]]:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.PyJWTError:
        return None


def create_token_pair(user, sid: Optional[str] = None) -> tuple[str, str]:
    """
    Access + refresh tokens carrying the role and username claims.
    Both share ``sid`` (session id); refreshing keeps the session so logout revokes the whole chain.
    """
    claims = {"rol": user.rol, "usuario": user.usuario, "sid": sid or uuid4().hex}
    access = create_token(str(user.id), settings.access_token_expire_minutes, "access", claims)
    refresh = create_token(str(user.id), settings.refresh_token_expire_minutes, "refresh", claims)
    return access, refresh


def session_expiry() -> datetime:
    """Upper bound for the expiry of any token issued so far in a session."""
    return datetime.now(timezone.utc) + timedelta(minutes=settings.refresh_token_expire_minutes)
