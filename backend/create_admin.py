#!/usr/bin/env python3
"""
Crea (o resetea) una cuenta de administración.
Uso: python create_admin.py <usuario> <contraseña> [admin|dueno]
"""
import logging
import sys

from gestion.core.database import SessionLocal, init_db
from gestion.core.logging_config import configure_logging
from gestion.core.roles import Role
from gestion.core.security import hash_password
from gestion.models.usuario import Usuario


logger = logging.getLogger("create_admin")


def create_admin(usuario: str, password: str, rol: Role = Role.admin) -> Usuario:
    init_db()
    with SessionLocal() as db:
        user = db.query(Usuario).filter(Usuario.usuario == usuario).first()
        if user:
            user.rol = rol.value
            user.hashed_password = hash_password(password)
            logger.info("Usuario '%s' actualizado con rol %s", usuario, rol.value)
        else:
            user = Usuario(usuario=usuario, nombre=usuario, hashed_password=hash_password(password), rol=rol.value)
            db.add(user)
            logger.info("Usuario '%s' creado con rol %s", usuario, rol.value)
        db.commit()
        db.refresh(user)
        return user


if __name__ == "__main__":
    configure_logging()
    if len(sys.argv) < 3:
        print(__doc__)
        sys.exit(1)
    rol = Role(sys.argv[3]) if len(sys.argv) > 3 else Role.admin
    if rol not in {Role.admin, Role.dueno}:
        print("El rol debe ser admin o dueno")
        sys.exit(1)
    create_admin(sys.argv[1], sys.argv[2], rol)
