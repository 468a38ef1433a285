from enum import Enum


class Role(str, Enum):
    # Estética
    admin = "admin"
    cliente = "cliente"
    # Alquileres
    dueno = "dueno"
    ayudante = "ayudante"


ADMIN_ROLES = {Role.admin, Role.dueno}
ESTETICA_ADMIN_ROLES = {Role.admin}
ALQUILER_ROLES = {Role.dueno, Role.ayudante}
