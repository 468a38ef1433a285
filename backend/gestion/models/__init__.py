from .base import Base
from .usuario import Usuario
from .sesion_revocada import SesionRevocada
from .categoria import Categoria
from .servicio import Servicio
from .promocion import Promocion
from .turno import Turno
from .departamento import Departamento
from .inquilino import Inquilino
from .alquiler import Alquiler
from .pago import Pago
from .alumno import Alumno

__all__ = [
    "Base",
    "Usuario",
    "SesionRevocada",
    "Categoria",
    "Servicio",
    "Promocion",
    "Turno",
    "Departamento",
    "Inquilino",
    "Alquiler",
    "Pago",
    "Alumno",
]
