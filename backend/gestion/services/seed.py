import logging
from datetime import date, datetime, timedelta
from decimal import Decimal

from sqlalchemy.orm import Session

from gestion.core.roles import Role
from gestion.core.security import hash_password
from gestion.models.alquiler import Alquiler, EstadoAlquiler
from gestion.models.categoria import Categoria
from gestion.models.departamento import Departamento, EstadoDepartamento
from gestion.models.inquilino import Inquilino
from gestion.models.pago import EstadoPago, Pago
from gestion.models.promocion import Promocion
from gestion.models.servicio import Servicio
from gestion.models.turno import Turno
from gestion.models.usuario import Usuario


logger = logging.getLogger(__name__)

DEMO_PASSWORD = "secret123"

DEMO_USERS = [
    ("admin", "Administración Estética", "admin@demo.com", Role.admin),
    ("cliente", "Clienta Demo", "cliente@demo.com", Role.cliente),
    ("dueno", "Dueño Alquileres", "dueno@demo.com", Role.dueno),
    ("ayudante", "Ayudante Alquileres", "ayudante@demo.com", Role.ayudante),
]


def _seed_usuarios(db: Session) -> dict:
    usuarios = {}
    for usuario, nombre, email, rol in DEMO_USERS:
        user = Usuario(
            usuario=usuario,
            nombre=nombre,
            email=email,
            hashed_password=hash_password(DEMO_PASSWORD),
            rol=rol.value,
        )
        db.add(user)
        usuarios[usuario] = user
    db.flush()
    return usuarios


def _seed_estetica(db: Session, cliente: Usuario) -> None:
    faciales = Categoria(nombre="Faciales")
    corporales = Categoria(nombre="Corporales")
    db.add_all([faciales, corporales])
    db.flush()

    limpieza = Servicio(
        titulo="Limpieza facial profunda",
        descripcion="Limpieza, exfoliación e hidratación",
        precio=Decimal("8500"),
        descuento=Decimal("10"),
        categoria_id=faciales.id,
    )
    masaje = Servicio(
        titulo="Terapia de masaje",
        descripcion="Masaje descontracturante de 60 minutos",
        precio=Decimal("12000"),
        descuento=Decimal("0"),
        categoria_id=corporales.id,
    )
    db.add_all([limpieza, masaje])
    db.flush()

    hoy = date.today()
    db.add(
        Promocion(
            titulo="Mes de la piel",
            descripcion="20% en todos los faciales",
            descuento_porcentaje=Decimal("20"),
            fecha_inicio=hoy.replace(day=1),
            fecha_fin=hoy.replace(day=1) + timedelta(days=27),
        )
    )
    manana = datetime.combine(hoy + timedelta(days=1), datetime.min.time()).replace(hour=10)
    db.add(Turno(fecha_hora=manana, usuario_id=cliente.id, servicio_id=limpieza.id))


def _seed_alquileres(db: Session) -> None:
    departamentos = {
        "101": Departamento(numero="101", capacidad=4, comodidades="WiFi, TV, Cocina completa, Aire acondicionado",
                            estado=EstadoDepartamento.ocupado.value, tarifa_diaria=Decimal("1500")),
        "102": Departamento(numero="102", capacidad=2, comodidades="WiFi, TV, Kitchenette",
                            estado=EstadoDepartamento.libre.value, tarifa_diaria=Decimal("1200")),
        "201": Departamento(numero="201", capacidad=6, comodidades="WiFi, TV, Cocina completa, Aire acondicionado, Balcón",
                            estado=EstadoDepartamento.ocupado.value, tarifa_diaria=Decimal("2000")),
        "202": Departamento(numero="202", capacidad=4, comodidades="WiFi, TV, Cocina completa, Aire acondicionado",
                            estado=EstadoDepartamento.reservado.value, tarifa_diaria=Decimal("1800")),
    }
    db.add_all(departamentos.values())

    juan = Inquilino(nombre_completo="Juan Pérez", dni="12345678", telefono="+54 9 11 1234-5678",
                     email="juan.perez@email.com", direccion_origen="Buenos Aires, Argentina",
                     marca_vehiculo="Toyota", modelo_vehiculo="Corolla", patente_vehiculo="ABC123")
    maria = Inquilino(nombre_completo="María García", dni="87654321", telefono="+54 9 11 8765-4321",
                      email="maria.garcia@email.com", direccion_origen="Córdoba, Argentina",
                      marca_vehiculo="Ford", modelo_vehiculo="Focus", patente_vehiculo="XYZ789")
    db.add_all([juan, maria])
    db.flush()

    hoy = date.today()
    alquiler_juan = Alquiler(departamento_id=departamentos["101"].id, inquilino_id=juan.id,
                             estado=EstadoAlquiler.en_curso.value, fecha_inicio=hoy - timedelta(days=3),
                             fecha_fin=hoy + timedelta(days=4))
    alquiler_maria = Alquiler(departamento_id=departamentos["201"].id, inquilino_id=maria.id,
                              estado=EstadoAlquiler.en_curso.value, fecha_inicio=hoy - timedelta(days=1),
                              fecha_fin=hoy + timedelta(days=6))
    db.add_all([alquiler_juan, alquiler_maria])
    db.flush()

    db.add_all([
        Pago(alquiler_id=alquiler_juan.id, monto=Decimal("7500"), estado=EstadoPago.pagado.value,
             fecha_pago=hoy - timedelta(days=3), forma_pago="Efectivo"),
        Pago(alquiler_id=alquiler_maria.id, monto=Decimal("5000"), estado=EstadoPago.parcial.value,
             fecha_pago=hoy - timedelta(days=1), forma_pago="Transferencia"),
        Pago(alquiler_id=alquiler_maria.id, monto=Decimal("9000"), estado=EstadoPago.debe.value),
    ])


def seed_demo(db: Session) -> bool:
    """Carga datos de demostración una sola vez. Devuelve False si ya existían."""
    if db.query(Usuario).filter(Usuario.usuario == "admin").first():
        return False
    usuarios = _seed_usuarios(db)
    _seed_estetica(db, usuarios["cliente"])
    _seed_alquileres(db)
    db.commit()
    logger.info("Demo data seeded (password for every demo user: %s)", DEMO_PASSWORD)
    return True
