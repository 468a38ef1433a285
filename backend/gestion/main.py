import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gestion.core.config import settings
from gestion.core.database import SessionLocal, init_db
from gestion.core.errors import register_exception_handlers
from gestion.core.logging_config import configure_logging
from gestion.routes.alquileres import router as alquileres_router
from gestion.routes.alumnos import router as alumnos_router
from gestion.routes.auth import router as auth_router
from gestion.routes.categorias import router as categorias_router
from gestion.routes.departamentos import router as departamentos_router
from gestion.routes.estadisticas import router as estadisticas_router
from gestion.routes.health import router as health_router
from gestion.routes.inquilinos import router as inquilinos_router
from gestion.routes.pagos import router as pagos_router
from gestion.routes.promociones import router as promociones_router
from gestion.routes.reportes import router as reportes_router
from gestion.routes.servicios import router as servicios_router
from gestion.routes.turnos import router as turnos_router
from gestion.routes.usuarios import router as usuarios_router
from gestion.services.seed import seed_demo


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    # Only seed in development or when explicitly requested
    if settings.env == "dev" or settings.seed_demo:
        with SessionLocal() as db:
            if seed_demo(db):
                logger.info("Demo data loaded")
    yield


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="Gestión API", version="0.1.0", lifespan=lifespan)

    origins = settings.cors_origins
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router, prefix="/auth", tags=["auth"])
    app.include_router(usuarios_router, prefix="/usuarios", tags=["usuarios"])

    # Estética
    app.include_router(categorias_router, prefix="/estetica/categorias", tags=["estetica"])
    app.include_router(servicios_router, prefix="/estetica/servicios", tags=["estetica"])
    app.include_router(promociones_router, prefix="/estetica/promociones", tags=["estetica"])
    app.include_router(turnos_router, prefix="/estetica/turnos", tags=["estetica"])
    app.include_router(estadisticas_router, prefix="/estetica/estadisticas", tags=["estetica"])

    # Alquileres
    app.include_router(departamentos_router, prefix="/alquiler/departamentos", tags=["alquiler"])
    app.include_router(inquilinos_router, prefix="/alquiler/inquilinos", tags=["alquiler"])
    app.include_router(alquileres_router, prefix="/alquiler/alquileres", tags=["alquiler"])
    app.include_router(pagos_router, prefix="/alquiler/pagos", tags=["alquiler"])
    app.include_router(reportes_router, prefix="/alquiler/reportes", tags=["alquiler"])

    app.include_router(alumnos_router, prefix="/alumnos", tags=["alumnos"])

    return app


app = create_app()
