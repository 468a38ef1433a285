import os
import tempfile

# Configurar antes de importar la app: el engine se crea al importar gestion.core.database
_tmpdir = tempfile.mkdtemp(prefix="gestion-tests-")
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmpdir, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["SEED_DEMO"] = "false"

import pytest
from fastapi.testclient import TestClient

from gestion.core.database import SessionLocal, engine
from gestion.core.security import hash_password
from gestion.main import app
from gestion.models import Base
from gestion.models.usuario import Usuario


PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def _reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def crear_usuario(usuario: str, rol: str) -> int:
    with SessionLocal() as session:
        user = Usuario(usuario=usuario, nombre=usuario.title(), hashed_password=hash_password(PASSWORD), rol=rol)
        session.add(user)
        session.commit()
        return user.id


def login(client: TestClient, usuario: str) -> dict:
    r = client.post("/auth/login", json={"usuario": usuario, "contrasena": PASSWORD})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    crear_usuario("admin", "admin")
    return login(client, "admin")


@pytest.fixture
def cliente_headers(client):
    crear_usuario("clienta", "cliente")
    return login(client, "clienta")


@pytest.fixture
def dueno_headers(client):
    crear_usuario("dueno", "dueno")
    return login(client, "dueno")


@pytest.fixture
def ayudante_headers(client):
    crear_usuario("ayudante", "ayudante")
    return login(client, "ayudante")
