import pytest

from gestion.routes.alumnos import normalizar_nombre


@pytest.mark.parametrize("raw,expected", [
    ("juan", "Juan"),
    ("  juan   CARLOS ", "Juan Carlos"),
    ("MARÍA josé", "María José"),
])
def test_normalizar_nombre(raw, expected):
    assert normalizar_nombre(raw) == expected


def test_normalizar_nombre_vacio():
    with pytest.raises(ValueError):
        normalizar_nombre("   ")
    assert normalizar_nombre(None) is None


def test_alumnos_crud(client):
    r = client.post("/alumnos/", json={"nombre": "  lucía ", "apellido": "GÓMEZ", "email": "lucia@demo.com", "curso": "3A"})
    assert r.status_code == 200
    assert r.json()["message"] == "Alumno registrado"
    alumno_id = r.json()["id"]

    r = client.get(f"/alumnos/{alumno_id}")
    assert r.json() == {"id": alumno_id, "nombre": "Lucía", "apellido": "Gómez", "email": "lucia@demo.com", "curso": "3A"}

    r = client.put(f"/alumnos/{alumno_id}", json={"apellido": "de la  torre"})
    assert r.status_code == 200
    assert client.get(f"/alumnos/{alumno_id}").json()["apellido"] == "De La Torre"

    assert client.put(f"/alumnos/{alumno_id}", json={"nombre": None}).status_code == 400
    assert client.put("/alumnos/999", json={"curso": "1A"}).status_code == 404

    assert client.delete(f"/alumnos/{alumno_id}").status_code == 200
    assert client.get(f"/alumnos/{alumno_id}").status_code == 404
    assert client.delete(f"/alumnos/{alumno_id}").status_code == 404


def test_alumnos_listing_filters(client):
    for nombre, apellido, curso in [("Ana", "Zapata", "1A"), ("Bruno", "Alvarez", "2B"), ("Carla", "Alvarez", "1A")]:
        client.post("/alumnos/", json={"nombre": nombre, "apellido": apellido, "curso": curso})

    assert [a["nombre"] for a in client.get("/alumnos/").json()] == ["Bruno", "Carla", "Ana"]
    assert [a["nombre"] for a in client.get("/alumnos/", params={"curso": "1A"}).json()] == ["Carla", "Ana"]
    assert [a["nombre"] for a in client.get("/alumnos/", params={"q": "zap"}).json()] == ["Ana"]


def test_alumno_validation(client):
    assert client.post("/alumnos/", json={"nombre": "   ", "apellido": "X"}).status_code == 422
    assert client.post("/alumnos/", json={"nombre": "Ana"}).status_code == 422
    assert client.post("/alumnos/", json={"nombre": "Ana", "apellido": "X", "email": "no-es-mail"}).status_code == 422
