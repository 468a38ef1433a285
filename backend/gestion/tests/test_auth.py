from datetime import datetime, timedelta, timezone

from conftest import PASSWORD, crear_usuario

from gestion.models.sesion_revocada import SesionRevocada


def test_register_and_login_cliente(client):
    r = client.post("/auth/register", json={
        "usuario": "lucia",
        "contrasena": "clave-lucia",
        "nombre": "Lucía",
        "email": "lucia@test.com",
    })
    assert r.status_code == 200
    assert r.json()["status"] == "success"
    assert r.json()["id"]

    r = client.post("/auth/login", json={"usuario": "lucia", "contrasena": "clave-lucia"})
    assert r.status_code == 200
    body = r.json()
    assert body["rol"] == "cliente"
    assert body["usuario"] == "lucia"
    assert body["token_type"] == "bearer"
    assert "access_token" in body and "refresh_token" in body


def test_login_with_email(client):
    client.post("/auth/register", json={"usuario": "ana", "contrasena": "x1", "email": "ana@test.com"})
    r = client.post("/auth/login", json={"usuario": "ana@test.com", "contrasena": "x1"})
    assert r.status_code == 200


def test_login_invalid_credentials_uses_error_envelope(client):
    crear_usuario("pepe", "cliente")
    r = client.post("/auth/login", json={"usuario": "pepe", "contrasena": "otra"})
    assert r.status_code == 401
    assert r.json() == {"status": "error", "detail": "Credenciales inválidas"}


def test_register_missing_fields(client):
    r = client.post("/auth/register", json={"usuario": "solo-usuario"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Faltan campos"


def test_register_duplicate_usuario(client):
    payload = {"usuario": "repetido", "contrasena": "abc"}
    assert client.post("/auth/register", json=payload).status_code == 200
    r = client.post("/auth/register", json=payload)
    assert r.status_code == 409


def test_register_staff_role_requires_admin(client, dueno_headers, cliente_headers):
    payload = {"usuario": "nuevo-ayudante", "contrasena": "abc", "rol": "ayudante"}
    assert client.post("/auth/register", json=payload).status_code == 403
    assert client.post("/auth/register", json=payload, headers=cliente_headers).status_code == 403

    r = client.post("/auth/register", json=payload, headers=dueno_headers)
    assert r.status_code == 200
    r = client.post("/auth/login", json={"usuario": "nuevo-ayudante", "contrasena": "abc"})
    assert r.json()["rol"] == "ayudante"


def test_register_unknown_role_is_rejected(client):
    r = client.post("/auth/register", json={"usuario": "x", "contrasena": "y", "rol": "superuser"})
    assert r.status_code == 422
    assert r.json()["status"] == "error"


def test_me_requires_token(client, cliente_headers):
    r = client.get("/auth/me")
    assert r.status_code == 401
    assert r.json()["detail"] == "No autorizado"

    r = client.get("/auth/me", headers={"Authorization": "Bearer basura"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Token inválido"

    r = client.get("/auth/me", headers=cliente_headers)
    assert r.status_code == 200
    assert r.json()["msg"] == "Bienvenido clienta"
    assert r.json()["rol"] == "cliente"


def test_logout_revokes_token(client, cliente_headers):
    assert client.get("/auth/me", headers=cliente_headers).status_code == 200
    r = client.post("/auth/logout", headers=cliente_headers)
    assert r.status_code == 200
    assert r.json()["message"] == "Sesión cerrada"

    r = client.get("/auth/me", headers=cliente_headers)
    assert r.status_code == 401
    assert r.json()["detail"] == "Token revocado"


def test_refresh_token(client):
    crear_usuario("refresca", "cliente")
    tokens = client.post("/auth/login", json={"usuario": "refresca", "contrasena": PASSWORD}).json()

    r = client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert r.status_code == 200
    assert r.json()["access_token"]

    # Un access token no sirve como refresh
    r = client.post("/auth/refresh", json={"refresh_token": tokens["access_token"]})
    assert r.status_code == 401


def test_usuarios_listing_is_admin_only(client, admin_headers, cliente_headers):
    assert client.get("/usuarios/", headers=cliente_headers).status_code == 403

    r = client.get("/usuarios/", headers=admin_headers)
    assert r.status_code == 200
    usuarios = r.json()
    assert {u["usuario"] for u in usuarios} == {"admin", "clienta"}
    assert all("hashed_password" not in u for u in usuarios)


def test_delete_usuario(client, admin_headers):
    user_id = crear_usuario("borrable", "cliente")
    r = client.delete(f"/usuarios/{user_id}", headers=admin_headers)
    assert r.status_code == 200
    assert client.delete(f"/usuarios/{user_id}", headers=admin_headers).status_code == 404


def _login_tokens(client, usuario):
    r = client.post("/auth/login", json={"usuario": usuario, "contrasena": PASSWORD})
    assert r.status_code == 200, r.text
    return r.json()


def test_logout_revokes_refresh_token(client):
    crear_usuario("saliente", "cliente")
    tokens = _login_tokens(client, "saliente")
    headers = {"Authorization": f"Bearer {tokens['access_token']}"}

    assert client.post("/auth/logout", headers=headers).status_code == 200
    r = client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert r.status_code == 401
    assert r.json()["detail"] == "Token revocado"


def test_logout_with_refreshed_token_closes_whole_session(client):
    crear_usuario("encadenada", "cliente")
    original = _login_tokens(client, "encadenada")
    renovado = client.post("/auth/refresh", json={"refresh_token": original["refresh_token"]}).json()

    r = client.post("/auth/logout", headers={"Authorization": f"Bearer {renovado['access_token']}"})
    assert r.status_code == 200
    assert client.get("/auth/me", headers={"Authorization": f"Bearer {original['access_token']}"}).status_code == 401
    assert client.post("/auth/refresh", json={"refresh_token": original["refresh_token"]}).status_code == 401


def test_logout_keeps_other_sessions(client):
    crear_usuario("dos-equipos", "cliente")
    celular = _login_tokens(client, "dos-equipos")
    notebook = _login_tokens(client, "dos-equipos")

    client.post("/auth/logout", headers={"Authorization": f"Bearer {celular['access_token']}"})
    r = client.get("/auth/me", headers={"Authorization": f"Bearer {notebook['access_token']}"})
    assert r.status_code == 200


def test_logout_purges_expired_sessions(client, db, cliente_headers):
    ahora = datetime.now(timezone.utc)
    db.add_all([
        SesionRevocada(sid="vencida", usuario_id=None, expira_en=ahora - timedelta(days=1)),
        SesionRevocada(sid="vigente", usuario_id=None, expira_en=ahora + timedelta(days=1)),
    ])
    db.commit()

    assert client.post("/auth/logout", headers=cliente_headers).status_code == 200

    db.expire_all()
    sids = {s.sid for s in db.query(SesionRevocada).all()}
    assert "vencida" not in sids
    assert "vigente" in sids
    assert len(sids) == 2
