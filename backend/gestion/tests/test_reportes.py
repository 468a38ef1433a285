from datetime import date
from decimal import Decimal

import pytest

from gestion.models.alquiler import Alquiler
from gestion.models.departamento import Departamento
from gestion.models.inquilino import Inquilino
from gestion.models.pago import Pago
from gestion.services import reportes_service
from gestion.services.panel_service import render_panel


@pytest.fixture
def datos(db):
    libre = Departamento(numero="1A", capacidad=2, estado="libre", tarifa_diaria=Decimal("10000"))
    ocupado = Departamento(numero="2B", capacidad=4, estado="ocupado", tarifa_diaria=Decimal("20000"))
    reservado = Departamento(numero="3C", capacidad=3, estado="reservado", tarifa_diaria=Decimal("15000"))
    ana = Inquilino(nombre_completo="Ana Pérez")
    bruno = Inquilino(nombre_completo="Bruno <b>Díaz</b>")
    db.add_all([libre, ocupado, reservado, ana, bruno])
    db.flush()

    activo = Alquiler(departamento_id=ocupado.id, inquilino_id=ana.id, estado="en curso", fecha_inicio=date(2025, 3, 1))
    terminado = Alquiler(departamento_id=libre.id, inquilino_id=bruno.id, estado="finalizado",
                         fecha_inicio=date(2025, 1, 1), fecha_fin=date(2025, 1, 15))
    db.add_all([activo, terminado])
    db.flush()

    db.add_all([
        Pago(alquiler_id=activo.id, monto=Decimal("100.50"), estado="Pagado", fecha_pago=date(2025, 3, 1)),
        Pago(alquiler_id=activo.id, monto=Decimal("50"), estado="Pagado", fecha_pago=date(2025, 3, 1)),
        Pago(alquiler_id=activo.id, monto=Decimal("30"), estado="Parcial", fecha_pago=date(2025, 3, 5)),
        Pago(alquiler_id=terminado.id, monto=Decimal("80"), estado="Debe", fecha_pago=None),
        Pago(alquiler_id=terminado.id, monto=Decimal("999"), estado="Pagado", fecha_pago=date(2025, 4, 1)),
    ])
    db.commit()
    return {"activo": activo.id}


def test_departamentos_libres(db, datos):
    [fila] = reportes_service.departamentos_libres(db)
    assert fila["numero"] == "1A"
    assert fila["estado"] == "libre"
    assert fila["tarifa_diaria"] == 10000.0


def test_alquileres_activos(db, datos):
    [fila] = reportes_service.alquileres_activos(db)
    assert fila["id"] == datos["activo"]
    assert fila["nombre_completo"] == "Ana Pérez"
    assert fila["departamento"] == "2B"
    assert fila["fecha_inicio"] == "2025-03-01"
    assert fila["fecha_fin"] is None


def test_inquilinos_con_deuda(db, datos):
    filas = reportes_service.inquilinos_con_deuda(db)
    assert [(f["nombre_completo"], f["estado"], f["monto"]) for f in filas] == [
        ("Ana Pérez", "Parcial", 30.0),
        ("Bruno <b>Díaz</b>", "Debe", 80.0),
    ]


def test_ingresos_por_dia(db, datos):
    filas = reportes_service.ingresos_por_dia(db, date(2025, 3, 1), date(2025, 3, 31))
    assert filas == [
        {"dia": "2025-03-01", "total": 150.5},
        {"dia": "2025-03-05", "total": 30.0},
    ]
    with pytest.raises(ValueError):
        reportes_service.ingresos_por_dia(db, date(2025, 4, 1), date(2025, 3, 1))


def test_rango_por_defecto():
    hoy = date(2025, 5, 17)
    assert reportes_service.rango_por_defecto(None, None, hoy=hoy) == (date(2025, 5, 1), hoy)
    assert reportes_service.rango_por_defecto(date(2025, 1, 1), None, hoy=hoy) == (date(2025, 1, 1), hoy)
    assert reportes_service.rango_por_defecto(None, date(2025, 5, 10), hoy=hoy) == (date(2025, 5, 1), date(2025, 5, 10))


def test_reportes_endpoints(client, dueno_headers, datos):
    r = client.get("/alquiler/reportes/departamentos-libres", headers=dueno_headers)
    assert [d["numero"] for d in r.json()] == ["1A"]

    r = client.get("/alquiler/reportes/alquileres-activos", headers=dueno_headers)
    assert [a["departamento"] for a in r.json()] == ["2B"]

    r = client.get("/alquiler/reportes/inquilinos-deuda", headers=dueno_headers)
    assert len(r.json()) == 2

    r = client.get("/alquiler/reportes/ingresos-dia", params={"inicio": "2025-03-01", "fin": "2025-04-30"},
                   headers=dueno_headers)
    assert [f["total"] for f in r.json()] == [150.5, 30.0, 999.0]

    r = client.get("/alquiler/reportes/ingresos-dia", params={"inicio": "2025-04-30", "fin": "2025-03-01"},
                   headers=dueno_headers)
    assert r.status_code == 400


def test_reportes_require_staff(client, cliente_headers):
    assert client.get("/alquiler/reportes/panel").status_code == 401
    assert client.get("/alquiler/reportes/panel", headers=cliente_headers).status_code == 403


def test_panel_without_accion_shows_form(client, ayudante_headers):
    r = client.get("/alquiler/reportes/panel", headers=ayudante_headers)
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert '<select name="accion">' in r.text
    assert "<table" not in r.text
    assert "No se encontraron resultados." not in r.text


def test_panel_renders_table_and_escapes(client, dueno_headers, datos):
    r = client.get("/alquiler/reportes/panel", params={"accion": "deudas"}, headers=dueno_headers)
    assert r.status_code == 200
    assert "<th>nombre_completo</th>" in r.text
    assert "Ana Pérez" in r.text
    assert "&lt;b&gt;Díaz&lt;/b&gt;" in r.text
    assert "<b>Díaz</b>" not in r.text
    assert '<option value="deudas" selected>' in r.text


def test_panel_ingresos_keeps_range(client, dueno_headers, datos):
    r = client.get("/alquiler/reportes/panel",
                   params={"accion": "ingresos", "inicio": "2025-03-01", "fin": "2025-03-02"},
                   headers=dueno_headers)
    assert "<td>2025-03-01</td>" in r.text
    assert "2025-03-05" not in r.text
    assert 'value="2025-03-02"' in r.text


def test_panel_empty_result(client, dueno_headers):
    r = client.get("/alquiler/reportes/panel", params={"accion": "libres"}, headers=dueno_headers)
    assert "No se encontraron resultados." in r.text


def test_panel_unknown_accion(client, dueno_headers):
    r = client.get("/alquiler/reportes/panel", params={"accion": "borrar"}, headers=dueno_headers)
    assert r.status_code == 400
    assert r.json() == {"status": "error", "detail": "Acción desconocida: borrar"}


def test_render_panel_columns_follow_first_row():
    html = render_panel("libres", [{"numero": "1A", "estado": "libre"}, {"numero": "2B", "estado": None}])
    assert html.index("<th>numero</th>") < html.index("<th>estado</th>")
    assert "<td></td>" in html
