"""Render del panel HTML de reportes de alquileres."""
from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape


TEMPLATES_PATH = Path(__file__).resolve().parent.parent / "templates"

ACCIONES = {
    "libres": "Departamentos libres",
    "activos": "Alquileres activos",
    "deudas": "Inquilinos con deuda",
    "ingresos": "Ingresos por día",
}

_environment = Environment(
    loader=FileSystemLoader(TEMPLATES_PATH),
    autoescape=select_autoescape(["html", "xml"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_panel(
    accion: Optional[str],
    resultado: List[Dict[str, Any]],
    inicio: Optional[date] = None,
    fin: Optional[date] = None,
) -> str:
    columnas = list(resultado[0].keys()) if resultado else []
    template = _environment.get_template("reportes_panel.html")
    return template.render(
        acciones=ACCIONES,
        accion=accion,
        columnas=columnas,
        resultado=resultado,
        inicio=inicio.isoformat() if inicio else "",
        fin=fin.isoformat() if fin else "",
    )
