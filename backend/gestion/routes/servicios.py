import logging
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, condecimal, constr
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from gestion.core.crud import CrudGenerico
from gestion.core.database import get_db
from gestion.core.deps import require_estetica_admin
from gestion.core.responses import MessageResponse, get_or_404
from gestion.models.categoria import Categoria
from gestion.models.servicio import Servicio
from gestion.services.precios import precio_con_descuento


router = APIRouter()
crud = CrudGenerico(Servicio)
logger = logging.getLogger(__name__)

Porcentaje = condecimal(ge=0, le=100, max_digits=5, decimal_places=2)
Precio = condecimal(ge=0, max_digits=10, decimal_places=2)


class ServicioCreate(BaseModel):
    titulo: constr(strip_whitespace=True, min_length=1, max_length=255)
    descripcion: str
    precio: Precio
    descuento: Porcentaje = Decimal("0")
    imagen: Optional[str] = None
    categoria_id: Optional[int] = None


class ServicioUpdate(BaseModel):
    titulo: Optional[constr(strip_whitespace=True, min_length=1, max_length=255)] = None
    descripcion: Optional[str] = None
    precio: Optional[Precio] = None
    descuento: Optional[Porcentaje] = None
    imagen: Optional[str] = None
    categoria_id: Optional[int] = None


class ServicioOut(BaseModel):
    id: int
    titulo: str
    descripcion: str
    precio: float
    descuento: float
    precio_final: float
    imagen: Optional[str]
    categoria_id: Optional[int]
    categoria: Optional[str]


def _to_out(servicio: Servicio) -> ServicioOut:
    return ServicioOut(
        id=servicio.id,
        titulo=servicio.titulo,
        descripcion=servicio.descripcion,
        precio=float(servicio.precio),
        descuento=float(servicio.descuento or 0),
        precio_final=float(precio_con_descuento(servicio.precio, servicio.descuento)),
        imagen=servicio.imagen,
        categoria_id=servicio.categoria_id,
        categoria=servicio.categoria.nombre if servicio.categoria else None,
    )


def _check_categoria(db: Session, categoria_id: Optional[int]) -> None:
    if categoria_id is not None and not db.query(Categoria).filter(Categoria.id == categoria_id).first():
        raise HTTPException(status_code=404, detail="Categoría no encontrada")


@router.get("/", response_model=List[ServicioOut])
def listar_servicios(
    db: Session = Depends(get_db),
    categoria_id: Optional[int] = Query(None),
    q: Optional[str] = Query(None, description="Buscar por título o descripción"),
):
    logger.info("listar_servicios categoria_id=%s q=%s", categoria_id, q)
    query = db.query(Servicio).options(joinedload(Servicio.categoria))
    if categoria_id is not None:
        query = query.filter(Servicio.categoria_id == categoria_id)
    if q:
        qn = q.strip().lower()
        if qn:
            query = query.filter(
                or_(
                    func.lower(Servicio.titulo).like(f"%{qn}%"),
                    func.lower(Servicio.descripcion).like(f"%{qn}%"),
                )
            )
    return [_to_out(s) for s in query.order_by(Servicio.id).all()]


@router.get("/{servicio_id}", response_model=ServicioOut)
def ver_servicio(servicio_id: int, db: Session = Depends(get_db)):
    servicio = get_or_404(crud.obtener_por_id(db, servicio_id), "Servicio no encontrado")
    return _to_out(servicio)


@router.post("/", response_model=MessageResponse, dependencies=[Depends(require_estetica_admin)])
def crear_servicio(data: ServicioCreate, db: Session = Depends(get_db)):
    _check_categoria(db, data.categoria_id)
    servicio = crud.insertar(db, data.model_dump())
    return MessageResponse(message="Servicio agregado correctamente", id=servicio.id)


@router.put("/{servicio_id}", response_model=MessageResponse, dependencies=[Depends(require_estetica_admin)])
def actualizar_servicio(servicio_id: int, data: ServicioUpdate, db: Session = Depends(get_db)):
    cambios = data.model_dump(exclude_unset=True)
    for campo in ("titulo", "descripcion", "precio", "descuento"):
        if campo in cambios and cambios[campo] is None:
            raise HTTPException(status_code=400, detail=f"{campo} no puede quedar vacío")
    if "categoria_id" in cambios:
        _check_categoria(db, cambios["categoria_id"])
    get_or_404(crud.actualizar(db, servicio_id, cambios), "Servicio no encontrado")
    return MessageResponse(message="Servicio actualizado correctamente", id=servicio_id)


@router.delete("/{servicio_id}", response_model=MessageResponse, dependencies=[Depends(require_estetica_admin)])
def eliminar_servicio(servicio_id: int, db: Session = Depends(get_db)):
    if not crud.eliminar(db, servicio_id):
        raise HTTPException(status_code=404, detail="Servicio no encontrado")
    return MessageResponse(message="Servicio eliminado correctamente", id=servicio_id)
