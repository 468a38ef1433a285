from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, condecimal
from sqlalchemy.orm import Session

from gestion.core.crud import CrudGenerico
from gestion.core.database import get_db
from gestion.core.deps import require_alquiler_staff
from gestion.core.responses import MessageResponse, get_or_404
from gestion.models.alquiler import Alquiler
from gestion.models.pago import EstadoPago, Pago


router = APIRouter(dependencies=[Depends(require_alquiler_staff)])
crud = CrudGenerico(Pago)

Monto = condecimal(ge=0, max_digits=10, decimal_places=2)


class PagoCreate(BaseModel):
    alquiler_id: int
    monto: Monto
    estado: EstadoPago = EstadoPago.pagado
    fecha_pago: Optional[date] = None
    forma_pago: Optional[str] = None


class PagoUpdate(BaseModel):
    monto: Optional[Monto] = None
    estado: Optional[EstadoPago] = None
    fecha_pago: Optional[date] = None
    forma_pago: Optional[str] = None


class PagoOut(BaseModel):
    id: int
    alquiler_id: int
    monto: float
    estado: str
    fecha_pago: Optional[date]
    forma_pago: Optional[str]

    class Config:
        from_attributes = True


@router.get("/", response_model=List[PagoOut])
def listar_pagos(
    db: Session = Depends(get_db),
    estado: Optional[EstadoPago] = Query(None),
    alquiler_id: Optional[int] = Query(None),
):
    query = db.query(Pago)
    if estado is not None:
        query = query.filter(Pago.estado == estado.value)
    if alquiler_id is not None:
        query = query.filter(Pago.alquiler_id == alquiler_id)
    return query.order_by(Pago.id).all()


@router.get("/{pago_id}", response_model=PagoOut)
def ver_pago(pago_id: int, db: Session = Depends(get_db)):
    return get_or_404(crud.obtener_por_id(db, pago_id), "Pago no encontrado")


@router.post("/", response_model=MessageResponse)
def registrar_pago(data: PagoCreate, db: Session = Depends(get_db)):
    if not db.query(Alquiler).filter(Alquiler.id == data.alquiler_id).first():
        raise HTTPException(status_code=404, detail="Alquiler no encontrado")
    datos = data.model_dump()
    datos["estado"] = data.estado.value
    # Un pago efectivamente cobrado sin fecha se registra hoy
    if datos["fecha_pago"] is None and data.estado != EstadoPago.debe:
        datos["fecha_pago"] = date.today()
    pago = crud.insertar(db, datos)
    return MessageResponse(message="Pago registrado", id=pago.id)


@router.put("/{pago_id}", response_model=MessageResponse)
def actualizar_pago(pago_id: int, data: PagoUpdate, db: Session = Depends(get_db)):
    cambios = data.model_dump(exclude_unset=True)
    if cambios.get("estado") is not None:
        cambios["estado"] = cambios["estado"].value
    elif "estado" in cambios:
        del cambios["estado"]
    if cambios.get("monto", 0) is None:
        del cambios["monto"]
    pago = get_or_404(crud.obtener_por_id(db, pago_id), "Pago no encontrado")
    estado = cambios.get("estado", pago.estado)
    fecha_pago = cambios["fecha_pago"] if "fecha_pago" in cambios else pago.fecha_pago
    if fecha_pago is None and estado != EstadoPago.debe.value:
        cambios["fecha_pago"] = date.today()
    crud.actualizar(db, pago_id, cambios)
    return MessageResponse(message="Pago actualizado", id=pago_id)


@router.delete("/{pago_id}", response_model=MessageResponse)
def eliminar_pago(pago_id: int, db: Session = Depends(get_db)):
    if not crud.eliminar(db, pago_id):
        raise HTTPException(status_code=404, detail="Pago no encontrado")
    return MessageResponse(message="Pago eliminado", id=pago_id)
