from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, condecimal, conint, constr
from sqlalchemy.orm import Session

from gestion.core.crud import CrudGenerico
from gestion.core.database import get_db
from gestion.core.deps import require_alquiler_staff
from gestion.core.responses import MessageResponse, get_or_404
from gestion.models.departamento import Departamento, EstadoDepartamento
from gestion.services.alquiler_service import verificar_sin_alquiler_activo


router = APIRouter(dependencies=[Depends(require_alquiler_staff)])
crud = CrudGenerico(Departamento)

Tarifa = condecimal(ge=0, max_digits=10, decimal_places=2)


class DepartamentoCreate(BaseModel):
    numero: constr(strip_whitespace=True, min_length=1, max_length=20)
    capacidad: conint(ge=1) = 1
    comodidades: Optional[str] = None
    estado: EstadoDepartamento = EstadoDepartamento.libre
    tarifa_diaria: Tarifa = 0


class DepartamentoUpdate(BaseModel):
    numero: Optional[constr(strip_whitespace=True, min_length=1, max_length=20)] = None
    capacidad: Optional[conint(ge=1)] = None
    comodidades: Optional[str] = None
    estado: Optional[EstadoDepartamento] = None
    tarifa_diaria: Optional[Tarifa] = None


class DepartamentoOut(BaseModel):
    id: int
    numero: str
    capacidad: int
    comodidades: Optional[str]
    estado: str
    tarifa_diaria: float

    class Config:
        from_attributes = True


def _numero_disponible(db: Session, numero: str, excluir_id: Optional[int] = None) -> None:
    query = db.query(Departamento).filter(Departamento.numero == numero)
    if excluir_id is not None:
        query = query.filter(Departamento.id != excluir_id)
    if query.first():
        raise HTTPException(status_code=409, detail=f"Ya existe el departamento {numero}")


@router.get("/", response_model=List[DepartamentoOut])
def listar_departamentos(
    db: Session = Depends(get_db),
    estado: Optional[EstadoDepartamento] = Query(None),
):
    query = db.query(Departamento)
    if estado is not None:
        query = query.filter(Departamento.estado == estado.value)
    return query.order_by(Departamento.numero).all()


@router.get("/{departamento_id}", response_model=DepartamentoOut)
def ver_departamento(departamento_id: int, db: Session = Depends(get_db)):
    return get_or_404(crud.obtener_por_id(db, departamento_id), "Departamento no encontrado")


@router.post("/", response_model=MessageResponse)
def crear_departamento(data: DepartamentoCreate, db: Session = Depends(get_db)):
    _numero_disponible(db, data.numero)
    datos = data.model_dump()
    datos["estado"] = data.estado.value
    departamento = crud.insertar(db, datos)
    return MessageResponse(message="Departamento creado", id=departamento.id)


@router.put("/{departamento_id}", response_model=MessageResponse)
def actualizar_departamento(departamento_id: int, data: DepartamentoUpdate, db: Session = Depends(get_db)):
    cambios = data.model_dump(exclude_unset=True, exclude_none=True)
    if "numero" in cambios:
        _numero_disponible(db, cambios["numero"], excluir_id=departamento_id)
    if "estado" in cambios:
        cambios["estado"] = cambios["estado"].value
    get_or_404(crud.actualizar(db, departamento_id, cambios), "Departamento no encontrado")
    return MessageResponse(message="Departamento actualizado", id=departamento_id)


@router.delete("/{departamento_id}", response_model=MessageResponse)
def eliminar_departamento(departamento_id: int, db: Session = Depends(get_db)):
    verificar_sin_alquiler_activo(db, departamento_id=departamento_id)
    if not crud.eliminar(db, departamento_id):
        raise HTTPException(status_code=404, detail="Departamento no encontrado")
    return MessageResponse(message="Departamento eliminado", id=departamento_id)
