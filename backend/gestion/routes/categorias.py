from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, constr
from sqlalchemy.orm import Session

from gestion.core.crud import CrudGenerico
from gestion.core.database import get_db
from gestion.core.deps import require_estetica_admin
from gestion.core.responses import MessageResponse, get_or_404
from gestion.models.categoria import Categoria


router = APIRouter()
crud = CrudGenerico(Categoria)


class CategoriaIn(BaseModel):
    nombre: constr(strip_whitespace=True, min_length=1, max_length=100)


class CategoriaOut(BaseModel):
    id: int
    nombre: str

    class Config:
        from_attributes = True


@router.get("/", response_model=List[CategoriaOut])
def listar_categorias(db: Session = Depends(get_db)):
    return crud.obtener_todos(db)


@router.post("/", response_model=MessageResponse, dependencies=[Depends(require_estetica_admin)])
def crear_categoria(data: CategoriaIn, db: Session = Depends(get_db)):
    categoria = crud.insertar(db, data.model_dump())
    return MessageResponse(message="Categoría creada", id=categoria.id)


@router.put("/{categoria_id}", response_model=MessageResponse, dependencies=[Depends(require_estetica_admin)])
def actualizar_categoria(categoria_id: int, data: CategoriaIn, db: Session = Depends(get_db)):
    get_or_404(crud.actualizar(db, categoria_id, data.model_dump()), "Categoría no encontrada")
    return MessageResponse(message="Categoría actualizada", id=categoria_id)


@router.delete("/{categoria_id}", response_model=MessageResponse, dependencies=[Depends(require_estetica_admin)])
def eliminar_categoria(categoria_id: int, db: Session = Depends(get_db)):
    if not crud.eliminar(db, categoria_id):
        raise HTTPException(status_code=404, detail="Categoría no encontrada")
    return MessageResponse(message="Categoría eliminada", id=categoria_id)
