from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, EmailStr, field_validator
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from gestion.core.crud import CrudGenerico
from gestion.core.database import get_db
from gestion.core.responses import MessageResponse, get_or_404
from gestion.models.alumno import Alumno


router = APIRouter()
crud = CrudGenerico(Alumno)


def normalizar_nombre(value: Optional[str]) -> Optional[str]:
    """'  juan   CARLOS ' -> 'Juan Carlos'"""
    if value is None:
        return None
    palabras = value.split()
    if not palabras:
        raise ValueError("no puede estar vacío")
    return " ".join(p.capitalize() for p in palabras)


class AlumnoCreate(BaseModel):
    nombre: str
    apellido: str
    email: Optional[EmailStr] = None
    curso: Optional[str] = None

    @field_validator("nombre", "apellido")
    @classmethod
    def normalizar_campos(cls, value):
        return normalizar_nombre(value)


class AlumnoUpdate(BaseModel):
    nombre: Optional[str] = None
    apellido: Optional[str] = None
    email: Optional[EmailStr] = None
    curso: Optional[str] = None

    @field_validator("nombre", "apellido")
    @classmethod
    def normalizar_campos(cls, value):
        return normalizar_nombre(value)


class AlumnoOut(BaseModel):
    id: int
    nombre: str
    apellido: str
    email: Optional[str]
    curso: Optional[str]

    class Config:
        from_attributes = True


@router.get("/", response_model=List[AlumnoOut])
def listar_alumnos(
    db: Session = Depends(get_db),
    curso: Optional[str] = Query(None),
    q: Optional[str] = Query(None, description="Buscar por nombre o apellido"),
):
    query = db.query(Alumno)
    if curso:
        query = query.filter(Alumno.curso == curso)
    if q:
        qn = q.strip().lower()
        if qn:
            query = query.filter(
                or_(func.lower(Alumno.nombre).like(f"%{qn}%"), func.lower(Alumno.apellido).like(f"%{qn}%"))
            )
    return query.order_by(Alumno.apellido, Alumno.nombre).all()


@router.get("/{alumno_id}", response_model=AlumnoOut)
def ver_alumno(alumno_id: int, db: Session = Depends(get_db)):
    return get_or_404(crud.obtener_por_id(db, alumno_id), "Alumno no encontrado")


@router.post("/", response_model=MessageResponse)
def crear_alumno(data: AlumnoCreate, db: Session = Depends(get_db)):
    alumno = crud.insertar(db, data.model_dump())
    return MessageResponse(message="Alumno registrado", id=alumno.id)


@router.put("/{alumno_id}", response_model=MessageResponse)
def actualizar_alumno(alumno_id: int, data: AlumnoUpdate, db: Session = Depends(get_db)):
    cambios = data.model_dump(exclude_unset=True)
    for campo in ("nombre", "apellido"):
        if campo in cambios and cambios[campo] is None:
            raise HTTPException(status_code=400, detail=f"{campo} no puede quedar vacío")
    get_or_404(crud.actualizar(db, alumno_id, cambios), "Alumno no encontrado")
    return MessageResponse(message="Alumno actualizado", id=alumno_id)


@router.delete("/{alumno_id}", response_model=MessageResponse)
def eliminar_alumno(alumno_id: int, db: Session = Depends(get_db)):
    if not crud.eliminar(db, alumno_id):
        raise HTTPException(status_code=404, detail="Alumno no encontrado")
    return MessageResponse(message="Alumno eliminado", id=alumno_id)
