from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from gestion.core.database import get_db
from gestion.core.deps import require_admin
from gestion.core.responses import MessageResponse, get_or_404
from gestion.models.usuario import Usuario


router = APIRouter()


class UsuarioOut(BaseModel):
    id: int
    usuario: str
    nombre: Optional[str] = None
    email: Optional[str] = None
    rol: str
    created_at: datetime

    class Config:
        from_attributes = True


@router.get("/", response_model=List[UsuarioOut])
def listar_usuarios(
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin),
):
    return db.query(Usuario).order_by(Usuario.id.desc()).all()


@router.delete("/{usuario_id}", response_model=MessageResponse)
def eliminar_usuario(
    usuario_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin),
):
    user = get_or_404(db.query(Usuario).filter(Usuario.id == usuario_id).first(), "Usuario no encontrado")
    if user.id == current_user.id:
        raise HTTPException(status_code=400, detail="No puede eliminar su propio usuario")
    db.delete(user)
    db.commit()
    return MessageResponse(message="Usuario eliminado", id=usuario_id)
