from typing import Any, Optional

from fastapi import HTTPException, status
from pydantic import BaseModel


class MessageResponse(BaseModel):
    status: str = "success"
    message: str
    id: Optional[int] = None


def get_or_404(obj: Any, detail: str) -> Any:
    if obj is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return obj
