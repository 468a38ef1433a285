"""Manejo centralizado de errores: todas las respuestas de error comparten el sobre
``{"status": "error", "detail": <mensaje>}``."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def _flatten_detail(detail: Any) -> str:
    if isinstance(detail, str):
        return detail
    if isinstance(detail, dict):
        if "detail" in detail and isinstance(detail["detail"], str):
            return detail["detail"]
        return "; ".join(f"{key}: {value}" for key, value in detail.items())
    if isinstance(detail, Iterable) and not isinstance(detail, (bytes, bytearray)):
        return "; ".join(_flatten_detail(item) for item in detail)
    if detail is None:
        return "Ocurrió un error"
    return str(detail)


def error_response(status_code: int, detail: Any, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "detail": _flatten_detail(detail)},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):  # type: ignore[override]
        return error_response(exc.status_code, exc.detail, getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):  # type: ignore[override]
        messages = []
        for error in exc.errors():
            location = [str(loc) for loc in error.get("loc", []) if loc != "body"]
            message = error.get("msg", "Dato inválido")
            messages.append(f"{'.'.join(location)}: {message}" if location else message)
        return error_response(422, "; ".join(messages) if messages else "Datos inválidos")

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):  # type: ignore[override]
        logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
        return error_response(409, "El registro entra en conflicto con datos existentes")

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):  # type: ignore[override]
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return error_response(500, "Error de base de datos")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):  # type: ignore[override]
        logger.exception("Unhandled exception while processing %s %s", request.method, request.url)
        return error_response(500, "Error interno del servidor")


__all__ = ["register_exception_handlers", "error_response"]
