"""
===============================================================================
TARJETA CRC — wikicore/api/exception_handlers.py
===============================================================================

Responsabilidades:
  - Última red de la app: lo que ningún router tradujo sale como
    problem+json con code estable.
  - DatabaseError -> 503 con error_id (el mismo que quedó en el log del repo).
  - RequestValidationError -> 422 VALIDATION_ERROR (sin el input del cliente:
    puede traer passwords de share).
  - Cualquier otra excepción -> 500 INTERNAL_ERROR, logueada con stacktrace.

Colaboradores:
  - crosscutting.error_responses (problem, app_exception_handler)
  - crosscutting.exceptions (WikiCoreError, DatabaseError)
  - crosscutting.config.get_settings (detalle solo fuera de producción)
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    problem,
)
from ..crosscutting.exceptions import DatabaseError, WikiCoreError
from ..crosscutting.logger import logger


def _public_detail(detail: str, code: ErrorCode) -> str:
    return code.value if get_settings().is_production() else detail


async def _wikicore_error(
    request: Request, exc: WikiCoreError, code: ErrorCode
) -> JSONResponse:
    logger.error(
        "Request failed on internal error",
        extra={"code": code.value, "error_id": exc.error_id},
    )
    return await app_exception_handler(
        request,
        problem(
            code,
            _public_detail(exc.message, code),
            errors=[{"error_id": exc.error_id}],
        ),
    )


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    return await _wikicore_error(request, exc, ErrorCode.DATABASE_ERROR)


async def wikicore_error_handler(request: Request, exc: WikiCoreError) -> JSONResponse:
    return await _wikicore_error(request, exc, ErrorCode.INTERNAL_ERROR)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    return await app_exception_handler(
        request, problem(ErrorCode.VALIDATION_ERROR, "Request inválido", errors)
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception",
        exc_info=exc,
        extra={"error_type": type(exc).__name__},
    )
    return await app_exception_handler(
        request,
        problem(
            ErrorCode.INTERNAL_ERROR,
            _public_detail(str(exc) or type(exc).__name__, ErrorCode.INTERNAL_ERROR),
        ),
    )


def register_exception_handlers(app) -> None:
    """Específicos primero; Exception queda como fallback."""
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(WikiCoreError, wikicore_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
