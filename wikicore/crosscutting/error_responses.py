"""
===============================================================================
MÓDULO: Respuestas de error (RFC 7807 / Problem Details)
===============================================================================

Todo error HTTP sale como application/problem+json con un `code` estable.
El cliente distingue por code, no por texto:
  - FORBIDDEN vs SHARE_EXPIRED en el link público (403 vs 410).
  - INTEGRITY_ERROR (500): el árbol está corrupto. Nunca se degrada a 403,
    así el operador lo ve como falla del servidor.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  ErrorCode + AppHTTPException + app_exception_handler

Responsabilidades:
  - Catálogo de códigos con su status HTTP (_STATUS_BY_CODE).
  - Factories por código para routers y handlers.
  - Handler FastAPI que arma el ErrorDetail con instance y request_id.
  - Respuestas de error para el OpenAPI.

Colaboradores:
  - crosscutting/middleware.py (request.state.request_id)
  - api/exception_handlers.py
  - interfaces/api/http/error_mapping.py
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

PROBLEM_JSON = "application/problem+json"


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    SHARE_EXPIRED = "SHARE_EXPIRED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    INTEGRITY_ERROR = "INTEGRITY_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.CONFLICT: 409,
    ErrorCode.SHARE_EXPIRED: 410,
    ErrorCode.INTERNAL_ERROR: 500,
    ErrorCode.INTEGRITY_ERROR: 500,
    ErrorCode.DATABASE_ERROR: 503,
}


class ErrorDetail(BaseModel):
    """Problem Details + `code` estable + `errors` opcionales."""

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


class AppHTTPException(HTTPException):
    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code
        self.errors = errors


def problem(
    code: ErrorCode, detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException(_STATUS_BY_CODE[code], code, detail, errors)


def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return problem(ErrorCode.VALIDATION_ERROR, detail, errors)


def unauthorized(detail: str = "Autenticación requerida") -> AppHTTPException:
    exc = problem(ErrorCode.UNAUTHORIZED, detail)
    exc.headers = {"WWW-Authenticate": "Bearer"}
    return exc


def forbidden(detail: str = "Acceso denegado") -> AppHTTPException:
    return problem(ErrorCode.FORBIDDEN, detail)


def not_found(resource: str, identifier: str) -> AppHTTPException:
    return problem(ErrorCode.NOT_FOUND, f"{resource} '{identifier}' no encontrado")


def conflict(detail: str) -> AppHTTPException:
    return problem(ErrorCode.CONFLICT, detail)


def share_expired(detail: str = "El enlace compartido expiró") -> AppHTTPException:
    return problem(ErrorCode.SHARE_EXPIRED, detail)


def integrity_error(
    detail: str = "Inconsistencia detectada en el árbol de documentos",
) -> AppHTTPException:
    return problem(ErrorCode.INTEGRITY_ERROR, detail)


def internal_error(detail: str = "Ocurrió un error inesperado") -> AppHTTPException:
    return problem(ErrorCode.INTERNAL_ERROR, detail)


def _openapi_problem(description: str) -> dict[str, Any]:
    return {
        "description": description,
        "model": ErrorDetail,
        "content": {PROBLEM_JSON: {"schema": {"$ref": "#/components/schemas/ErrorDetail"}}},
    }


OPENAPI_ERROR_RESPONSES = {
    401: _openapi_problem("Anonymous actor on an authenticated route"),
    403: _openapi_problem("Capability not held / share credentials rejected"),
    404: _openapi_problem("Document or wiki not found"),
    409: _openapi_problem("Conflicting state (duplicate grant, move cycle, owner)"),
    410: _openapi_problem("Share link expired"),
    422: _openapi_problem("Invalid request"),
    500: _openapi_problem("Document tree integrity fault"),
    503: _openapi_problem("Document store unavailable"),
}


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    request_id = getattr(getattr(request, "state", None), "request_id", None)
    errors = list(exc.errors or [])
    if request_id:
        errors.append({"request_id": request_id})

    body = ErrorDetail(
        type=f"about:blank/{exc.code.value.lower()}",
        title=exc.code.value.replace("_", " ").title(),
        status=exc.status_code,
        detail=str(exc.detail),
        code=exc.code,
        instance=str(request.url),
        errors=errors or None,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=getattr(exc, "headers", None),
        media_type=PROBLEM_JSON,
    )
